"""Column types shared by the pricing tables."""

import uuid
from typing import Any

from sqlalchemy import Numeric, String, TypeDecorator
from sqlalchemy.engine import Dialect

# Amounts in the store currency
MONEY = Numeric(12, 2)
# Percentages and price multipliers
PERCENT = Numeric(5, 2)
# Kilograms, to the gram
WEIGHT = Numeric(10, 3)


class UUIDType(TypeDecorator[uuid.UUID]):
    """UUID stored as its 36-character text form, so SQLite and PostgreSQL agree."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        return None if value is None else str(uuid.UUID(str(value)))

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()
