"""Helpers shared by the schema modules."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


def to_column_values(
    data: BaseModel,
    json_fields: set[str],
    exclude_unset: bool = False,
) -> dict[str, Any]:
    """Dump a schema into keyword arguments for an ORM model.

    Fields listed in ``json_fields`` are dumped in JSON mode so Decimals and
    nested models can be written to JSON columns; enums become their values.
    """
    values = data.model_dump(exclude_unset=exclude_unset)
    include = json_fields & values.keys()
    if include:
        values.update(data.model_dump(mode="json", include=include, exclude_unset=exclude_unset))
    for key, value in values.items():
        if isinstance(value, Enum):
            values[key] = value.value
    return values


def merged_values(row: Any, data: BaseModel, fields: set[str]) -> dict[str, Any]:
    """The values ``fields`` would hold on ``row`` once the partial ``data`` is applied."""
    values = {name: getattr(row, name) for name in fields}
    values.update(data.model_dump(include=fields, exclude_unset=True))
    return values
