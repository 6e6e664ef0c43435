"""Conversion of configuration rows into typed rule snapshots."""

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def to_snapshots(rows: Iterable[Any], schema: type[M], kind: str) -> list[M]:
    """Validate ORM rows into ``schema`` snapshots.

    A row whose stored conditions no longer validate is skipped with a
    warning so one bad row cannot take pricing down.
    """
    snapshots: list[M] = []
    for row in rows:
        try:
            snapshots.append(schema.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping unusable %s %s: %s", kind, getattr(row, "id", "?"), exc)
    return snapshots
