"""``order_by`` query parameter handling for list endpoints."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from storefront.core.database import Base

DIRECTIONS = {"asc": asc, "desc": desc}


def parse_order_by(order_by: str | None, model: type[Base]) -> list[tuple[str, str]]:
    """Split ``"priority:desc,name"`` into ``[("priority", "desc"), ("name", "asc")]``.

    Terms naming a column the model does not have are dropped; an unknown
    direction reads as ascending.
    """
    terms: list[tuple[str, str]] = []
    if not order_by:
        return terms
    for term in order_by.split(","):
        name, _, direction = term.strip().partition(":")
        if not name or not hasattr(model, name):
            continue
        direction = direction.lower()
        terms.append((name, direction if direction in DIRECTIONS else "asc"))
    return terms


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Order a list query by the requested columns.

    Falls back to ``default_field`` when nothing usable was requested. The
    primary key is always appended so pages stay stable when sort values tie.
    """
    terms = parse_order_by(order_by, model) or [(default_field, default_direction)]
    if "id" not in {name for name, _ in terms}:
        terms.append(("id", "asc"))
    columns = [DIRECTIONS[direction](getattr(model, name)) for name, direction in terms]
    return query.order_by(*columns)
