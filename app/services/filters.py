"""Compile UI filter state into the vector index's metadata filter.

Filters are built as a small expression tree and only turned into the index's
JSON dialect by ``to_index_filter``, so the backend format lives in one place.
"""
import datetime as dt
from dataclasses import dataclass
from typing import Union

PUBLICATION_FIELD = "publication"
DATE_FIELD = "publication_date"


@dataclass(frozen=True)
class Equals:
    field: str
    value: str


@dataclass(frozen=True)
class Range:
    field: str
    gte: float | None = None
    lte: float | None = None


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple["FilterExpression", ...]


@dataclass(frozen=True)
class AllOf:
    clauses: tuple["FilterExpression", ...]


FilterExpression = Union[Equals, Range, AnyOf, AllOf]


def to_epoch_seconds(value: dt.datetime) -> int:
    # Naive values come from date pickers without an offset; read them as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return int(value.timestamp())


def publication_clause(publications: list[str]) -> FilterExpression | None:
    if not publications:
        return None
    if len(publications) == 1:
        return Equals(PUBLICATION_FIELD, publications[0])
    return AnyOf(tuple(Equals(PUBLICATION_FIELD, p) for p in publications))


def date_clause(
    date_from: dt.datetime | None = None,
    date_to: dt.datetime | None = None,
) -> Range | None:
    if date_from is None and date_to is None:
        return None
    return Range(
        DATE_FIELD,
        gte=to_epoch_seconds(date_from) if date_from is not None else None,
        lte=to_epoch_seconds(date_to) if date_to is not None else None,
    )


def compile_filter(
    publications: list[str],
    date_from: dt.datetime | None = None,
    date_to: dt.datetime | None = None,
) -> FilterExpression | None:
    """Build the filter tree for the selected publications and date range.

    Returns None when nothing is selected.
    """
    clauses = [
        c for c in (publication_clause(publications), date_clause(date_from, date_to)) if c is not None
    ]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return AllOf(tuple(clauses))


def to_index_filter(expr: FilterExpression | None) -> dict:
    """Serialize a filter tree into the index's metadata-filter JSON.

    A conjunction is flattened into one object when every branch is a plain
    field constraint on a distinct field. As soon as one branch is itself an
    operator (``$or``) the conjunction is kept explicit as ``$and``.
    """
    if expr is None:
        return {}

    if isinstance(expr, Equals):
        return {expr.field: expr.value}

    if isinstance(expr, Range):
        bounds = {}
        if expr.gte is not None:
            bounds["$gte"] = expr.gte
        if expr.lte is not None:
            bounds["$lte"] = expr.lte
        return {expr.field: bounds}

    if isinstance(expr, AnyOf):
        return {"$or": [to_index_filter(c) for c in expr.clauses]}

    if isinstance(expr, AllOf):
        parts = [to_index_filter(c) for c in expr.clauses]
        merged: dict = {}
        for part in parts:
            if any(key.startswith("$") or key in merged for key in part):
                return {"$and": parts}
            merged.update(part)
        return merged

    raise TypeError(f"Unsupported filter expression: {expr!r}")
