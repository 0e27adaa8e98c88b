# Boltic Databases SDK
# File: filters.py
# Version: v3

"""Filter translation between the SDK's filter syntaxes and the wire format.

Three inputs are accepted wherever a resource takes a filter:

- a nested where-mapping, e.g. ``{"age": {"$gt": 30}, "name": "Widget"}``
- a list of canonical filters, e.g.
  ``[{"field": "age", "operator": ">", "values": [30]}]``
- a :class:`FilterBuilder` accumulated with chained calls

All of them normalize to the canonical list of ``{field, operator, values}``
dicts the Tables API expects. Filters in a list are AND-combined.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import FilterValidationError, UnsupportedOperatorError

Filter = Dict[str, Any]
WhereCondition = Dict[str, Any]
FilterInput = Union[Mapping[str, Any], Sequence[Mapping[str, Any]], "FilterBuilder", None]

FIELD_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Value-shape classes.
ONE = "one"
PAIR = "pair"
MANY = "many"
NONE = "none"


@dataclass(frozen=True)
class OperatorSpec:
    """One row of the operator table: where-key, wire operator, value shape."""

    key: str
    wire: str
    shape: str = ONE


OPERATORS: Tuple[OperatorSpec, ...] = (
    OperatorSpec("$eq", "="),
    OperatorSpec("$ne", "!="),
    OperatorSpec("$gt", ">"),
    OperatorSpec("$gte", ">="),
    OperatorSpec("$lt", "<"),
    OperatorSpec("$lte", "<="),
    OperatorSpec("$like", "like"),
    OperatorSpec("$notLike", "not like"),
    OperatorSpec("$ilike", "ilike"),
    OperatorSpec("$startsWith", "starts with"),
    OperatorSpec("$in", "in", MANY),
    OperatorSpec("$notIn", "not in", MANY),
    OperatorSpec("$between", "between", PAIR),
    OperatorSpec("$isNull", "is null", NONE),
    OperatorSpec("$isNotNull", "is not null", NONE),
    OperatorSpec("$isEmpty", "is empty", NONE),
    OperatorSpec("$arrayContains", "@>"),
    OperatorSpec("$arrayNotContains", "not @>"),
    OperatorSpec("$any", "any"),
    OperatorSpec("$isOneOfArray", "is one of", MANY),
    OperatorSpec("$dropdownItemStartsWith", "dropdown item starts with"),
    OperatorSpec("$within", "within"),
)

# Both directions derive from OPERATORS so they cannot drift apart.
_BY_KEY: Dict[str, OperatorSpec] = {op.key: op for op in OPERATORS}
_BY_WIRE: Dict[str, OperatorSpec] = {op.wire: op for op in OPERATORS}


def operator_for_key(key: str) -> OperatorSpec:
    """Return the operator row for a where-key such as ``$gte``."""
    spec = _BY_KEY.get(key)
    if spec is None:
        raise UnsupportedOperatorError(key)
    return spec


def operator_for_wire(wire: Any) -> OperatorSpec:
    """Return the operator row for a wire operator such as ``>=``.

    Lookup is case-insensitive because the service echoes operators in
    upper case (``LIKE``, ``IN``) on some endpoints.
    """
    spec = _BY_WIRE.get(wire.strip().lower()) if isinstance(wire, str) else None
    if spec is None:
        raise UnsupportedOperatorError(str(wire), f"Unsupported API operator: {wire}")
    return spec


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _make_filter(field: str, operator: str, values: Iterable[Any]) -> Filter:
    return {"field": field, "operator": operator, "values": list(values)}


# ---------------------------------------------------------------------------
# where-mapping <-> canonical filters
# ---------------------------------------------------------------------------


def from_where(where: Mapping[str, Any]) -> List[Filter]:
    """Translate a nested where-mapping into canonical filters.

    A bare value means equality. A nested mapping holds one or more
    operator keys; each key becomes its own filter. Nothing is returned
    unless the whole mapping translates.
    """
    if not isinstance(where, Mapping):
        raise FilterValidationError(
            [f"where condition must be a mapping, got {type(where).__name__}"]
        )

    filters: List[Filter] = []
    for field, condition in where.items():
        if not isinstance(condition, Mapping):
            filters.append(_make_filter(field, "=", [condition]))
            continue

        for key, value in condition.items():
            spec = operator_for_key(key)

            if spec.shape == PAIR:
                if not _is_sequence(value) or len(value) != 2:
                    raise FilterValidationError(
                        [f"'{key}' on field '{field}' requires a sequence of exactly 2 values"]
                    )
                values = list(value)
            elif spec.shape == MANY:
                if not _is_sequence(value):
                    raise FilterValidationError(
                        [f"'{key}' on field '{field}' requires a sequence of values"]
                    )
                values = list(value)
            elif spec.shape == NONE:
                values = []
            else:
                values = [value]

            filters.append(_make_filter(field, spec.wire, values))

    return filters


def to_where(filters: Sequence[Mapping[str, Any]]) -> WhereCondition:
    """Translate canonical filters back into a nested where-mapping.

    Equality always comes back as an explicit ``$eq`` key: the wire form
    does not record whether the caller used the bare-value shorthand.
    """
    where: WhereCondition = {}
    for item in filters:
        spec = operator_for_wire(item.get("operator"))
        values = list(item.get("values") or [])
        field_condition = where.setdefault(item.get("field"), {})

        if spec.shape in (PAIR, MANY):
            field_condition[spec.key] = values
        elif spec.shape == NONE:
            field_condition[spec.key] = True
        else:
            field_condition[spec.key] = values[0] if values else None

    return where


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_filter_values(operator: str, values: Sequence[Any]) -> bool:
    """Check a value list against the arity of a known wire operator."""
    shape = operator_for_wire(operator).shape
    if shape == PAIR:
        return len(values) == 2
    if shape == MANY:
        return len(values) > 0
    if shape == NONE:
        return len(values) == 0
    return len(values) == 1


def validate(filters: Sequence[Mapping[str, Any]]) -> None:
    """Raise FilterValidationError listing every structural problem found."""
    if not isinstance(filters, (list, tuple)):
        raise FilterValidationError(
            [f"filters must be a list, got {type(filters).__name__}"]
        )

    violations: List[str] = []
    for index, item in enumerate(filters):
        if not isinstance(item, Mapping):
            violations.append(f"Filter at index {index} must be a mapping")
            continue

        field = item.get("field")
        if not isinstance(field, str) or not field:
            violations.append(f"Filter at index {index} missing required field")
        elif not FIELD_PATTERN.match(field):
            violations.append(f"Filter at index {index} has invalid field name '{field}'")

        operator = item.get("operator")
        if operator is None:
            violations.append(f"Filter at index {index} missing required operator")
        elif not isinstance(operator, str):
            violations.append(f"Filter at index {index} operator must be a string")

        values = item.get("values")
        if not isinstance(values, list):
            violations.append(f"Filter at index {index} values must be an array")
            continue

        if not isinstance(operator, str):
            continue

        wire = operator.strip().lower()
        if wire == "between" and len(values) != 2:
            violations.append(
                f"Filter at index {index} 'between' requires exactly 2 values, got {len(values)}"
            )
        elif wire in ("in", "not in") and not values:
            violations.append(
                f"Filter at index {index} '{wire}' requires at least 1 value"
            )

    if violations:
        raise FilterValidationError(violations)


def normalize_filters(filters: FilterInput) -> List[Filter]:
    """Turn any accepted filter input into a fresh list of canonical filters."""
    if filters is None:
        return []
    if isinstance(filters, FilterBuilder):
        return filters.build()
    if isinstance(filters, Mapping):
        return from_where(filters)
    if isinstance(filters, (list, tuple)):
        out: List[Filter] = []
        bad: List[str] = []
        for index, item in enumerate(filters):
            if isinstance(item, Mapping) and {"field", "operator", "values"} <= set(item):
                values = item["values"]
                out.append(
                    {
                        "field": item["field"],
                        "operator": item["operator"],
                        "values": list(values) if _is_sequence(values) else values,
                    }
                )
            else:
                bad.append(
                    f"Filter at index {index} is not a {{field, operator, values}} mapping"
                )
        if bad:
            raise FilterValidationError(bad)
        return out

    raise FilterValidationError(
        [f"Unsupported filter input of type {type(filters).__name__}"]
    )


def build_api_filters(
    where_or_filters: FilterInput,
    where_operator: str = "AND",
) -> Dict[str, Any]:
    """Normalize and validate filters into a list-request fragment."""
    filters = normalize_filters(where_or_filters)
    validate(filters)

    op = str(where_operator).upper()
    if op not in ("AND", "OR"):
        raise FilterValidationError([f"where_operator must be AND or OR, got '{where_operator}'"])

    return {"filters": filters, "where_operator": op}


# ---------------------------------------------------------------------------
# Fluent builder
# ---------------------------------------------------------------------------


class FilterBuilder:
    """Accumulates canonical filters through chained calls.

    Each call returns a new builder; the receiver is never modified, so a
    builder can be shared or reused after ``build()``.
    """

    __slots__ = ("_filters",)

    def __init__(self, filters: Iterable[Mapping[str, Any]] = ()) -> None:
        self._filters: Tuple[Filter, ...] = tuple(
            _make_filter(f["field"], f["operator"], f["values"]) for f in filters
        )

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"FilterBuilder({list(self._filters)!r})"

    def _add(self, field: str, operator: str, values: Iterable[Any]) -> "FilterBuilder":
        return FilterBuilder(self._filters + (_make_filter(field, operator, values),))

    def where(self, conditions: Mapping[str, Any]) -> "FilterBuilder":
        """Append the translation of a where-mapping."""
        return FilterBuilder(self._filters + tuple(from_where(conditions)))

    def equals(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "=", [value])

    def not_equals(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "!=", [value])

    def greater_than(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, ">", [value])

    def greater_than_or_equal(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, ">=", [value])

    def less_than(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "<", [value])

    def less_than_or_equal(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "<=", [value])

    def like(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "like", [value])

    def not_like(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "not like", [value])

    def ilike(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "ilike", [value])

    def starts_with(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "starts with", [value])

    def in_(self, field: str, values: Iterable[Any]) -> "FilterBuilder":
        return self._add(field, "in", values)

    def not_in(self, field: str, values: Iterable[Any]) -> "FilterBuilder":
        return self._add(field, "not in", values)

    def between(self, field: str, start: Any, end: Any) -> "FilterBuilder":
        return self._add(field, "between", [start, end])

    def is_null(self, field: str) -> "FilterBuilder":
        return self._add(field, "is null", [])

    def is_not_null(self, field: str) -> "FilterBuilder":
        return self._add(field, "is not null", [])

    def is_empty(self, field: str) -> "FilterBuilder":
        return self._add(field, "is empty", [])

    def array_contains(self, field: str, value: Any) -> "FilterBuilder":
        return self._add(field, "@>", [value])

    def clear(self) -> "FilterBuilder":
        return FilterBuilder()

    def build(self) -> List[Filter]:
        """Return a copy of the accumulated filters, in call order."""
        return [_make_filter(f["field"], f["operator"], f["values"]) for f in self._filters]


def create_filter() -> FilterBuilder:
    """Start an empty FilterBuilder."""
    return FilterBuilder()
