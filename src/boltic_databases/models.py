# Boltic Databases SDK
# File: models.py
# Version: v3

"""Column (field) definitions and the payload helpers built on them."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

FIELD_TYPES = (
    "text",
    "long-text",
    "number",
    "currency",
    "checkbox",
    "dropdown",
    "email",
    "phone-number",
    "link",
    "json",
    "date-time",
    "vector",
    "halfvec",
    "sparsevec",
)

VECTOR_TYPES = ("vector", "halfvec", "sparsevec")

INDEX_METHODS = ("btree", "hash", "spgist", "gin", "brin")

MAX_FIELD_ORDER = 2147483647

TABLE_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
COLUMN_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass
class FieldDefinition:
    """One column of a table, as sent to the create/update endpoints.

    Only ``name`` and ``type`` are required; unset attributes are left out
    of the payload so the service applies its own defaults.
    """

    name: str
    type: str = "text"
    is_nullable: Optional[bool] = None
    is_primary_key: Optional[bool] = None
    is_unique: Optional[bool] = None
    is_indexed: Optional[bool] = None
    is_visible: Optional[bool] = None
    is_readonly: Optional[bool] = None
    field_order: Optional[int] = None
    description: Optional[str] = None
    default_value: Any = None

    # Type-specific attributes
    alignment: Optional[str] = None
    timezone: Optional[str] = None
    date_format: Optional[str] = None
    time_format: Optional[str] = None
    decimals: Optional[str] = None
    currency_format: Optional[str] = None
    selection_source: Optional[str] = None
    selectable_items: Optional[List[str]] = None
    multiple_selections: Optional[bool] = None
    phone_format: Optional[str] = None
    vector_dimension: Optional[int] = None

    # Anything the service accepts that is not modelled above.
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload = {k: v for k, v in asdict(self).items() if k != "extra" and v is not None}
        payload.update(self.extra)
        return payload


FieldLike = Union[FieldDefinition, Mapping[str, Any]]


def field_payload(item: FieldLike) -> Dict[str, Any]:
    """Return a fresh dict payload for a FieldDefinition or a mapping."""
    if isinstance(item, FieldDefinition):
        return item.to_payload()
    return dict(item)


def validate_field(payload: Mapping[str, Any]) -> List[str]:
    """Return a list of problems with a single field payload."""
    problems: List[str] = []
    name = payload.get("name")

    if not isinstance(name, str) or not name:
        problems.append("Field name is required")
    elif not COLUMN_NAME_PATTERN.match(name):
        problems.append(
            f"Field name '{name}' must start with a letter and contain only "
            "letters, digits and underscores"
        )

    ftype = payload.get("type")
    if ftype not in FIELD_TYPES:
        problems.append(f"Field '{name}' has unsupported type '{ftype}'")

    if ftype == "currency" and payload.get("currency_format") is not None:
        if not CURRENCY_PATTERN.match(str(payload["currency_format"])):
            problems.append(
                f"Field '{name}' currency_format must be a 3-letter ISO code"
            )

    if ftype in VECTOR_TYPES:
        dim = payload.get("vector_dimension")
        if not isinstance(dim, int) or isinstance(dim, bool) or dim <= 0:
            problems.append(f"Field '{name}' requires a positive vector_dimension")

    if ftype == "dropdown":
        items = payload.get("selectable_items")
        if items is not None and not isinstance(items, list):
            problems.append(f"Field '{name}' selectable_items must be a list")

    order = payload.get("field_order")
    if order is not None and (
        not isinstance(order, int) or order <= 0 or order >= MAX_FIELD_ORDER
    ):
        problems.append(
            f"Field order must be a number greater than 0 and less than {MAX_FIELD_ORDER}"
        )

    return problems


def apply_field_defaults(
    fields: Iterable[FieldLike],
    start_order: int = 1,
) -> List[Dict[str, Any]]:
    """Fill the defaults the service expects for new columns.

    Missing ``field_order`` values are assigned sequentially starting at
    ``start_order``.
    """
    processed: List[Dict[str, Any]] = []
    for offset, item in enumerate(fields):
        payload = field_payload(item)
        payload.setdefault("is_primary_key", False)
        payload.setdefault("is_unique", False)
        payload.setdefault("is_nullable", True)
        payload.setdefault("is_indexed", False)
        if payload.get("field_order") is None:
            payload["field_order"] = start_order + offset
        processed.append(payload)
    return processed


def project_fields(item: Any, fields: Optional[Iterable[str]]) -> Any:
    """Keep only the requested keys of a mapping (lists handled item-wise)."""
    if not fields:
        return item
    wanted = list(fields)
    if isinstance(item, list):
        return [project_fields(x, wanted) for x in item]
    if isinstance(item, Mapping):
        return {k: item[k] for k in wanted if k in item}
    return item
