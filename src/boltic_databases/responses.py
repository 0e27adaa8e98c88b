# Boltic Databases SDK
# File: responses.py
# Version: v3

"""Response envelopes returned by every SDK operation.

A result is always exactly one of:

- success:  ``{"data": ..., "message"?: str}``
- list:     ``{"data": [...], "pagination": {...}, "message"?: str}``
- error:    ``{"data": {}, "error": {"code", "message", "meta"}}``

``is_error`` and ``is_list_result`` are the only way the rest of the SDK
branches on result kind. ``normalize`` never raises: anything it cannot
classify becomes the UNKNOWN_ERROR envelope.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

Result = Dict[str, Any]

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred"
UNKNOWN_ERROR_META = "Unknown error type"


def is_error(result: Any) -> bool:
    """True iff the envelope carries an ``error`` key."""
    return isinstance(result, Mapping) and "error" in result


def is_list_result(result: Any) -> bool:
    """True iff the envelope carries a ``pagination`` key."""
    return isinstance(result, Mapping) and "pagination" in result


# ---------------------------------------------------------------------------
# Envelope constructors
# ---------------------------------------------------------------------------


def success(data: Any, message: Optional[str] = None) -> Result:
    out: Result = {"data": data}
    if message is not None:
        out["message"] = message
    return out


def list_result(
    data: Iterable[Any],
    pagination: Optional[Mapping[str, Any]] = None,
    message: Optional[str] = None,
) -> Result:
    out: Result = {"data": list(data)}
    if pagination is not None:
        out["pagination"] = normalize_pagination(pagination)
    if message is not None:
        out["message"] = message
    return out


def error_result(
    code: Optional[str],
    message: Optional[str],
    meta: Optional[Iterable[Any]] = None,
) -> Result:
    """Build an error envelope for failures detected on the client side."""
    error: Dict[str, Any] = {}
    if code is not None:
        error["code"] = str(code)
    if message is not None:
        error["message"] = str(message)
    error["meta"] = _coerce_meta(meta) if meta is not None else []
    return {"data": {}, "error": error}


def unknown_error() -> Result:
    return {
        "data": {},
        "error": {
            "code": UNKNOWN_ERROR_CODE,
            "message": UNKNOWN_ERROR_MESSAGE,
            "meta": [UNKNOWN_ERROR_META],
        },
    }


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _coerce_meta(meta: Any) -> List[str]:
    if isinstance(meta, (list, tuple)):
        return [str(m) for m in meta]
    if isinstance(meta, str):
        return [meta]
    return [str(meta)]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compute_total_pages(total_count: Any, per_page: Any) -> int:
    """``ceil(total_count / per_page)``, or 0 when either side is unusable."""
    if not _is_number(total_count) or not _is_number(per_page) or per_page <= 0:
        return 0
    if isinstance(total_count, int) and isinstance(per_page, int):
        return max(0, -(-total_count // per_page))
    try:
        if not math.isfinite(total_count) or not math.isfinite(per_page):
            return 0
        return max(0, int(math.ceil(total_count / per_page)))
    except (OverflowError, ValueError):
        # Huge ints do not fit a float; tiny divisors overflow to inf.
        return 0


def normalize_pagination(pagination: Mapping[str, Any]) -> Dict[str, Any]:
    page = dict(pagination)
    if page.get("total_pages") is None:
        page["total_pages"] = compute_total_pages(
            page.get("total_count"), page.get("per_page")
        )
    page.setdefault("type", "page")
    return page


def _error_from_body(body: Any) -> Result:
    if not isinstance(body, Mapping):
        return unknown_error()

    error = body.get("error")

    if isinstance(error, Mapping) and error:
        out: Dict[str, Any] = {}
        if error.get("code") is not None:
            out["code"] = str(error["code"])
        if error.get("message") is not None:
            out["message"] = str(error["message"])
        if error.get("meta") is not None:
            out["meta"] = _coerce_meta(error["meta"])
        return {"data": {}, "error": out}

    # Older endpoints answer {"error": "<message>", "code": "..."}.
    if isinstance(error, str) and error:
        out = {"message": error}
        if body.get("code") is not None:
            out["code"] = str(body["code"])
        if body.get("details") is not None:
            out["meta"] = _coerce_meta(body["details"])
        return {"data": {}, "error": out}

    return unknown_error()


def normalize(raw_body: Any, http_status: int = 200) -> Result:
    """Classify a decoded response body into one canonical envelope."""
    failed = not _is_number(http_status) or http_status >= 400

    if failed or (isinstance(raw_body, Mapping) and "error" in raw_body):
        return _error_from_body(raw_body)

    if not isinstance(raw_body, Mapping):
        return unknown_error()

    message = raw_body.get("message")
    message = message if isinstance(message, str) else None

    if "pagination" in raw_body:
        data = raw_body.get("data")
        if data is None:
            items: List[Any] = []
        elif isinstance(data, (list, tuple)):
            items = list(data)
        else:
            items = [data]

        pagination = raw_body.get("pagination")
        return list_result(
            items,
            pagination if isinstance(pagination, Mapping) else {},
            message,
        )

    return success(raw_body.get("data"), message)
