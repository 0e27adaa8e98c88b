# Boltic Databases SDK
# File: tests/test_responses.py
# Version: v2

import pytest

from boltic_databases.responses import (
    compute_total_pages,
    error_result,
    is_error,
    is_list_result,
    normalize,
)


def test_structured_error_body_is_an_error():
    result = normalize(
        {"error": {"code": 404, "message": "Table not found", "meta": "tables"}}, 404
    )

    assert is_error(result)
    assert not is_list_result(result)
    assert result["error"] == {
        "code": "404",
        "message": "Table not found",
        "meta": ["tables"],
    }


def test_legacy_string_error_body():
    result = normalize({"error": "boom", "code": "BAD", "details": ["x"]}, 400)

    assert is_error(result)
    assert result["error"] == {"message": "boom", "code": "BAD", "meta": ["x"]}


def test_error_key_wins_even_with_success_status():
    result = normalize({"error": {"code": "X", "message": "m"}, "data": [1]}, 200)
    assert is_error(result)


@pytest.mark.parametrize("body", [None, "oops", 42, ["a", "b"]])
def test_unclassifiable_bodies_become_unknown_error(body):
    result = normalize(body, 200)

    assert is_error(result)
    assert result["error"] == {
        "code": "UNKNOWN_ERROR",
        "message": "An unexpected error occurred",
        "meta": ["Unknown error type"],
    }


def test_failed_status_without_error_payload_is_unknown_error():
    result = normalize({"data": {"id": 1}}, 500)
    assert is_error(result)
    assert result["error"]["code"] == "UNKNOWN_ERROR"


def test_list_result_fills_total_pages():
    result = normalize(
        {
            "data": [{"id": 1}, {"id": 2}],
            "pagination": {"total_count": 45, "per_page": 10, "current_page": 1},
        }
    )

    assert is_list_result(result)
    assert not is_error(result)
    assert result["pagination"]["total_pages"] == 5
    assert result["pagination"]["type"] == "page"
    assert result["data"] == [{"id": 1}, {"id": 2}]


def test_list_result_keeps_server_total_pages():
    result = normalize(
        {"data": [], "pagination": {"total_count": 45, "per_page": 10, "total_pages": 7}}
    )
    assert result["pagination"]["total_pages"] == 7


def test_single_result_with_message():
    result = normalize({"data": {"id": "t1"}, "message": "Created"}, 201)

    assert not is_error(result)
    assert not is_list_result(result)
    assert result == {"data": {"id": "t1"}, "message": "Created"}


def test_discriminators_ignore_non_mappings():
    assert not is_error(None)
    assert not is_error("error")
    assert not is_list_result([1, 2])


def test_compute_total_pages_edges():
    assert compute_total_pages(0, 10) == 0
    assert compute_total_pages(1, 10) == 1
    assert compute_total_pages(10, 0) == 0
    assert compute_total_pages(None, 10) == 0


def test_error_result_builds_client_side_envelope():
    result = error_result("VALIDATION_ERROR", "bad", ["a", 1])
    assert result == {
        "data": {},
        "error": {"code": "VALIDATION_ERROR", "message": "bad", "meta": ["a", "1"]},
    }


def test_failed_status_with_empty_body_is_unknown_error():
    result = normalize({}, 500)

    assert is_error(result)
    assert result["error"]["code"] == "UNKNOWN_ERROR"
    assert result["data"] == {}


@pytest.mark.parametrize(
    "pagination",
    [
        {"total_count": 10**400, "per_page": 10},
        {"total_count": 10**400, "per_page": 2.5},
        {"total_count": 5, "per_page": 1e-320},
    ],
)
def test_extreme_pagination_numbers_do_not_raise(pagination):
    result = normalize({"data": [], "pagination": pagination}, 200)

    assert is_list_result(result)
    assert isinstance(result["pagination"]["total_pages"], int)


def test_huge_integer_counts_use_exact_division():
    assert compute_total_pages(10**400, 10) == 10**399
    assert compute_total_pages(5, 1e-320) == 0


@pytest.mark.parametrize(
    "body, status",
    [
        ({"data": {"id": "t1"}, "message": "ok"}, 200),
        ({"data": [{"id": 1}], "pagination": {"total_count": 3, "per_page": 1}}, 200),
        ({"error": {"code": "X", "message": "m"}}, 400),
        ("not json", 502),
    ],
)
def test_renormalizing_a_result_keeps_its_kind(body, status):
    once = normalize(body, status)
    twice = normalize(once, 200)

    assert is_error(twice) == is_error(once)
    assert is_list_result(twice) == is_list_result(once)
    assert twice == once
