"""Tests for product rules and domain exceptions."""

import pytest

from productstore.domain.exceptions import (
    DomainError,
    DuplicateError,
    InternalError,
    NotAuthorizedError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from productstore.domain.product import (
    compute_total_value,
    is_valid_object_id,
    new_object_id,
    normalize_name,
)


class TestComputeTotalValue:
    """Tests for compute_total_value."""

    def test_price_times_quantity(self) -> None:
        assert compute_total_value(25, 4) == 100

    def test_fractional_price(self) -> None:
        assert compute_total_value(19.99, 3) == 19.99 * 3

    def test_zero_price(self) -> None:
        assert compute_total_value(0, 7) == 0


class TestObjectIds:
    """Tests for identifier helpers."""

    def test_new_ids_are_valid_and_unique(self) -> None:
        ids = {new_object_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(is_valid_object_id(i) for i in ids)

    @pytest.mark.parametrize(
        "value",
        ["", None, "abc", "z" * 24, "0123456789abcdef0123456", "0123456789abcdef012345678"],
    )
    def test_rejects_malformed(self, value) -> None:
        assert not is_valid_object_id(value)

    def test_accepts_mixed_case_hex(self) -> None:
        assert is_valid_object_id("0123456789ABCDEF01234567")


def test_normalize_name_is_case_and_space_insensitive() -> None:
    assert normalize_name("  Wireless Mouse ") == normalize_name("wireless mouse")


class TestExceptions:
    """Tests for the exception taxonomy."""

    def test_status_codes(self) -> None:
        assert ValidationError(["bad"]).status_code == 400
        assert DuplicateError("name", "x").status_code == 400
        assert UnauthorizedError("no").status_code == 401
        assert NotAuthorizedError("id").status_code == 403
        assert NotFoundError("id").status_code == 404
        assert UpstreamError("down").status_code == 502
        assert InternalError("oops").status_code == 500

    def test_validation_error_joins_messages(self) -> None:
        error = ValidationError(["page must be a positive integer", "limit is wrong"])
        assert error.message == "page must be a positive integer, limit is wrong"
        assert error.errors == ["page must be a positive integer", "limit is wrong"]

    def test_all_inherit_domain_error(self) -> None:
        assert issubclass(NotAuthorizedError, DomainError)
        assert issubclass(UpstreamError, DomainError)
