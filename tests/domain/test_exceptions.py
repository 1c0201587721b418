"""Tests for error classification."""

import pytest

from trading.domain.exceptions import (
    BUSINESS_RULE,
    CONCURRENCY,
    INTEGRITY,
    NOT_FOUND,
    ConcurrencyConflictError,
    InsufficientBalanceError,
    InsufficientStockError,
    IntegrityViolationError,
    InvalidAmountError,
    MerchantNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    UserNotFoundError,
    error_kind,
)


class TestErrorKind:

    @pytest.mark.parametrize(
        "exc",
        [UserNotFoundError("x"), ProductNotFoundError("x"),
         MerchantNotFoundError("x"), OrderNotFoundError("x")],
    )
    def test_not_found(self, exc):
        assert error_kind(exc) == NOT_FOUND

    @pytest.mark.parametrize(
        "exc",
        [InsufficientStockError("x"), InsufficientBalanceError("x"), InvalidAmountError("x")],
    )
    def test_business_rule(self, exc):
        assert error_kind(exc) == BUSINESS_RULE

    def test_concurrency(self):
        assert error_kind(ConcurrencyConflictError("x")) == CONCURRENCY

    def test_integrity(self):
        assert error_kind(IntegrityViolationError("x")) == INTEGRITY

    def test_unknown_errors_count_as_integrity(self):
        assert error_kind(RuntimeError("x")) == INTEGRITY
