"""Integration tests for the Deposit use case."""

import pytest

from trading.domain.exceptions import InvalidAmountError, ValidationError
from trading.domain.model.value_objects import Money
from tests.fakes import build_system


class TestDeposit:

    def test_first_deposit_opens_account(self):
        system = build_system()
        account = system.deposit.handle("u1", "100.00")
        assert account.id is not None
        assert account.balance == "100.00"
        assert system.users.find_by_username("u1").balance == Money.of("100.00")

    def test_deposits_accumulate(self):
        system = build_system()
        system.deposit.handle("u1", "100.00")
        account = system.deposit.handle("u1", "0.505")
        assert account.balance == "100.51"

    def test_same_account_reused(self):
        system = build_system()
        first = system.deposit.handle("u1", "1")
        second = system.deposit.handle("u1", "1")
        assert first.id == second.id
        assert len(system.users.list_all()) == 1

    def test_version_increments(self):
        system = build_system()
        system.deposit.handle("u1", "1")
        system.deposit.handle("u1", "1")
        assert system.users.find_by_username("u1").version == 2

    def test_non_positive_amount_rejected_without_creating_account(self):
        system = build_system()
        with pytest.raises(InvalidAmountError):
            system.deposit.handle("u1", "0")
        assert system.users.find_by_username("u1") is None

    def test_invalid_amount_rejected(self):
        system = build_system()
        with pytest.raises(InvalidAmountError):
            system.deposit.handle("u1", "abc")

    def test_blank_username_rejected(self):
        system = build_system()
        with pytest.raises(ValidationError):
            system.deposit.handle("  ", "10")
