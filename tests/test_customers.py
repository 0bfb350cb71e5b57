"""
Test suite for customers module

Tests account opening, lookups, balances, passwords and transfers.
"""

import pytest
from decimal import Decimal

from retail_bank.accounts import SavingsAccount, CheckingAccount
from retail_bank.config import BankConfig
from retail_bank.customers import Customer, TransferResult
from retail_bank.errors import (
    AccountNotFound, InvalidAmount, SameAccountTransfer, UnknownAccountType, WithdrawalDenied
)
from retail_bank.sequences import SequenceGenerator
from retail_bank.transactions import TransactionType


def history_sum(account):
    return sum((t.balance_effect for t in account.transactions), Decimal("0"))


@pytest.fixture
def customer():
    return Customer(
        customer_id=1,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="analytical-engine",
        config=BankConfig()
    )


class TestCustomerProfile:
    """Test basic customer properties"""

    def test_profile(self, customer):
        assert customer.customer_id == 1
        assert customer.full_name == "Ada Lovelace"
        assert customer.email == "ada@example.com"
        assert customer.is_active
        assert customer.account_count == 0
        assert customer.get_total_balance() == Decimal("0")

    def test_verify_password(self, customer):
        assert customer.verify_password("analytical-engine")
        assert not customer.verify_password("difference-engine")
        assert not customer.verify_password("")

    def test_password_not_stored_in_plain_text(self, customer):
        assert "analytical-engine" not in vars(customer).values()

    def test_customer_info(self, customer):
        customer.open_account("savings", 500)
        customer.open_account("checking", 120)

        info = customer.customer_info()
        assert info["customer_id"] == 1
        assert info["name"] == "Ada Lovelace"
        assert info["email"] == "ada@example.com"
        assert info["account_count"] == 2
        assert info["total_balance"] == Decimal("620")
        assert info["member_since"] == customer.created_date.date()


class TestOpenAccount:
    """Test opening accounts"""

    def test_open_savings(self, customer):
        account = customer.open_account("savings", Decimal("250"))
        assert isinstance(account, SavingsAccount)
        assert account.customer_id == 1
        assert account.balance == Decimal("250")
        assert customer.get_account(account.account_number) is account

        opening = account.transactions[0]
        assert opening.transaction_type == TransactionType.ACCOUNT_OPENING
        assert opening.amount == Decimal("250")

    @pytest.mark.parametrize("type_name", ["checking", "Checking", "CHECKING"])
    def test_type_is_case_insensitive(self, customer, type_name):
        assert isinstance(customer.open_account(type_name), CheckingAccount)

    def test_unknown_type(self, customer):
        with pytest.raises(UnknownAccountType, match="Unknown account type: brokerage"):
            customer.open_account("brokerage", 100)
        assert customer.account_count == 0

    def test_negative_initial_deposit(self, customer):
        with pytest.raises(InvalidAmount):
            customer.open_account("checking", -20)
        assert customer.account_count == 0

    def test_zero_initial_deposit_recorded(self, customer):
        account = customer.open_account("checking")
        assert account.transaction_count == 1
        assert account.transactions[0].amount == Decimal("0")

    def test_account_numbers_sequential(self, customer):
        first = customer.open_account("savings", 100)
        second = customer.open_account("checking", 100)
        assert first.account_number == 1000
        assert second.account_number == 1001

    def test_injected_sequences(self):
        account_numbers = SequenceGenerator(5000)
        transaction_ids = SequenceGenerator(70)
        customer = Customer(
            2, "Grace", "Hopper", "grace@example.com", "cobol",
            account_numbers=account_numbers, transaction_ids=transaction_ids,
            config=BankConfig()
        )
        account = customer.open_account("checking", 10)
        assert account.account_number == 5000
        assert account.transactions[0].id == 70
        assert account_numbers.peek() == 5001

    def test_get_accounts_insertion_order(self, customer):
        opened = [
            customer.open_account("checking", 10),
            customer.open_account("savings", 200),
            customer.open_account("checking", 30),
        ]
        assert customer.get_accounts() == opened
        assert customer.get_total_balance() == Decimal("240")

    def test_get_missing_account(self, customer):
        assert customer.get_account(9999) is None


class TestTransfer:
    """Test transfers between a customer's accounts"""

    def test_transfer_moves_money(self, customer):
        source = customer.open_account("checking", 500)
        target = customer.open_account("savings", 200)

        result = customer.transfer(source.account_number, target.account_number, Decimal("150"))

        assert result == TransferResult(from_balance=Decimal("350"), to_balance=Decimal("350"))
        assert source.balance == Decimal("350")
        assert target.balance == Decimal("350")

    def test_transfer_adds_two_records_per_side(self, customer):
        source = customer.open_account("checking", 500)
        target = customer.open_account("checking", 0)

        customer.transfer(source.account_number, target.account_number, 100)

        source_types = [t.transaction_type for t in source.transactions[1:]]
        target_types = [t.transaction_type for t in target.transactions[1:]]
        assert source_types == [TransactionType.WITHDRAWAL, TransactionType.TRANSFER_OUT]
        assert target_types == [TransactionType.DEPOSIT, TransactionType.TRANSFER_IN]
        assert source.transactions[-1].description == f"Transferred to account {target.account_number}"
        assert target.transactions[-1].description == f"Received from account {source.account_number}"

        assert source.balance == history_sum(source)
        assert target.balance == history_sum(target)

    def test_transfer_counts_against_daily_limit(self, customer):
        source = customer.open_account("checking", 3000)
        target = customer.open_account("checking", 0)

        customer.transfer(source.account_number, target.account_number, 800)
        with pytest.raises(WithdrawalDenied):
            customer.transfer(source.account_number, target.account_number, 300)
        assert source.today_withdrawn == Decimal("800")

    def test_failed_withdrawal_leaves_accounts_unchanged(self, customer):
        source = customer.open_account("savings", 300)
        target = customer.open_account("checking", 50)

        with pytest.raises(WithdrawalDenied):
            customer.transfer(source.account_number, target.account_number, 250)

        assert source.balance == Decimal("300")
        assert target.balance == Decimal("50")
        assert source.transaction_count == 1
        assert target.transaction_count == 1

    def test_invalid_amount(self, customer):
        source = customer.open_account("checking", 300)
        target = customer.open_account("checking", 50)
        with pytest.raises(InvalidAmount):
            customer.transfer(source.account_number, target.account_number, 0)

    def test_missing_account(self, customer):
        source = customer.open_account("checking", 300)
        with pytest.raises(AccountNotFound):
            customer.transfer(source.account_number, 4242, 10)
        with pytest.raises(AccountNotFound):
            customer.transfer(4242, source.account_number, 10)

    def test_same_account(self, customer):
        source = customer.open_account("checking", 300)
        with pytest.raises(SameAccountTransfer):
            customer.transfer(source.account_number, source.account_number, 10)
        assert source.transaction_count == 1

    def test_failed_deposit_leg_is_reversed(self, customer, monkeypatch):
        source = customer.open_account("checking", 500)
        target = customer.open_account("checking", 0)

        def broken_deposit(amount):
            raise RuntimeError("deposit unavailable")

        monkeypatch.setattr(target, "deposit", broken_deposit)

        with pytest.raises(RuntimeError, match="deposit unavailable"):
            customer.transfer(source.account_number, target.account_number, 200)

        assert source.balance == Decimal("500")
        assert source.today_withdrawn == Decimal("0")
        assert source.balance == history_sum(source)
        assert [t.transaction_type for t in source.transactions[1:]] == [
            TransactionType.WITHDRAWAL, TransactionType.DEPOSIT
        ]
        assert target.balance == Decimal("0")
        assert target.transaction_count == 1
