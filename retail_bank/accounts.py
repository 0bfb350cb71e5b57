"""
Account Module

Balance-holding accounts with type-specific withdrawal and interest/fee
rules. Every balance change is paired with a completed transaction appended
to the account's history, so the balance always equals the signed sum of
the history (see Transaction.balance_effect).
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional
from enum import Enum

from .config import BankConfig, get_config
from .errors import AbstractInstantiationError, InvalidAmount, WithdrawalDenied
from .logging_config import get_logger, log_action
from .sequences import SequenceGenerator
from .transactions import Amount, Transaction, TransactionType, to_decimal


logger = get_logger(__name__)


class AccountType(Enum):
    """Account variants"""
    SAVINGS = "savings"
    CHECKING = "checking"

    @classmethod
    def parse(cls, value: str) -> Optional['AccountType']:
        """Case-insensitive lookup; None for unknown names"""
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            return None


class Account(ABC):
    """
    Abstract account. Use SavingsAccount or CheckingAccount.

    The account records an ``account_opening`` transaction for its initial
    balance on construction, even when that balance is zero.
    """

    account_type: AccountType

    def __new__(cls, *args, **kwargs):
        if cls is Account:
            raise AbstractInstantiationError("Cannot instantiate abstract Account class")
        return super().__new__(cls)

    def __init__(
        self,
        customer_id: int,
        account_number: int,
        initial_balance: Amount = 0,
        transaction_ids: Optional[Callable[[], int]] = None,
        config: Optional[BankConfig] = None
    ):
        initial_balance = to_decimal(initial_balance)
        if initial_balance < 0:
            raise InvalidAmount("Initial deposit cannot be negative")

        config = config or get_config()
        self._account_number = account_number
        self._customer_id = customer_id
        self._balance = initial_balance
        self._transactions: List[Transaction] = []
        self._transaction_ids = transaction_ids or SequenceGenerator()
        self._is_active = True
        self._daily_withdrawal_limit = config.daily_withdrawal_limit
        self._today_withdrawn = Decimal("0")

        self._add_transaction(TransactionType.ACCOUNT_OPENING, initial_balance, "Account opened")

    def _add_transaction(self, transaction_type: TransactionType, amount: Amount,
                         description: str) -> Transaction:
        transaction = Transaction.create(
            self._transaction_ids, transaction_type, amount, description
        ).complete()
        self._transactions.append(transaction)
        return transaction

    @property
    def account_number(self) -> int:
        return self._account_number

    @property
    def customer_id(self) -> int:
        return self._customer_id

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def daily_withdrawal_limit(self) -> Decimal:
        return self._daily_withdrawal_limit

    @property
    def today_withdrawn(self) -> Decimal:
        return self._today_withdrawn

    @property
    def transactions(self) -> List[Transaction]:
        """Copy of the transaction history, oldest first"""
        return list(self._transactions)

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)

    def deposit(self, amount: Amount) -> Decimal:
        """Credit the account and return the new balance"""
        amount = to_decimal(amount)
        if amount <= 0:
            raise InvalidAmount("Deposit amount must be positive")

        self._balance += amount
        self._add_transaction(
            TransactionType.DEPOSIT, amount, f"Deposit to account {self._account_number}"
        )
        return self._balance

    def withdraw(self, amount: Amount) -> Decimal:
        """Debit the account and return the new balance"""
        amount = to_decimal(amount)
        if amount <= 0:
            raise InvalidAmount("Withdrawal amount must be positive")

        if not self._can_withdraw(amount):
            log_action(
                logger, "warning", "Withdrawal denied",
                customer_id=self._customer_id, action="withdraw",
                resource=f"account:{self._account_number}",
                extra={"amount": str(amount), "balance": str(self._balance)}
            )
            raise WithdrawalDenied(
                f"Cannot withdraw ${amount}. Insufficient funds or limit exceeded"
            )

        self._balance -= amount
        self._today_withdrawn += amount
        self._add_transaction(
            TransactionType.WITHDRAWAL, amount, f"Withdrawal from account {self._account_number}"
        )
        return self._balance

    def reverse_withdrawal(self, amount: Amount, description: str) -> Decimal:
        """
        Undo a withdrawal made earlier in the same operation.

        Restores the balance and the daily withdrawal counter and records the
        credit as a deposit so the history still sums to the balance.
        """
        amount = to_decimal(amount)
        self._balance += amount
        self._today_withdrawn -= amount
        self._add_transaction(TransactionType.DEPOSIT, amount, description)
        return self._balance

    def record_transfer(self, transaction_type: TransactionType, amount: Amount,
                        description: str) -> Transaction:
        """Append a transfer memo record; the balance is not touched"""
        if transaction_type not in (TransactionType.TRANSFER_IN, TransactionType.TRANSFER_OUT):
            raise ValueError(f"Not a transfer record type: {transaction_type.value}")
        return self._add_transaction(transaction_type, amount, description)

    def reset_daily_withdrawals(self) -> None:
        """Start a new withdrawal tracking period"""
        self._today_withdrawn = Decimal("0")

    def _within_daily_limit(self, amount: Decimal) -> bool:
        return self._today_withdrawn + amount <= self._daily_withdrawal_limit

    def _can_withdraw(self, amount: Decimal) -> bool:
        """Base rule: enough balance and enough room under the daily limit"""
        return self._balance >= amount and self._within_daily_limit(amount)

    @abstractmethod
    def calculate_interest(self, months: int = 1) -> Decimal:
        """Interest the current balance would earn over ``months``; no mutation"""

    def account_info(self) -> Dict[str, Any]:
        """Plain snapshot for display"""
        return {
            "account_number": self._account_number,
            "customer_id": self._customer_id,
            "balance": self._balance,
            "account_type": self.account_type.value,
            "is_active": self._is_active,
            "transaction_count": len(self._transactions),
            "daily_withdrawal_limit": self._daily_withdrawal_limit,
            "today_withdrawn": self._today_withdrawn,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(account_number={self._account_number}, "
            f"customer_id={self._customer_id}, balance={self._balance})"
        )


class SavingsAccount(Account):
    """Interest-bearing account that must keep a minimum balance"""

    account_type = AccountType.SAVINGS

    def __init__(
        self,
        customer_id: int,
        account_number: int,
        initial_balance: Amount = 0,
        transaction_ids: Optional[Callable[[], int]] = None,
        config: Optional[BankConfig] = None
    ):
        config = config or get_config()
        super().__init__(customer_id, account_number, initial_balance, transaction_ids, config)
        self._interest_rate = config.savings_interest_rate
        self._min_balance = config.savings_min_balance

    @property
    def interest_rate(self) -> Decimal:
        return self._interest_rate

    @property
    def min_balance(self) -> Decimal:
        return self._min_balance

    def _can_withdraw(self, amount: Decimal) -> bool:
        maintains_min_balance = (self._balance - amount) >= self._min_balance
        return super()._can_withdraw(amount) and maintains_min_balance

    def calculate_interest(self, months: int = 1) -> Decimal:
        monthly_rate = self._interest_rate / 12
        return self._balance * monthly_rate * months

    def apply_interest(self, months: int = 1) -> Decimal:
        """Credit interest for ``months`` and return the amount credited"""
        interest = self.calculate_interest(months)
        self._balance += interest
        self._add_transaction(
            TransactionType.INTEREST, interest, f"Interest applied for {months} month(s)"
        )
        return interest

    def account_info(self) -> Dict[str, Any]:
        info = super().account_info()
        info["interest_rate"] = self._interest_rate
        info["min_balance"] = self._min_balance
        return info


class CheckingAccount(Account):
    """Fee-charging account that may overdraw down to the overdraft limit"""

    account_type = AccountType.CHECKING

    def __init__(
        self,
        customer_id: int,
        account_number: int,
        initial_balance: Amount = 0,
        transaction_ids: Optional[Callable[[], int]] = None,
        config: Optional[BankConfig] = None
    ):
        config = config or get_config()
        super().__init__(customer_id, account_number, initial_balance, transaction_ids, config)
        self._overdraft_limit = config.checking_overdraft_limit
        self._monthly_fee = config.checking_monthly_fee

    @property
    def overdraft_limit(self) -> Decimal:
        return self._overdraft_limit

    @property
    def monthly_fee(self) -> Decimal:
        return self._monthly_fee

    def _can_withdraw(self, amount: Decimal) -> bool:
        # Overdraft headroom replaces the plain balance test
        available_balance = self._balance + self._overdraft_limit
        return available_balance >= amount and self._within_daily_limit(amount)

    def calculate_interest(self, months: int = 1) -> Decimal:
        return Decimal("0")

    def charge_monthly_fee(self) -> bool:
        """
        Charge the monthly fee if the balance covers it.

        Returns False without touching the account when it does not; the fee
        is skipped, not carried forward.
        """
        if self._balance >= self._monthly_fee:
            self._balance -= self._monthly_fee
            self._add_transaction(TransactionType.FEE, -self._monthly_fee, "Monthly maintenance fee")
            return True
        return False

    def account_info(self) -> Dict[str, Any]:
        info = super().account_info()
        info["overdraft_limit"] = self._overdraft_limit
        info["monthly_fee"] = self._monthly_fee
        return info


ACCOUNT_CLASSES = {
    AccountType.SAVINGS: SavingsAccount,
    AccountType.CHECKING: CheckingAccount,
}
