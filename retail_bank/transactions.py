"""
Transaction Records Module

A transaction records one balance-affecting event on an account. Records are
created pending, moved to completed or failed straight away, and never
changed afterwards; each account keeps them in an append-only history.
"""

from decimal import Decimal, InvalidOperation
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union
from enum import Enum

from .errors import InvalidAmount


Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
    """
    Convert a numeric input to Decimal without going through float repr.

    Unparsable and non-finite values (NaN, Infinity) raise InvalidAmount.
    """
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise InvalidAmount(f"Not a valid amount: {value!r}")
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be a finite number, got {value}")
    return value


class TransactionType(Enum):
    """Kinds of ledger events"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_IN = "transfer_in"        # Memo record on the receiving account
    TRANSFER_OUT = "transfer_out"      # Memo record on the sending account
    INTEREST = "interest"
    FEE = "fee"                        # Amount is recorded negative
    ACCOUNT_OPENING = "account_opening"


class TransactionStatus(Enum):
    """States of a transaction"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Sign applied to ``amount`` when a completed record is summed into a balance.
# Transfer memos carry no money: the paired deposit/withdrawal already does.
_BALANCE_SIGN = {
    TransactionType.DEPOSIT: 1,
    TransactionType.INTEREST: 1,
    TransactionType.ACCOUNT_OPENING: 1,
    TransactionType.FEE: 1,
    TransactionType.WITHDRAWAL: -1,
    TransactionType.TRANSFER_IN: 0,
    TransactionType.TRANSFER_OUT: 0,
}


class Transaction:
    """
    A single ledger event on an account.

    ``transaction_type``, ``amount``, ``description`` and ``timestamp`` are
    read-only; only ``status`` moves, via complete() and fail().
    """

    def __init__(
        self,
        transaction_id: int,
        transaction_type: TransactionType,
        amount: Amount,
        description: str = "",
        timestamp: Optional[datetime] = None
    ):
        self._id = transaction_id
        self._type = transaction_type
        self._amount = to_decimal(amount)
        self._description = description
        self._timestamp = timestamp or datetime.now(timezone.utc)
        self._status = TransactionStatus.PENDING

    @classmethod
    def create(
        cls,
        id_source: Callable[[], int],
        transaction_type: TransactionType,
        amount: Amount,
        description: str = ""
    ) -> 'Transaction':
        """Create a pending transaction with the next ID from ``id_source``"""
        return cls(id_source(), transaction_type, amount, description)

    @property
    def id(self) -> int:
        return self._id

    @property
    def transaction_type(self) -> TransactionType:
        return self._type

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def description(self) -> str:
        return self._description

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def status(self) -> TransactionStatus:
        return self._status

    @property
    def is_completed(self) -> bool:
        return self._status == TransactionStatus.COMPLETED

    @property
    def balance_effect(self) -> Decimal:
        """Signed contribution of this record to the account balance"""
        if not self.is_completed:
            return Decimal("0")
        return self._amount * _BALANCE_SIGN[self._type]

    def complete(self) -> 'Transaction':
        """Mark transaction as completed"""
        self._status = TransactionStatus.COMPLETED
        return self

    def fail(self) -> 'Transaction':
        """Mark transaction as failed"""
        self._status = TransactionStatus.FAILED
        return self

    def to_string(self) -> str:
        stamp = self._timestamp.strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"[{stamp}] {self._type.value.upper()}: "
            f"${self._amount} - {self._description}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain snapshot for display"""
        return {
            "id": self._id,
            "type": self._type.value,
            "amount": self._amount,
            "description": self._description,
            "timestamp": self._timestamp,
            "status": self._status.value,
        }

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self._id}, type={self._type.value}, "
            f"amount={self._amount}, status={self._status.value})"
        )
