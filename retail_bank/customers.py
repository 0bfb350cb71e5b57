"""
Customer Module

A customer owns a set of accounts, opens new ones, and moves money between
them. Email uniqueness is the bank's concern and is checked at registration,
not here.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import hashlib
import hmac
import secrets

from .accounts import ACCOUNT_CLASSES, Account, AccountType
from .config import BankConfig, get_config
from .errors import AccountNotFound, SameAccountTransfer, UnknownAccountType
from .logging_config import get_logger, log_action
from .sequences import SequenceGenerator
from .transactions import Amount, TransactionType, to_decimal


logger = get_logger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Balances of both accounts after a transfer"""
    from_balance: Decimal
    to_balance: Decimal


def _generate_salt() -> str:
    return secrets.token_hex(16)


def _hash_password(password: str, salt: str) -> str:
    return hashlib.scrypt(
        password.encode(),
        salt=salt.encode(),
        n=16384, r=8, p=1
    ).hex()


class Customer:
    """Bank customer and the accounts they own"""

    def __init__(
        self,
        customer_id: int,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        account_numbers: Optional[Callable[[], int]] = None,
        transaction_ids: Optional[Callable[[], int]] = None,
        config: Optional[BankConfig] = None
    ):
        self._customer_id = customer_id
        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._password_salt = _generate_salt()
        self._password_hash = _hash_password(password, self._password_salt)
        self._accounts: Dict[int, Account] = {}
        self._is_active = True
        self._created_date = datetime.now(timezone.utc)

        config = config or get_config()
        self._config = config
        self._account_numbers = account_numbers or SequenceGenerator(config.first_account_number)
        self._transaction_ids = transaction_ids or SequenceGenerator(config.first_transaction_id)

    @property
    def customer_id(self) -> int:
        return self._customer_id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_date(self) -> datetime:
        return self._created_date

    @property
    def account_count(self) -> int:
        return len(self._accounts)

    def verify_password(self, password: str) -> bool:
        """Check ``password`` against the stored salted hash"""
        candidate = _hash_password(password, self._password_salt)
        return hmac.compare_digest(candidate, self._password_hash)

    def open_account(self, account_type: str, initial_deposit: Amount = 0) -> Account:
        """
        Open a savings or checking account for this customer.

        Args:
            account_type: "savings" or "checking", any letter case
            initial_deposit: Opening balance, recorded as the account's
                ``account_opening`` transaction even when zero

        Returns:
            The new account, now owned by this customer
        """
        parsed_type = AccountType.parse(account_type)
        if parsed_type is None:
            raise UnknownAccountType(f"Unknown account type: {account_type}")

        account_class = ACCOUNT_CLASSES[parsed_type]
        account = account_class(
            customer_id=self._customer_id,
            account_number=self._account_numbers(),
            initial_balance=initial_deposit,
            transaction_ids=self._transaction_ids,
            config=self._config
        )
        self._accounts[account.account_number] = account

        log_action(
            logger, "info", f"Opened {parsed_type.value} account #{account.account_number}",
            customer_id=self._customer_id, action="open_account",
            resource=f"account:{account.account_number}",
            extra={"initial_deposit": str(account.balance)}
        )
        return account

    def get_account(self, account_number: int) -> Optional[Account]:
        return self._accounts.get(account_number)

    def get_accounts(self) -> List[Account]:
        """All accounts in the order they were opened"""
        return list(self._accounts.values())

    def get_total_balance(self) -> Decimal:
        return sum((account.balance for account in self._accounts.values()), Decimal("0"))

    def transfer(self, from_account_number: int, to_account_number: int,
                 amount: Amount) -> TransferResult:
        """
        Move ``amount`` between two of this customer's accounts.

        The source is debited with a normal withdrawal (so every withdrawal
        rule applies) and the destination credited with a normal deposit.
        Each side then also gets a transfer memo record, so one transfer adds
        two records to each account.

        If the deposit leg fails the withdrawal is reversed before the error
        is re-raised.
        """
        from_account = self.get_account(from_account_number)
        to_account = self.get_account(to_account_number)

        if from_account is None or to_account is None:
            raise AccountNotFound("One or both accounts not found")

        if from_account is to_account:
            raise SameAccountTransfer("Cannot transfer to the same account")

        amount = to_decimal(amount)
        from_account.withdraw(amount)

        try:
            to_account.deposit(amount)
        except Exception:
            from_account.reverse_withdrawal(
                amount, f"Reversal of failed transfer to account {to_account_number}"
            )
            raise

        from_account.record_transfer(
            TransactionType.TRANSFER_OUT, amount, f"Transferred to account {to_account_number}"
        )
        to_account.record_transfer(
            TransactionType.TRANSFER_IN, amount, f"Received from account {from_account_number}"
        )

        log_action(
            logger, "info", "Transfer completed",
            customer_id=self._customer_id, action="transfer",
            extra={
                "from_account": from_account_number,
                "to_account": to_account_number,
                "amount": str(amount)
            }
        )
        return TransferResult(from_balance=from_account.balance, to_balance=to_account.balance)

    def reset_daily_withdrawals(self) -> None:
        for account in self._accounts.values():
            account.reset_daily_withdrawals()

    def customer_info(self) -> Dict[str, Any]:
        """Plain snapshot for display"""
        return {
            "customer_id": self._customer_id,
            "name": self.full_name,
            "email": self._email,
            "account_count": self.account_count,
            "total_balance": self.get_total_balance(),
            "member_since": self._created_date.date(),
        }

    def __repr__(self) -> str:
        return f"Customer(customer_id={self._customer_id}, name={self.full_name!r})"
