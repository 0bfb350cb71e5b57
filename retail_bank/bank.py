"""
Bank Module

The bank registers and authenticates customers, reports on the deposits it
holds, and runs the monthly batch jobs (savings interest and checking fees)
across every account. Interest is paid out of the bank's own capital and
fees are added to it.

A Bank can be constructed directly and passed to whatever needs it, or the
process-wide default can be fetched with Bank.get_instance().
"""

from decimal import Decimal
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .accounts import Account, AccountType
from .config import BankConfig, get_config
from .customers import Customer
from .errors import AccountNotFound, AuthenticationFailed, CustomerNotFound, DuplicateEmail
from .logging_config import get_logger, log_action
from .sequences import BankSequences


logger = get_logger(__name__)


@dataclass(frozen=True)
class BankReport:
    """Snapshot of the bank's position"""
    bank_name: str
    location: str
    total_customers: int
    total_accounts: int
    total_deposits: Decimal
    bank_balance: Decimal
    total_loans: Decimal
    reserve_ratio: Decimal  # Percent; non-finite when there are no deposits

    @property
    def reserve_ratio_display(self) -> str:
        if not self.reserve_ratio.is_finite():
            return "N/A"
        return f"{self.reserve_ratio:.2f}%"

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["reserve_ratio_display"] = self.reserve_ratio_display
        return result


def reserve_ratio(bank_balance: Decimal, total_deposits: Decimal) -> Decimal:
    """
    Bank capital as a percentage of customer deposits.

    With zero deposits the ratio is undefined: Infinity (signed like the
    capital) or NaN when the capital is zero as well.
    """
    if total_deposits == 0:
        if bank_balance == 0:
            return Decimal("NaN")
        return Decimal("Infinity") if bank_balance > 0 else Decimal("-Infinity")
    return bank_balance / total_deposits * 100


class Bank:
    """Aggregate root owning every customer and, through them, every account"""

    _instance: Optional['Bank'] = None

    def __init__(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        config: Optional[BankConfig] = None,
        sequences: Optional[BankSequences] = None
    ):
        config = config or get_config()
        self._config = config
        self._bank_name = name if name is not None else config.bank_name
        self._location = location if location is not None else config.bank_location
        self._customers: Dict[int, Customer] = {}
        self._total_deposits = Decimal("0")
        self._total_loans = Decimal("0")
        self._bank_balance = config.starting_capital
        self._transaction_fee = config.transaction_fee
        self._sequences = sequences or BankSequences.starting_at(
            customer_id=config.first_customer_id,
            account_number=config.first_account_number,
            transaction_id=config.first_transaction_id
        )

        log_action(
            logger, "info", f"{self._bank_name} bank initialized in {self._location}",
            action="bank_init",
            extra={"starting_capital": str(self._bank_balance)}
        )

    @classmethod
    def get_instance(cls, name: Optional[str] = None, location: Optional[str] = None) -> 'Bank':
        """
        Return the process-wide bank, creating it on first use.

        ``name`` and ``location`` only matter on the call that creates it.
        """
        if cls._instance is None:
            cls._instance = cls(name, location)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the process-wide bank so the next get_instance() builds a new one"""
        cls._instance = None

    @property
    def name(self) -> str:
        return self._bank_name

    @property
    def location(self) -> str:
        return self._location

    @property
    def bank_balance(self) -> Decimal:
        return self._bank_balance

    @property
    def total_deposits(self) -> Decimal:
        """Total deposits as of the last calculate_total_deposits() call"""
        return self._total_deposits

    @property
    def total_loans(self) -> Decimal:
        return self._total_loans

    @property
    def transaction_fee(self) -> Decimal:
        return self._transaction_fee

    @property
    def customer_count(self) -> int:
        return len(self._customers)

    def register_customer(self, first_name: str, last_name: str, email: str,
                          password: str) -> Customer:
        """Register a new customer; emails must be unique"""
        for customer in self._customers.values():
            if customer.email == email:
                raise DuplicateEmail("Email already registered")

        customer = Customer(
            customer_id=self._sequences.customers(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            account_numbers=self._sequences.accounts,
            transaction_ids=self._sequences.transactions,
            config=self._config
        )
        self._customers[customer.customer_id] = customer

        log_action(
            logger, "info", f"New customer registered: {customer.full_name}",
            customer_id=customer.customer_id, action="register_customer"
        )
        return customer

    def authenticate(self, email: str, password: str) -> Customer:
        for customer in self._customers.values():
            if customer.email == email and customer.verify_password(password):
                log_action(
                    logger, "info", f"Authentication successful for: {customer.full_name}",
                    customer_id=customer.customer_id, action="authenticate"
                )
                return customer

        log_action(logger, "warning", "Authentication failed", action="authenticate")
        raise AuthenticationFailed("Invalid email or password")

    def get_customer(self, customer_id: int) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer with ID {customer_id} not found")
        return customer

    def get_customers(self) -> List[Customer]:
        return list(self._customers.values())

    def find_account(self, account_number: int) -> Account:
        """Locate an account across all customers"""
        for customer in self._customers.values():
            account = customer.get_account(account_number)
            if account is not None:
                return account
        raise AccountNotFound(f"Account {account_number} not found")

    def _accounts_of_type(self, account_type: AccountType):
        for customer in self._customers.values():
            for account in customer.get_accounts():
                if account.account_type is account_type:
                    yield account

    def calculate_total_deposits(self) -> Decimal:
        """Recompute and cache the sum of every customer's balances"""
        self._total_deposits = sum(
            (customer.get_total_balance() for customer in self._customers.values()),
            Decimal("0")
        )
        return self._total_deposits

    def apply_interest_to_all_savings_accounts(self) -> Decimal:
        """Credit one month of interest to every savings account, funded by the bank"""
        total_interest = Decimal("0")

        for account in self._accounts_of_type(AccountType.SAVINGS):
            interest = account.apply_interest()
            total_interest += interest
            self._bank_balance -= interest

        log_action(
            logger, "info", f"Applied ${total_interest:.2f} in interest to all savings accounts",
            action="apply_interest",
            extra={"total_interest": str(total_interest), "bank_balance": str(self._bank_balance)}
        )
        return total_interest

    def charge_monthly_fees(self) -> Decimal:
        """Charge every checking account its monthly fee where the balance allows"""
        fees_collected = Decimal("0")
        skipped = 0

        for account in self._accounts_of_type(AccountType.CHECKING):
            if account.charge_monthly_fee():
                fees_collected += account.monthly_fee
                self._bank_balance += account.monthly_fee
            else:
                skipped += 1

        log_action(
            logger, "info", f"Collected ${fees_collected} in monthly fees",
            action="charge_monthly_fees",
            extra={"fees_collected": str(fees_collected), "accounts_skipped": skipped}
        )
        return fees_collected

    def reset_daily_withdrawals(self) -> None:
        """Start a new withdrawal tracking period on every account"""
        for customer in self._customers.values():
            customer.reset_daily_withdrawals()

    def generate_bank_report(self) -> BankReport:
        self.calculate_total_deposits()

        return BankReport(
            bank_name=self._bank_name,
            location=self._location,
            total_customers=len(self._customers),
            total_accounts=sum(c.account_count for c in self._customers.values()),
            total_deposits=self._total_deposits,
            bank_balance=self._bank_balance,
            total_loans=self._total_loans,
            reserve_ratio=reserve_ratio(self._bank_balance, self._total_deposits)
        )

    def list_all_customers(self) -> List[Dict[str, Any]]:
        """Snapshot of every customer in registration order"""
        return [customer.customer_info() for customer in self._customers.values()]
