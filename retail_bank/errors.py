"""
Banking Error Taxonomy

Every failure in the bank model is a caller-input or precondition violation
raised synchronously to the direct caller. Errors also derive from the
matching built-in exception so ordinary ``except ValueError`` handling works.
"""


class BankingError(Exception):
    """Base class for all bank domain errors"""


class InvalidAmount(BankingError, ValueError):
    """Deposit, withdrawal or opening amount is not acceptable"""


class WithdrawalDenied(BankingError, ValueError):
    """
    Withdrawal refused by the account's withdrawal rule.

    Covers insufficient funds, exhausted daily limit and minimum balance
    breaches without distinguishing between them.
    """


class UnknownAccountType(BankingError, ValueError):
    """Requested account type is neither savings nor checking"""


class AbstractInstantiationError(BankingError, TypeError):
    """Attempt to instantiate the abstract Account class"""


class AccountNotFound(BankingError, LookupError):
    """Account number is not known to the customer or bank"""


class SameAccountTransfer(BankingError, ValueError):
    """Transfer source and destination are the same account"""


class DuplicateEmail(BankingError, ValueError):
    """Email address already belongs to a registered customer"""


class AuthenticationFailed(BankingError):
    """Email and password do not match any registered customer"""


class CustomerNotFound(BankingError, LookupError):
    """Customer ID is not registered with the bank"""
