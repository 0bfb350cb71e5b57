"""
Identifier Sequences

Monotonic integer allocators for customer IDs, account numbers and
transaction IDs. The bank owns one generator per kind of identifier.
"""

from dataclasses import dataclass


@dataclass
class SequenceGenerator:
    """Hands out consecutive integers starting from ``start``"""
    start: int = 1

    def __post_init__(self):
        self._next = self.start

    def next_value(self) -> int:
        """Return the next unused value and advance the sequence"""
        value = self._next
        self._next += 1
        return value

    def peek(self) -> int:
        """Return the value the next call to next_value() will hand out"""
        return self._next

    def __call__(self) -> int:
        return self.next_value()


@dataclass
class BankSequences:
    """The three identifier sequences owned by a bank"""
    customers: SequenceGenerator
    accounts: SequenceGenerator
    transactions: SequenceGenerator

    @classmethod
    def starting_at(cls, customer_id: int = 1, account_number: int = 1000,
                    transaction_id: int = 1) -> 'BankSequences':
        return cls(
            customers=SequenceGenerator(customer_id),
            accounts=SequenceGenerator(account_number),
            transactions=SequenceGenerator(transaction_id),
        )
