"""
Transaction Records Module

Account descriptors, transfer records and the append-only transaction
history. History is kept in ascending id order so lookups can use binary
search.
"""

from bisect import bisect_left
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterator, List, Optional


@dataclass(frozen=True, order=True)
class AccountDescriptor:
    """The only way callers name an account: owning client plus account id"""
    client_id: int
    account_id: int

    def __str__(self) -> str:
        return f"{self.client_id}/{self.account_id}"


class TransactionState(Enum):
    """States of a recorded transfer"""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Transaction:
    """
    Transfer between two accounts

    Amount and descriptors never change after the transaction is recorded.
    Cancellation only flips ``state`` and stamps ``cancelled_at``.
    """
    id: int
    from_account: AccountDescriptor
    to_account: AccountDescriptor
    amount: Decimal
    created_at: int
    state: TransactionState = TransactionState.COMPLETED
    cancelled_at: Optional[int] = None

    @property
    def is_cancelled(self) -> bool:
        return self.state == TransactionState.CANCELLED

    @property
    def is_reversible(self) -> bool:
        """Check if transaction can still be cancelled"""
        return self.state == TransactionState.COMPLETED

    def mark_cancelled(self, tick: int) -> None:
        self.state = TransactionState.CANCELLED
        self.cancelled_at = tick


class TransactionHistory:
    """
    Append-only log of transactions ordered by strictly increasing id
    """

    def __init__(self):
        self._transactions: List[Transaction] = []
        self._ids: List[int] = []

    def append(self, transaction: Transaction) -> None:
        """
        Append a transaction

        Raises:
            ValueError: If the id does not follow the latest recorded id
        """
        if self._ids and transaction.id <= self._ids[-1]:
            raise ValueError(
                f"Transaction id {transaction.id} must be greater than {self._ids[-1]}"
            )
        self._transactions.append(transaction)
        self._ids.append(transaction.id)

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Binary search for a transaction by id"""
        index = bisect_left(self._ids, transaction_id)
        if index == len(self._ids) or self._ids[index] != transaction_id:
            return None
        return self._transactions[index]

    def for_account(self, descriptor: AccountDescriptor) -> List[Transaction]:
        """All transactions touching an account, oldest first"""
        return [
            txn for txn in self._transactions
            if txn.from_account == descriptor or txn.to_account == descriptor
        ]

    @property
    def latest_id(self) -> int:
        """Highest recorded id, 0 if history is empty"""
        return self._ids[-1] if self._ids else 0

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def __contains__(self, transaction_id: object) -> bool:
        return isinstance(transaction_id, int) and self.find(transaction_id) is not None
