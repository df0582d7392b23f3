"""
Account Module

Interest-bearing account variants. Each variant decides for itself how a
balance change is applied, whether a withdrawal is possible and how interest
accrues:

- Debit: balance never goes below zero
- Deposit: locked until maturity, rate picked from the opening balance
- Credit: overdraft allowed, a fixed commission is charged while negative

Accounts accumulate interest in ``pending_interest`` between an accrual and
the following commit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, List, Tuple
import copy

from .money import Number, ZERO, to_decimal


class AccountType(Enum):
    """Account variants"""
    DEBIT = "debit"
    DEPOSIT = "deposit"
    CREDIT = "credit"


# (exclusive upper bound of the opening balance, daily rate)
DEPOSIT_RATE_TIERS: List[Tuple[Decimal, Decimal]] = [
    (Decimal('50000'), Decimal('0.03')),
    (Decimal('100000'), Decimal('0.035')),
]
DEPOSIT_TOP_RATE = Decimal('0.04')


def deposit_rate_for(opening_balance: Number) -> Decimal:
    """Select the deposit daily rate from the tier table"""
    opening_balance = to_decimal(opening_balance)
    for upper_bound, rate in DEPOSIT_RATE_TIERS:
        if opening_balance < upper_bound:
            return rate
    return DEPOSIT_TOP_RATE


@dataclass
class Account(ABC):
    """
    Base account: balance, daily interest rate and interest pending commit
    """
    account_type: ClassVar[AccountType]
    allows_overdraft: ClassVar[bool] = False

    balance: Decimal
    daily_rate: Decimal = ZERO
    pending_interest: Decimal = field(default=ZERO, init=False)

    def __post_init__(self):
        self.balance = to_decimal(self.balance)
        self.daily_rate = to_decimal(self.daily_rate)
        if self.balance < ZERO and not self.allows_overdraft:
            raise ValueError(
                f"{self.account_type.value.capitalize()} account cannot open with "
                f"a negative balance, got {self.balance}"
            )

    @abstractmethod
    def change_balance(self, delta: Number, current_time: int) -> Decimal:
        """
        Apply a signed balance change

        Returns:
            The change actually applied, which may differ from ``delta``
        """

    def can_withdraw(self, amount: Number, current_time: int) -> bool:
        """Check if ``amount`` can be taken from the account right now"""
        return self.balance >= to_decimal(amount)

    def accrue_interest(self) -> None:
        """Accrue one day of interest on a non-negative balance"""
        if self.balance >= ZERO:
            self.pending_interest += self.daily_rate * self.balance

    def commit_interest(self) -> None:
        """Book accrued interest into the balance"""
        self.balance += self.pending_interest
        self.pending_interest = ZERO

    def clone(self) -> 'Account':
        """Independent copy of the account in its current state"""
        return copy.copy(self)

    def force_set_balance(self, new_balance: Number) -> None:
        """Override the balance, ignoring the variant's rules"""
        self.balance = to_decimal(new_balance)

    def _apply_floored(self, delta: Decimal) -> Decimal:
        # Clamp so the balance never drops below zero
        applied = max(self.balance + delta, ZERO) - self.balance
        self.balance += applied
        return applied

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary of strings for logs and audit metadata"""
        result = {key: str(value) for key, value in asdict(self).items()}
        result['account_type'] = self.account_type.value
        return result


@dataclass
class DebitAccount(Account):
    """Current account that can never be overdrawn"""
    account_type: ClassVar[AccountType] = AccountType.DEBIT

    def change_balance(self, delta: Number, current_time: int) -> Decimal:
        return self._apply_floored(to_decimal(delta))


@dataclass
class DepositAccount(Account):
    """
    Term deposit

    Withdrawals are blocked until ``maturity_time``. The daily rate is set
    once from the opening balance and never re-evaluated.
    """
    account_type: ClassVar[AccountType] = AccountType.DEPOSIT

    daily_rate: Decimal = field(default=ZERO, init=False)
    maturity_time: int = 0

    def __post_init__(self):
        super().__post_init__()
        self.daily_rate = deposit_rate_for(self.balance)

    def is_mature(self, current_time: int) -> bool:
        return current_time >= self.maturity_time

    def change_balance(self, delta: Number, current_time: int) -> Decimal:
        delta = to_decimal(delta)
        if delta < ZERO and not self.is_mature(current_time):
            delta = ZERO
        return self._apply_floored(delta)

    def can_withdraw(self, amount: Number, current_time: int) -> bool:
        return self.is_mature(current_time) and super().can_withdraw(amount, current_time)


@dataclass
class CreditAccount(Account):
    """
    Credit account with unlimited overdraft

    While the balance is negative every balance change and every interest
    commit first deducts ``commission``.
    """
    account_type: ClassVar[AccountType] = AccountType.CREDIT
    allows_overdraft: ClassVar[bool] = True

    commission: Decimal = ZERO

    def __post_init__(self):
        super().__post_init__()
        self.commission = to_decimal(self.commission)

    def _charge_commission(self) -> None:
        if self.balance < ZERO:
            self.balance -= self.commission

    def change_balance(self, delta: Number, current_time: int) -> Decimal:
        delta = to_decimal(delta)
        self._charge_commission()
        self.balance += delta
        return delta

    def can_withdraw(self, amount: Number, current_time: int) -> bool:
        return True

    def accrue_interest(self) -> None:
        # Accrues on negative balances too
        self.pending_interest += self.daily_rate * self.balance

    def commit_interest(self) -> None:
        self._charge_commission()
        super().commit_interest()
