"""
Bank Module

The bank owns every client, account and transaction record. Callers name
accounts through AccountDescriptor only and never hold references to
bank-owned state. Balance mutation is delegated to the account variant; the
bank enforces privilege-gated withdrawal limits, records transfers, runs the
interest accrual and commit batches and cancels transfers.

Time is read from an injected clock. The bank never advances it.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterator, List, Optional, Tuple

from .accounts import Account
from .audit import AuditEventType, AuditTrail
from .clock import SimulationClock
from .config import BanksimConfig, get_config
from .customers import Client, PrivilegeLevel, check_client_requirements
from .errors import AccountNotFound, ClientNotFound, InsufficientInformation, LimitExceeded
from .logging_config import get_logger, log_action
from .money import Number, ZERO, to_decimal
from .transactions import AccountDescriptor, Transaction, TransactionHistory


class Bank:
    """
    In-memory bank: clients, their accounts and the transfer history
    """

    def __init__(
        self,
        clock: Optional[SimulationClock] = None,
        config: Optional[BanksimConfig] = None,
        audit_trail: Optional[AuditTrail] = None
    ):
        self.config = config or get_config()
        if clock is not None and clock.month_duration != self.config.month_duration:
            raise ValueError(
                f"Clock month duration {clock.month_duration} does not match "
                f"configured month duration {self.config.month_duration}"
            )
        self.clock = clock or SimulationClock(month_duration=self.config.month_duration)
        self.logger = get_logger("banksim.bank")

        if audit_trail is None and self.config.enable_audit_logging:
            audit_trail = AuditTrail()
        self.audit_trail = audit_trail

        self.clients: Dict[int, Client] = {}
        self.accounts: Dict[int, Dict[int, Account]] = {}
        self._history = TransactionHistory()

        # Maximum single withdrawal per privilege level, None means unbounded
        self.withdrawal_limits: Dict[PrivilegeLevel, Optional[Decimal]] = {
            PrivilegeLevel.INITIAL: to_decimal(self.config.initial_withdrawal_limit),
            PrivilegeLevel.INTERMEDIATE: to_decimal(self.config.intermediate_withdrawal_limit),
            PrivilegeLevel.FULL: (
                to_decimal(self.config.full_withdrawal_limit)
                if self.config.full_withdrawal_limit is not None else None
            ),
        }

        self._last_client_id = 0
        self._last_account_id = 0
        self._last_transaction_id = 0

    # Clients

    def add_client(self, client: Client) -> int:
        """
        Register a client

        Raises:
            InsufficientInformation: If the client's privilege level requires
                information the record does not have
        """
        if not check_client_requirements(client):
            raise InsufficientInformation(
                f"Not enough information for privilege level {client.privilege_level.name}"
            )

        self._last_client_id += 1
        client_id = self._last_client_id
        self.clients[client_id] = replace(client)
        self.accounts[client_id] = {}

        log_action(
            self.logger, "info", "Client added",
            action="add_client", resource=f"client:{client_id}", tick=self.clock.now(),
            extra={"privilege_level": client.privilege_level.name}
        )
        self._audit(
            AuditEventType.CLIENT_CREATED, "client", client_id,
            {"full_name": client.full_name, "privilege_level": client.privilege_level.name}
        )
        return client_id

    def raise_privilege(self, client_id: int, new_client: Client) -> None:
        """
        Raise a client's privilege level

        Passport (for FULL) and address (for INTERMEDIATE and above) are
        copied from ``new_client`` when it provides them. Requests that do not
        raise the level are ignored.

        Raises:
            ClientNotFound: If the client does not exist
            InsufficientInformation: If the upgraded record would not satisfy
                the requirements of the new level; the client is left unchanged
        """
        client = self._get_client(client_id)
        target = new_client.privilege_level
        if target <= client.privilege_level:
            return

        upgraded = replace(client, privilege_level=target)
        if target >= PrivilegeLevel.FULL and new_client.passport is not None:
            upgraded.passport = new_client.passport
        if target >= PrivilegeLevel.INTERMEDIATE and new_client.address is not None:
            upgraded.address = new_client.address

        if not check_client_requirements(upgraded):
            raise InsufficientInformation(
                f"Client {client_id} lacks information required for {target.name}"
            )

        self.clients[client_id] = upgraded

        log_action(
            self.logger, "info", "Client privilege raised",
            action="raise_privilege", resource=f"client:{client_id}", tick=self.clock.now(),
            extra={"from": client.privilege_level.name, "to": target.name}
        )
        self._audit(
            AuditEventType.PRIVILEGE_RAISED, "client", client_id,
            {"from": client.privilege_level.name, "to": target.name}
        )

    def get_client(self, client_id: int) -> Client:
        """Copy of a client record"""
        return replace(self._get_client(client_id))

    def is_suspicious(self, client_id: int) -> bool:
        """Clients below FULL privilege are treated as suspicious"""
        return self._get_client(client_id).privilege_level != PrivilegeLevel.FULL

    # Accounts

    def add_account(self, client_id: int, account: Account) -> int:
        """
        Open an account for a client. The bank keeps its own copy.

        Raises:
            ClientNotFound: If the client does not exist
        """
        self._get_client(client_id)

        self._last_account_id += 1
        account_id = self._last_account_id
        self.accounts[client_id][account_id] = account.clone()

        descriptor = AccountDescriptor(client_id, account_id)
        log_action(
            self.logger, "info", f"Account opened: {account.account_type.value}",
            action="add_account", resource=f"account:{descriptor}", tick=self.clock.now(),
            extra=account.to_dict()
        )
        self._audit(AuditEventType.ACCOUNT_OPENED, "account", descriptor, account.to_dict())
        return account_id

    def list_accounts(self, client_id: int) -> List[AccountDescriptor]:
        """Descriptors of all accounts a client holds"""
        self._get_client(client_id)
        return [AccountDescriptor(client_id, account_id) for account_id in self.accounts[client_id]]

    def get_account(self, descriptor: AccountDescriptor) -> Account:
        """Snapshot copy of an account"""
        _, account = self._resolve(descriptor)
        return account.clone()

    def get_balance(self, descriptor: AccountDescriptor) -> Decimal:
        _, account = self._resolve(descriptor)
        return account.balance

    def get_pending_interest(self, descriptor: AccountDescriptor) -> Decimal:
        _, account = self._resolve(descriptor)
        return account.pending_interest

    # Balance operations

    def withdraw(self, descriptor: AccountDescriptor, amount: Number) -> Decimal:
        """
        Withdraw from an account

        Returns:
            The amount actually withdrawn, which the account's rules may
            reduce below the requested amount

        Raises:
            ClientNotFound: If the client does not exist
            AccountNotFound: If the account does not exist
            LimitExceeded: If amount is above the client's privilege limit
        """
        amount = self._validate_amount(amount)
        client, account = self._resolve(descriptor)

        limit = self.withdrawal_limits[client.privilege_level]
        if limit is not None and amount > limit:
            log_action(
                self.logger, "warning", "Withdrawal above privilege limit",
                action="withdraw", resource=f"account:{descriptor}", tick=self.clock.now(),
                extra={"amount": str(amount), "limit": str(limit)}
            )
            raise LimitExceeded(
                f"Withdrawal of {amount} exceeds {limit} allowed at "
                f"{client.privilege_level.name} privilege level"
            )

        applied = abs(account.change_balance(-amount, self.clock.now()))

        log_action(
            self.logger, "info", "Withdrawal",
            action="withdraw", resource=f"account:{descriptor}", tick=self.clock.now(),
            extra={"requested": str(amount), "applied": str(applied)}
        )
        self._audit(
            AuditEventType.WITHDRAWAL, "account", descriptor,
            {"requested": amount, "applied": applied, "balance": account.balance}
        )
        return applied

    def deposit(self, descriptor: AccountDescriptor, amount: Number) -> Decimal:
        """
        Deposit into an account

        Raises:
            ClientNotFound: If the client does not exist
            AccountNotFound: If the account does not exist
        """
        amount = self._validate_amount(amount)
        _, account = self._resolve(descriptor)

        applied = account.change_balance(amount, self.clock.now())

        log_action(
            self.logger, "info", "Deposit",
            action="deposit", resource=f"account:{descriptor}", tick=self.clock.now(),
            extra={"requested": str(amount), "applied": str(applied)}
        )
        self._audit(
            AuditEventType.DEPOSIT, "account", descriptor,
            {"requested": amount, "applied": applied, "balance": account.balance}
        )
        return applied

    def transfer(
        self,
        from_account: AccountDescriptor,
        to_account: AccountDescriptor,
        amount: Number
    ) -> int:
        """
        Move money between two accounts

        Returns:
            The new transaction id, or 0 if the source account cannot cover
            the amount right now (nothing is changed in that case)

        Raises:
            ClientNotFound: If either client does not exist
            AccountNotFound: If either account does not exist
            LimitExceeded: If amount is above the source client's privilege limit
        """
        amount = self._validate_amount(amount)
        from_client_id = from_account.client_id
        _, source = self._resolve(from_account)
        self._resolve(to_account)
        now = self.clock.now()

        if not source.can_withdraw(amount, now):
            log_action(
                self.logger, "info", "Transfer declined: insufficient funds",
                action="transfer", resource=f"account:{from_account}", tick=now,
                extra={"to": str(to_account), "amount": str(amount)}
            )
            self._audit(
                AuditEventType.TRANSFER_DECLINED, "account", from_account,
                {"to": str(to_account), "amount": amount}
            )
            return 0

        self.withdraw(from_account, amount)
        self.deposit(to_account, amount)

        self._last_transaction_id += 1
        transaction = Transaction(
            id=self._last_transaction_id,
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            created_at=now
        )
        self._history.append(transaction)

        suspicious = self.is_suspicious(from_client_id)
        log_action(
            self.logger, "info", "Transfer posted",
            action="transfer", resource=f"transaction:{transaction.id}", tick=now,
            extra={
                "from": str(from_account),
                "to": str(to_account),
                "amount": str(amount),
                "suspicious": suspicious
            }
        )
        self._audit(
            AuditEventType.TRANSFER_POSTED, "transaction", transaction.id,
            {
                "from": str(from_account),
                "to": str(to_account),
                "amount": amount,
                "suspicious": suspicious
            }
        )
        return transaction.id

    # Interest

    def accrue_all(self) -> int:
        """
        Accrue one period of interest on every account without committing

        Returns:
            Number of accounts processed
        """
        processed = 0
        for _, account in self._iter_accounts():
            account.accrue_interest()
            processed += 1

        log_action(
            self.logger, "debug", "Interest accrued",
            action="accrue_all", tick=self.clock.now(), extra={"accounts": processed}
        )
        self._audit(AuditEventType.INTEREST_ACCRUED, "bank", "all", {"accounts": processed})
        return processed

    def commit_all(self) -> int:
        """
        Book pending interest into every account's balance

        Returns:
            Number of accounts processed
        """
        processed = 0
        for _, account in self._iter_accounts():
            account.commit_interest()
            processed += 1

        log_action(
            self.logger, "info", "Interest committed",
            action="commit_all", tick=self.clock.now(), extra={"accounts": processed}
        )
        self._audit(AuditEventType.INTEREST_COMMITTED, "bank", "all", {"accounts": processed})
        return processed

    def project_balance(self, descriptor: AccountDescriptor, duration: int) -> Decimal:
        """
        Predict an account's balance ``duration`` ticks from now

        Interest is accrued on a copy of the account every tick and committed
        on month boundaries. The live account is not touched.

        Raises:
            ClientNotFound: If the client does not exist
            AccountNotFound: If the account does not exist
        """
        if duration < 0:
            raise ValueError("Projection duration must be non-negative")
        _, account = self._resolve(descriptor)

        imaginary = account.clone()
        start = self.clock.now()
        for tick in range(start, start + duration):
            imaginary.accrue_interest()
            if self.clock.is_month_boundary(tick):
                imaginary.commit_interest()

        return imaginary.balance

    # Transactions

    @property
    def transaction_history(self) -> List[Transaction]:
        """Recorded transactions in ascending id order"""
        return list(self._history)

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID"""
        transaction = self._history.find(transaction_id)
        return replace(transaction) if transaction else None

    def cancel_transaction(self, transaction_id: int) -> bool:
        """
        Reverse a recorded transfer

        The amount is added back to the source and taken from the destination
        directly, bypassing the accounts' own rules. Interest booked since the
        transfer is left alone. The record stays in history, marked cancelled.

        Returns:
            True if a transfer was reversed, False for unknown or already
            cancelled transactions
        """
        transaction = self._history.find(transaction_id)
        if transaction is None or not transaction.is_reversible:
            log_action(
                self.logger, "info", "Cancellation ignored",
                action="cancel_transaction", resource=f"transaction:{transaction_id}",
                tick=self.clock.now(),
                extra={"reason": "not found" if transaction is None else "already cancelled"}
            )
            return False

        _, source = self._resolve(transaction.from_account)
        _, destination = self._resolve(transaction.to_account)
        source.force_set_balance(source.balance + transaction.amount)
        destination.force_set_balance(destination.balance - transaction.amount)
        transaction.mark_cancelled(self.clock.now())

        log_action(
            self.logger, "info", "Transaction cancelled",
            action="cancel_transaction", resource=f"transaction:{transaction_id}",
            tick=self.clock.now(), extra={"amount": str(transaction.amount)}
        )
        self._audit(
            AuditEventType.TRANSACTION_CANCELLED, "transaction", transaction_id,
            {
                "from": str(transaction.from_account),
                "to": str(transaction.to_account),
                "amount": transaction.amount
            }
        )
        return True

    # Internals

    def _get_client(self, client_id: int) -> Client:
        client = self.clients.get(client_id)
        if client is None:
            raise ClientNotFound(client_id)
        return client

    def _resolve(self, descriptor: AccountDescriptor) -> Tuple[Client, Account]:
        client = self._get_client(descriptor.client_id)
        account = self.accounts[descriptor.client_id].get(descriptor.account_id)
        if account is None:
            raise AccountNotFound(descriptor.client_id, descriptor.account_id)
        return client, account

    def _iter_accounts(self) -> Iterator[Tuple[AccountDescriptor, Account]]:
        for client_id, accounts in self.accounts.items():
            for account_id, account in accounts.items():
                yield AccountDescriptor(client_id, account_id), account

    @staticmethod
    def _validate_amount(amount: Number) -> Decimal:
        amount = to_decimal(amount)
        if amount < ZERO:
            raise ValueError(f"Amount must be non-negative, got {amount}")
        return amount

    def _audit(self, event_type: AuditEventType, entity_type: str, entity_id, metadata: dict) -> None:
        if self.audit_trail is not None:
            self.audit_trail.log_event(
                event_type=event_type,
                entity_type=entity_type,
                entity_id=entity_id,
                tick=self.clock.now(),
                metadata=metadata
            )
