"""
Domain exceptions for the bank simulator.

Every error is a ValueError so callers that treat business rule violations
generically keep working.
"""


class BankError(ValueError):
    """Base exception for all bank errors."""


class ClientNotFound(BankError):
    """Raised when a client id is not registered with the bank."""

    def __init__(self, client_id: int):
        super().__init__(f"Client {client_id} not found")
        self.client_id = client_id


class AccountNotFound(BankError):
    """Raised when a client has no account with the given id."""

    def __init__(self, client_id: int, account_id: int):
        super().__init__(f"Account {account_id} not found for client {client_id}")
        self.client_id = client_id
        self.account_id = account_id


class InsufficientInformation(BankError):
    """Raised when a client record lacks the data its privilege level requires."""


class LimitExceeded(BankError):
    """Raised when a withdrawal is larger than the client's privilege level allows."""
