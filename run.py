#!/usr/bin/env python3
"""
Bank Simulator Entry Point

Opens one client with a debit account, moves some money and prints the
balance projected two months ahead.
"""

import sys

from banksim.accounts import DebitAccount
from banksim.bank import Bank
from banksim.config import get_config
from banksim.customers import Client, PrivilegeLevel
from banksim.errors import BankError
from banksim.logging_config import setup_logging
from banksim.money import format_amount
from banksim.transactions import AccountDescriptor


def main() -> int:
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format)

    bank = Bank(config=config)
    client_id = bank.add_client(Client("name", "surname", privilege_level=PrivilegeLevel.INITIAL))
    account_id = bank.add_account(client_id, DebitAccount(balance=0, daily_rate="0.0001"))
    descriptor = AccountDescriptor(client_id, account_id)

    assert bank.withdraw(descriptor, 1000) == 0
    print(format_amount(bank.deposit(descriptor, 1000)))
    print(format_amount(bank.project_balance(descriptor, 60)))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except BankError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
