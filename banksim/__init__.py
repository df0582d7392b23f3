"""
Bank Simulator

An in-memory ledger simulator with clients, interest-bearing accounts,
transfers, time-driven interest accrual and transaction cancellation.
All financial calculations use Decimal.
"""

import logging

__version__ = "1.0.0"

# Silent until the application calls logging_config.setup_logging
logging.getLogger("banksim").addHandler(logging.NullHandler())
