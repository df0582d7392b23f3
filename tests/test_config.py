"""
Test suite for configuration and logging

Tests environment-driven settings and the structured JSON log output.
"""

import json
import logging
import pytest
from decimal import Decimal

from banksim import config as config_module
from banksim.accounts import DebitAccount
from banksim.bank import Bank
from banksim.clock import SimulationClock
from banksim.config import BanksimConfig, get_config, reload_config
from banksim.customers import Client, PrivilegeLevel
from banksim.errors import LimitExceeded
from banksim.logging_config import JSONFormatter, get_logger, log_action, setup_logging
from banksim.transactions import AccountDescriptor


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestConfig:
    """Test BanksimConfig"""
    
    def test_defaults(self):
        config = BanksimConfig()
        
        assert config.month_duration == 30
        assert config.initial_withdrawal_limit == "1000"
        assert config.intermediate_withdrawal_limit == "10000"
        assert config.full_withdrawal_limit is None
        assert config.enable_audit_logging
    
    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BANKSIM_MONTH_DURATION", "7")
        monkeypatch.setenv("BANKSIM_INITIAL_WITHDRAWAL_LIMIT", "50")
        
        try:
            config = reload_config()
            assert config.month_duration == 7
            assert get_config() is config
        finally:
            monkeypatch.delenv("BANKSIM_MONTH_DURATION")
            monkeypatch.delenv("BANKSIM_INITIAL_WITHDRAWAL_LIMIT")
            reload_config()
        
        assert config_module.config.month_duration == 30
    
    def test_bank_uses_configured_limits(self):
        bank = Bank(
            clock=SimulationClock(),
            config=BanksimConfig(initial_withdrawal_limit="50", full_withdrawal_limit="100000")
        )
        
        assert bank.withdrawal_limits[PrivilegeLevel.INITIAL] == Decimal('50')
        assert bank.withdrawal_limits[PrivilegeLevel.FULL] == Decimal('100000')
        
        client_id = bank.add_client(Client("John", "Doe"))
        descriptor = AccountDescriptor(client_id, bank.add_account(client_id, DebitAccount(balance=100)))
        with pytest.raises(LimitExceeded):
            bank.withdraw(descriptor, 51)
    
    def test_bank_clock_uses_month_duration(self):
        bank = Bank(config=BanksimConfig(month_duration=10))
        
        assert bank.clock.month_duration == 10
        assert bank.clock.now() == 0


class TestLogging:
    """Test structured logging helpers"""
    
    def test_json_formatter(self):
        logger = logging.getLogger("banksim.test.formatter")
        record = logger.makeRecord(logger.name, logging.INFO, __name__, 0, "Deposit", (), None)
        record.action = "deposit"
        record.tick = 0
        record.extra = {"applied": "10"}
        
        data = json.loads(JSONFormatter().format(record))
        
        assert data["message"] == "Deposit"
        assert data["level"] == "INFO"
        assert data["action"] == "deposit"
        assert data["tick"] == 0
        assert data["extra"] == {"applied": "10"}
        assert "resource" not in data
    
    def test_package_logger_silent_by_default(self):
        logger = logging.getLogger("banksim")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self):
        logger = setup_logging("DEBUG", logger_name="banksim.test.setup")
        logger = setup_logging("WARNING", logger_name="banksim.test.setup")
        
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.WARNING
        assert not logger.propagate
    
    def test_setup_logging_text_format(self):
        logger = setup_logging("INFO", logger_name="banksim.test.text", log_format="text")
        
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
    
    def test_log_action_attaches_fields(self):
        logger = get_logger("banksim.test.action")
        logger.setLevel(logging.INFO)
        logger.propagate = False
        handler = ListHandler()
        logger.addHandler(handler)
        
        log_action(logger, "info", "Transfer posted", action="transfer",
                   resource="transaction:1", tick=5, extra={"amount": "10"})
        log_action(logger, "debug", "Hidden")
        
        assert len(handler.records) == 1
        record = handler.records[0]
        assert record.getMessage() == "Transfer posted"
        assert record.action == "transfer"
        assert record.resource == "transaction:1"
        assert record.tick == 5
        assert record.extra == {"amount": "10"}
    
    def test_bank_logs_operations(self):
        logger = get_logger("banksim.bank")
        previous_level = logger.level
        logger.setLevel(logging.INFO)
        handler = ListHandler()
        logger.addHandler(handler)
        try:
            bank = Bank(clock=SimulationClock(), config=BanksimConfig())
            client_id = bank.add_client(Client("John", "Doe"))
            bank.add_account(client_id, DebitAccount(balance=0))
        finally:
            logger.removeHandler(handler)
            logger.setLevel(previous_level)
        
        assert [r.action for r in handler.records] == ["add_client", "add_account"]
