"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class BanksimConfig(BaseSettings):
    """Bank simulator configuration"""
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Simulated time
    month_duration: int = 30  # ticks between interest commits
    
    # Maximum single withdrawal per privilege level
    initial_withdrawal_limit: str = "1000"
    intermediate_withdrawal_limit: str = "10000"
    full_withdrawal_limit: Optional[str] = None  # None means unbounded
    
    # Feature flags
    enable_audit_logging: bool = True
    
    class Config:
        env_prefix = "BANKSIM_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BanksimConfig()


def get_config() -> BanksimConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BanksimConfig:
    """Reload configuration from environment"""
    global config
    config = BanksimConfig()
    return config
