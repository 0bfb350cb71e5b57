"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict


class BankConfig(BaseSettings):
    """Retail bank simulation configuration"""

    model_config = SettingsConfigDict(
        env_prefix="RETAIL_BANK_",
        env_file=".env",
        case_sensitive=False,
    )

    # Bank identity and capital
    bank_name: str = "OOP Bank"
    bank_location: str = "Digital City"
    starting_capital: Decimal = Decimal("1000000")
    transaction_fee: Decimal = Decimal("0.50")  # Not charged anywhere yet

    # Business rules configuration
    daily_withdrawal_limit: Decimal = Decimal("1000")
    savings_interest_rate: Decimal = Decimal("0.02")  # Annual
    savings_min_balance: Decimal = Decimal("100")
    checking_overdraft_limit: Decimal = Decimal("500")
    checking_monthly_fee: Decimal = Decimal("10")

    # Identifier sequences
    first_customer_id: int = 1
    first_account_number: int = 1000
    first_transaction_id: int = 1

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
