"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class BankAccountsConfig(BaseSettings):
    """Bank accounts service configuration"""
    
    # Storage configuration
    storage_type: str = "memory"  # memory or postgresql
    database_url: str = ""
    database_pool_size: int = 10
    
    # Downstream services (empty = use in-memory doubles)
    customers_service_url: str = ""
    transactions_service_url: str = ""
    http_timeout: float = 5.0
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8085
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    class Config:
        env_prefix = "BANK_ACCOUNTS_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BankAccountsConfig()


def get_config() -> BankAccountsConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankAccountsConfig:
    """Reload configuration from environment"""
    global config
    config = BankAccountsConfig()
    return config
