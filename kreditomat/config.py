"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./kreditomat.db"

    # Service
    service_name: str = "kreditomat-calculator"
    log_level: str = "INFO"

    # Loan form ranges (slider bounds)
    default_annual_rate: float = 0.28
    min_amount: float = 500_000
    max_amount: float = 50_000_000
    min_term_months: int = 3
    max_term_months: int = 36

    # Cached loan form data
    loan_data_ttl_hours: float = 24.0

    # Display
    currency_label: str = "сум"


settings = Settings()
