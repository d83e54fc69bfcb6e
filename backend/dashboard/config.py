"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Transaction Dashboard API"
    debug: bool = False
    log_level: str = "INFO"
    database_path: str = "transactions.db"

    # Third-party feed used to seed the database
    seed_url: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    seed_timeout: float = 30.0

    # Month used by the combined endpoint when none is supplied
    default_month: str = "January"

    # Bar chart page
    dashboard_month: str = "June"
    chart_y_max: int = 80

    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
