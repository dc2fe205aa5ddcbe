"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    default_tax_year: str = "2024-25"
    default_uplift_percentage: float = 20.0
    tax_years_file: str = "tax_years.yaml"
    auth_username: str = ""
    auth_password: str = ""
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
