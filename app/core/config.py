from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_ANON_KEY: str | None = None

    BUSINESS_TIMEZONE: str = "Australia/Brisbane"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    PRICING_FIXTURE_PATH: str = "./data/pricing_fixture.json"
    DEFAULT_DURATION_MINUTES: int = 60
    DEFAULT_TAX_RATE: Decimal = Decimal("10")


settings = Settings()
