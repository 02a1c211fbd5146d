from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./legate.db"
    SECRET_KEY: str = "dev-insecure-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS origins for the web client
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Billing
    DEFAULT_CURRENCY: str = "USD"
    # Stored amounts above this value are taken to be integer cents
    LEGACY_CENTS_THRESHOLD: int = 10_000

    LOG_LEVEL: str = "INFO"


settings = Settings()
