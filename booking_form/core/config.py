from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOCALE: str = "en"

    EMAIL_CHECK_URL: str | None = None
    EMAIL_CHECK_TIMEOUT_SECONDS: float = 5.0


settings = Settings()
