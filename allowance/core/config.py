from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ALLOWANCE_", env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite:///./allowance.db"
    SQL_ECHO: bool = False

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_MIN: int = 60 * 10
    REFRESH_TOKEN_DAYS: int = 30

    LOG_LEVEL: str = "INFO"
settings = Settings()
