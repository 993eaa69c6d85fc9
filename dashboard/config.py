from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./dashboard.sqlite"
    app_env: str = "dev"
    service_name: str = "ambient-dashboard"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # IANA zone used as "now" for relative quick-input phrases
    timezone: str = "UTC"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", case_sensitive=False)


settings = Settings()
