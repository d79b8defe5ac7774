from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./forward_fees.db"
    app_name: str = "Forward Fees"
    app_version: str = "1.0.0"
    debug: bool = False
    default_fee_percent: str = "5"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
