"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/recipe_finder.db"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Session Configuration
    secret_key: str = "change-me-in-production-use-env-var"
    session_cookie_name: str = "recipe_finder_session"

    # Bcrypt work factor (higher = more secure but slower)
    # Tests lower this to 4
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
