from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "tinyapp"
    app_version: str = "1.0.0"
    secret_key: str = "your-secret-key-here-change-in-production"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Short links
    base_url: str = "http://127.0.0.1:8080"
    short_key_length: int = 6

    # Accounts
    user_id_length: int = 6
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)  # bcrypt cost factor

    # Session cookie (signed, carries user_id and visitor_id)
    session_cookie: str = "session"
    session_max_age: int = 24 * 60 * 60  # seconds
    visitor_id_length: int = 8

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
