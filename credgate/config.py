"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped default; startup refuses to sign with it
PLACEHOLDER_JWT_SECRET_KEY = "change-me-in-production-use-env-var"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/credgate.db"
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    jwt_secret_key: str = PLACEHOLDER_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = 30

    # Bcrypt work factor (higher = more secure but slower)
    # 12 is bcrypt's own default; tests drop this to 4
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CREDGATE_",
        case_sensitive=False
    )


settings = Settings()
