"""Process configuration, read from the environment and an optional .env.

Built once by the composition root and handed to whatever needs it; no
module keeps its own settings instance or client handle.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # --- Storage ---
    DATA_DIR: Path = Path("data")

    # --- Service ---
    STORE_NAME: str = "Kibbeh Nayeh"
    SITE_URL: str = "http://localhost:8888"
    LOG_LEVEL: str = "INFO"

    # --- Payment gateway ---
    STRIPE_SECRET_KEY: str | None = None
    STRIPE_WEBHOOK_SECRET: str | None = None
    STRIPE_API_BASE: str = "https://api.stripe.com"
    WEBHOOK_TOLERANCE_SECONDS: int = 300
    GATEWAY_TIMEOUT_SECONDS: float = 10.0

    # --- Retry Configuration ---
    MAX_RETRIES: int = 3
    RETRY_DELAY: int = 1

    # --- Notifications (all optional; missing credentials disable a channel) ---
    RESEND_API_KEY: str | None = None
    NOTIFICATION_FROM_EMAIL: str = "orders@example.com"
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_FROM_NUMBER: str | None = None
    NOTIFICATION_WORKERS: int = 4

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def load_config(**overrides) -> AppConfig:
    return AppConfig(**overrides)
