from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────
    database_hostname: str = "localhost"
    database_port: str = "5432"
    database_password: str = ""
    database_name: str = "claryntia"
    database_username: str = "postgres"
    # Full SQLAlchemy URL; when set it wins over the composed Postgres URL
    database_uri: Optional[str] = None

    # ── Admin session ─────────────────────────────────────────
    secret_key: str
    algorithm: str = "HS256"
    session_cookie_name: str = "claryntia_session"
    session_max_age_days: int = 30
    environment: str = "development"

    # ── Razorpay ──────────────────────────────────────────────
    razorpay_key_id: str
    razorpay_key_secret: str

    # ── Sanity CMS ────────────────────────────────────────────
    sanity_project_id: str
    sanity_dataset: str = "production"
    sanity_api_version: str = "2024-01-24"
    sanity_api_token: Optional[str] = None
    sanity_use_cdn: bool = True
    sanity_timeout_seconds: float = 10.0

    # ── UPI (manual payment) ──────────────────────────────────
    # Used when the CMS site settings carry no UPI ID
    upi_vpa: str = ""
    upi_payee_name: str = "Claryntia"

    # ── Mail ──────────────────────────────────────────────────
    mail_username: str = ""
    mail_password: str = ""
    mail_from: str = "noreply@claryntia.com"
    mail_server: str = "smtp.gmail.com"
    mail_port: int = 587
    mail_suppress_send: bool = False
    # Lead notifications are skipped entirely when unset
    lead_notify_email: Optional[str] = None

    # ── App ───────────────────────────────────────────────────
    cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Split comma-separated origins into a list, stripping whitespace."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def database_url(self) -> str:
        if self.database_uri:
            return self.database_uri
        return (
            f"postgresql://{self.database_username}:{self.database_password}"
            f"@{self.database_hostname}:{self.database_port}/{self.database_name}"
        )

    @property
    def cookie_secure(self) -> bool:
        return self.environment == "production"

    class Config:
        env_file = ".env"
        # Case-insensitive so DATABASE_HOSTNAME and database_hostname both work
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings loader: reads .env once and reuses it.
    Use this everywhere instead of instantiating Settings() directly.
    """
    return Settings()


# Module-level singleton for convenience imports
settings = get_settings()
