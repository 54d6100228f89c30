"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-jwt-secret-key"


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET     # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 2592000        # 30 days
    bcrypt_rounds: int = 12                  # bcrypt work factor

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./finance_tracker.db"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    # ── Ledger ───────────────────────────────────────────────────────────
    default_expense_category: str = "General"
    recent_transactions: int = 3   # entries in the summary's recent history

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    def uses_default_secret(self) -> bool:
        """True when no ``JWT_SECRET`` was configured for this deployment."""
        return self.jwt_secret == DEFAULT_JWT_SECRET


config = Settings()
