from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "POS Admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # ── Database ─────────────────────────────────────────────────
    mongodb_uri: Optional[str] = None
    database_name: str = "pos_admin"
    profile_collection: str = "users_profile"
    identity_collection: str = "auth_users"

    # ── Sessions / Security ──────────────────────────────────────
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # 12 hours
    bcrypt_rounds: int = 12
    session_cookie_name: str = "access_token"
    session_cookie_secure: bool = False

    # ── Accounts ─────────────────────────────────────────────────
    allow_self_signup: bool = True
    default_signup_role: str = "CASHIER"
    default_page_size: int = 10

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]

    class Config:
        env_file = ".env.local"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
