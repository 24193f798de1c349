from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from hrm_access.security.config import DEFAULT_ACCESS_CONFIG_PATH


class Settings(BaseSettings):
    """
    App settings.

    Notes:
    - Defaults are local and deterministic so the demo runs without setup.
    - Every field can be overridden with an ``HRM_``-prefixed env var.
    - ``session_secret`` must be replaced outside local development.
    """

    model_config = SettingsConfigDict(env_prefix="HRM_", extra="ignore")

    db_url: str | None = None
    access_config_path: str | None = None
    log_level: str = "INFO"

    session_secret: str = "dev-only-session-secret-change-me-0123456789"
    session_ttl_seconds: int = 8 * 60 * 60
    session_cookie_name: str = "hrm_session"
    session_cookie_secure: bool = False

    # Argon2id cost parameters for new password hashes.
    password_time_cost: int = 3
    password_memory_cost: int = 64 * 1024
    password_parallelism: int = 4

    # Demo accounts seeded into an empty database.
    demo_password: str = "demo123"
    admin_email: str = "admin@example.com"
    hr_email: str = "hr@example.com"
    manager_email: str = "manager@example.com"
    employee_email: str = "employee@example.com"

    def resolved_db_url(self) -> str:
        if self.db_url:
            return self.db_url

        repo_root = Path(__file__).resolve().parents[1]
        db_path = repo_root / "hrm.db"
        return f"sqlite:///{db_path}"

    def resolved_access_config_path(self) -> Path:
        if self.access_config_path:
            return Path(self.access_config_path)
        return DEFAULT_ACCESS_CONFIG_PATH


@lru_cache
def get_settings() -> Settings:
    return Settings()
