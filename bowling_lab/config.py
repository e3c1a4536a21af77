"""
Application settings
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> list:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    """Settings from environment variables"""

    # SQLite roster store
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "bowling_lab.db")

    # Remote roster source used by the admin refresh
    ROSTER_URL: str = os.getenv("ROSTER_URL", "")
    # Extra hosts a refresh request may name; the ROSTER_URL host is always allowed
    ROSTER_ALLOWED_HOSTS: list = _split_csv(os.getenv("ROSTER_ALLOWED_HOSTS", ""))
    REMOTE_TIMEOUT_S: float = float(os.getenv("REMOTE_TIMEOUT_S", "10"))

    # Shared code required in the X-Admin-Code header for roster refresh
    ADMIN_CODE: str = os.getenv("ADMIN_CODE", "change-me")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")

    # Dev frontends plus any extra comma-separated origins
    CORS_ORIGINS: list = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ] + _split_csv(os.getenv("CORS_ORIGINS", ""))


settings = Settings()
