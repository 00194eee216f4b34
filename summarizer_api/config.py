# summarizer_api/config.py
import os
from pathlib import Path

# load summarizer_api/.env if present, else the nearest .env up the tree
from dotenv import load_dotenv, find_dotenv

_explicit_env = Path(__file__).with_name(".env")
if _explicit_env.exists():
    load_dotenv(_explicit_env)
else:
    load_dotenv(find_dotenv(".env", usecwd=True))


def _csv(value: str) -> list[str]:
    return [o.strip() for o in value.split(",") if o.strip()]


class Settings:
    DATABASE_URL: str | None = os.getenv("DATABASE_URL") or None

    # Summarization webhook (POST text/plain) and the best-effort delete notification
    WEBHOOK_URL: str | None = os.getenv("WEBHOOK_URL") or None
    DELETE_WEBHOOK_URL: str | None = os.getenv("DELETE_WEBHOOK_URL") or None
    WEBHOOK_TIMEOUT_S: float = float(os.getenv("WEBHOOK_TIMEOUT_S", "120"))
    NOTIFY_TIMEOUT_S: float = float(os.getenv("NOTIFY_TIMEOUT_S", "10"))

    # Session cookie
    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev_secret_change_me")
    JWT_ALGO: str = "HS256"
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 30)))
    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "0") == "1"

    CORS_ORIGINS: list[str] = _csv(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
