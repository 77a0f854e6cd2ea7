"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# Chat that receives the daily reminder push (optional)
_raw_chat_id = os.getenv("NOTIFY_CHAT_ID", "").strip()
NOTIFY_CHAT_ID: int | None = int(_raw_chat_id) if _raw_chat_id else None

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "subsbot")
DB_USER: str = os.getenv("DB_USER", "subsbot_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# Key under which the whole subscription list is stored
STORAGE_KEY: str = os.getenv("STORAGE_KEY", "subscriptions")

# ── Reminders ─────────────────────────────────────────────
REMINDER_THRESHOLD_OPTIONS: tuple[int, ...] = (1, 3, 5, 7)
REMINDER_THRESHOLD_DAYS: int = int(os.getenv("REMINDER_THRESHOLD_DAYS", "3"))
if REMINDER_THRESHOLD_DAYS not in REMINDER_THRESHOLD_OPTIONS:
    raise ValueError(
        f"REMINDER_THRESHOLD_DAYS must be one of {REMINDER_THRESHOLD_OPTIONS}, "
        f"got {REMINDER_THRESHOLD_DAYS}"
    )
REMINDER_CHECK_INTERVAL: timedelta = timedelta(hours=24)

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_MESSAGES: int = int(os.getenv("RATE_LIMIT_MESSAGES", "30"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# ── Currency ──────────────────────────────────────────────
DEFAULT_CURRENCY: str = "JPY"

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
