"""
main.py
-------
Entry point for the SubsBot Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Load the stored subscriptions and build the tracker.
    - Configure and start the Telegram bot with all handlers.
    - Own the daily payment reminder job for the bot's lifetime.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler, ContextTypes

from config import NOTIFY_CHAT_ID, STORAGE_KEY, TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.reminder_handler import (
    dismiss_command,
    format_notifications,
    remind_days_command,
    reminders_command,
)
from handlers.start_handler import help_command, start_command
from handlers.subscription_handler import (
    add_command,
    categories_command,
    delete_command,
    list_command,
    summary_command,
)
from models.notification import Notification
from repositories.kv_repo import PostgresKeyValueStore
from repositories.subscription_repo import SubscriptionRepository
from services.reminder_scheduler import ReminderScheduler
from services.subscription_store import SubscriptionStore
from services.tracker_service import SubscriptionTracker
from utils.logger import get_logger

logger = get_logger(__name__)


async def send_reminders(context: ContextTypes.DEFAULT_TYPE, notifications: list[Notification]) -> None:
    """
    Scheduled job sink: push the current reminders to NOTIFY_CHAT_ID.
    Does nothing when no chat is configured.
    """
    if NOTIFY_CHAT_ID is None:
        return
    try:
        await context.bot.send_message(
            chat_id=NOTIFY_CHAT_ID,
            text=format_notifications(notifications),
        )
        logger.info(f"Sent {len(notifications)} reminder(s) to chat {NOTIFY_CHAT_ID}")
    except Exception as e:
        logger.error(f"Failed to send reminders to chat {NOTIFY_CHAT_ID}: {e}")


async def on_startup(application: Application) -> None:
    """Register the command menu and start the reminder job."""
    commands = [
        BotCommand("list", "📋 サブスク一覧"),
        BotCommand("add", "➕ サブスク追加"),
        BotCommand("delete", "🗑️ サブスク削除"),
        BotCommand("summary", "💰 月額・年額の合計"),
        BotCommand("categories", "📊 カテゴリ別支出"),
        BotCommand("reminders", "🔔 支払い通知"),
        BotCommand("remind_days", "⏰ 通知タイミング"),
        BotCommand("dismiss", "👌 通知を非表示"),
        BotCommand("help", "📖 ヘルプ"),
    ]
    await application.bot.set_my_commands(commands)
    application.bot_data["scheduler"].start(application.job_queue)
    logger.info("Bot commands registered, reminder job started.")


async def on_shutdown(application: Application) -> None:
    """Stop the reminder job and release the database pool."""
    try:
        application.bot_data["scheduler"].stop()
    finally:
        close_pool()


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Load state (malformed data aborts startup) ────
    repo = SubscriptionRepository(PostgresKeyValueStore(), STORAGE_KEY)
    store = SubscriptionStore(repo)
    store.load()
    tracker = SubscriptionTracker(store)
    scheduler = ReminderScheduler(tracker, on_reminders=send_reminders)

    # ── 3. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = (
        Application.builder()
        .token(TELEGRAM_BOT_TOKEN)
        .post_init(on_startup)
        .post_shutdown(on_shutdown)
        .build()
    )
    app.bot_data["tracker"] = tracker
    app.bot_data["scheduler"] = scheduler

    # ── 4. Register command handlers ──────────────────────
    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("list", list_command))
    app.add_handler(CommandHandler("add", add_command))
    app.add_handler(CommandHandler("delete", delete_command))
    app.add_handler(CommandHandler("summary", summary_command))
    app.add_handler(CommandHandler("categories", categories_command))
    app.add_handler(CommandHandler("reminders", reminders_command))
    app.add_handler(CommandHandler("remind_days", remind_days_command))
    app.add_handler(CommandHandler("dismiss", dismiss_command))

    # ── 5. Start polling ──────────────────────────────────
    logger.info("🚀 SubsBot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    logger.info("SubsBot stopped.")


if __name__ == "__main__":
    main()
