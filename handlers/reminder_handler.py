"""
handlers/reminder_handler.py
-----------------------------
Shows payment reminders and lets the user tune or dismiss them.
"""

from telegram import Update
from telegram.ext import ContextTypes

from config import REMINDER_THRESHOLD_OPTIONS
from models.notification import Notification
from security.rate_limiter import rate_limited
from handlers.subscription_handler import tracker_from
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)

_OPTIONS_TEXT = " / ".join(f"{d}日前" for d in REMINDER_THRESHOLD_OPTIONS)


def format_notifications(notifications: list[Notification]) -> str:
    """Render reminders as one chat message."""
    lines = ["🔔 支払い通知\n"]
    for note in notifications:
        lines.append(
            f"• {note.message}\n"
            f"  金額: {format_currency(note.subscription.price)} | "
            f"支払日: {note.subscription.payment_date}\n"
            f"  /dismiss {note.id}"
        )
    return "\n".join(lines)


@rate_limited
async def reminders_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reminders - list reminders currently displayed."""
    tracker = tracker_from(context)
    notifications = tracker.notifications
    if not notifications:
        await update.message.reply_text(
            f"🔕 {tracker.threshold_days}日以内に予定されている支払いはありません。"
        )
        return
    await update.message.reply_text(format_notifications(notifications))


@rate_limited
async def remind_days_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /remind_days <n> - change how many days ahead to remind.
    Usage: /remind_days 5
    """
    tracker = tracker_from(context)
    if not context.args:
        await update.message.reply_text(
            f"⏰ 現在の通知タイミング: {tracker.threshold_days}日前\n"
            f"選択肢: {_OPTIONS_TEXT}\n"
            f"例: /remind_days 5"
        )
        return

    try:
        notifications = tracker.set_threshold(int(context.args[0]))
    except ValueError:
        await update.message.reply_text(f"⚠️ 選択肢: {_OPTIONS_TEXT}")
        return

    await update.message.reply_text(
        f"✅ 通知タイミングを{tracker.threshold_days}日前に変更しました。"
        f"（通知 {len(notifications)}件）"
    )


@rate_limited
async def dismiss_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /dismiss <id> - hide a reminder until the next check."""
    if not context.args:
        await update.message.reply_text("⚠️ 使い方: /dismiss <通知ID>")
        return

    if tracker_from(context).dismiss(context.args[0].strip()):
        await update.message.reply_text("👌 通知を非表示にしました。")
    else:
        await update.message.reply_text("⚠️ その通知は見つかりません。")
