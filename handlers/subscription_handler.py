"""
handlers/subscription_handler.py
---------------------------------
Handles subscription list, add/delete and spend summary commands.
Structured commands only; parsing here turns chat text into raw form input.
"""

import re

from telegram import Update
from telegram.ext import ContextTypes

from models.subscription import ALL_CATEGORIES, Category, CategoryFilter
from security.rate_limiter import rate_limited
from services.chart_service import ChartService
from services.tracker_service import SubscriptionTracker
from utils.formatting import cycle_label, format_currency
from utils.logger import get_logger

logger = get_logger(__name__)
chart_service = ChartService()

# Full-width digits typed on Japanese keyboards
_FW_DIGITS = str.maketrans("０１２３４５６７８９．", "0123456789.")

_CYCLE_MAP = {
    "monthly": "monthly", "月額": "monthly", "毎月": "monthly", "月": "monthly",
    "yearly": "yearly", "年額": "yearly", "毎年": "yearly", "年": "yearly",
}

_ALL_LABELS = {ALL_CATEGORIES.label, "all"}

ADD_USAGE = (
    "📝 *サブスク追加*\n\n"
    "*書式:*\n"
    "`/add 名前 | 金額 | 月額/年額 | 支払日 | カテゴリ`\n\n"
    "*例:*\n"
    "• `/add Netflix | 1490 | 月額 | 毎月15日 | 動画配信`\n"
    "• `/add Office | 12984 | 年額 | 毎年4日`\n\n"
    "*カテゴリ:* " + "、".join(c.value for c in Category)
)


def tracker_from(context: ContextTypes.DEFAULT_TYPE) -> SubscriptionTracker:
    """The tracker built in main() and shared through bot_data."""
    return context.bot_data["tracker"]


def parse_add_args(text: str) -> dict | None:
    """
    Split `/add` arguments into raw form fields:
      名前 | 金額 | サイクル | 支払日 [| カテゴリ]

    Returns:
        Dict of raw strings for SubscriptionStore.add(), or None if fewer
        than four fields were given.
    """
    parts = [p.strip() for p in text.split("|")]
    if len(parts) < 4:
        return None

    price = parts[1].translate(_FW_DIGITS)
    price = re.sub(r"[¥￥円,\s]", "", price)
    cycle = _CYCLE_MAP.get(parts[2].lower(), parts[2])

    return {
        "name": parts[0],
        "price": price,
        "cycle": cycle,
        "payment_date": parts[3],
        "category": parts[4] if len(parts) >= 5 else None,
    }


def parse_category_filter(text: str) -> CategoryFilter:
    """
    Map a category argument to a filter. Empty or すべて means every category.

    Raises:
        ValueError: If the text names no known category.
    """
    text = text.strip()
    if not text or text.lower() in _ALL_LABELS:
        return ALL_CATEGORIES
    return Category(text)


@rate_limited
async def list_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /list [category] - show subscriptions, optionally filtered."""
    tracker = tracker_from(context)
    try:
        category_filter = parse_category_filter(" ".join(context.args or []))
    except ValueError:
        await update.message.reply_text(
            "⚠️ 不明なカテゴリです。\nカテゴリ: " + "、".join(c.value for c in Category)
        )
        return

    subscriptions = tracker.store.list(category_filter)
    if not subscriptions:
        await update.message.reply_text("📭 サブスクリプションがありません")
        return

    lines = ["📋 サブスク一覧:\n"]
    for sub in subscriptions:
        lines.append(
            f"• {sub.name}: {format_currency(sub.price)} ({cycle_label(sub.cycle)})\n"
            f"  {sub.category.value} | {sub.payment_date}\n"
            f"  🔖 {sub.id}"
        )
    await update.message.reply_text("\n".join(lines))


@rate_limited
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add - create a subscription from the structured format."""
    if not context.args:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    fields = parse_add_args(" ".join(context.args))
    if fields is None:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    tracker = tracker_from(context)
    sub = tracker.store.add(**fields)
    if sub is None:
        await update.message.reply_text("🤔 入力内容を確認してください。\n\n" + ADD_USAGE, parse_mode="Markdown")
        return

    msg = (
        f"✅ 追加しました:\n"
        f"  📌 {sub.name}\n"
        f"  💴 {format_currency(sub.price)} ({cycle_label(sub.cycle)})\n"
        f"  📅 {sub.payment_date}\n"
        f"  📂 {sub.category.value}\n"
        f"  🔖 {sub.id}"
    )
    if not sub.has_schedule():
        msg += "\n\n⚠️ 支払日から日付を読み取れないため、通知の対象外です。"
    await update.message.reply_text(msg)


@rate_limited
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete <id> - remove a subscription.
    Usage: /delete 3f2a...
    """
    if not context.args:
        await update.message.reply_text("⚠️ 使い方: /delete <ID>")
        return

    subscription_id = context.args[0].strip()
    removed = tracker_from(context).store.remove(subscription_id)
    if removed:
        await update.message.reply_text(f"🗑️ {subscription_id} を削除しました。")
    else:
        await update.message.reply_text(f"⚠️ {subscription_id} は見つかりません。")


@rate_limited
async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /summary - monthly and yearly totals."""
    tracker = tracker_from(context)
    totals = tracker.totals
    await update.message.reply_text(
        f"💰 月額合計: {format_currency(totals.monthly)}\n"
        f"📆 年額合計: {format_currency(totals.yearly)}\n"
        f"📋 件数: {len(tracker.store)}"
    )


@rate_limited
async def categories_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /categories - spend by category as text and pie chart."""
    breakdown = tracker_from(context).breakdown
    if not breakdown:
        await update.message.reply_text("📭 データがありません")
        return

    lines = ["📊 カテゴリ別支出（月額）:\n"]
    for item in breakdown:
        lines.append(f"  • {item.category.value}: {format_currency(item.amount)}")
    await update.message.reply_text("\n".join(lines))

    chart = chart_service.generate_category_pie(breakdown)
    if chart is not None:
        await update.message.reply_photo(photo=chart)
