"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *SubsBot へようこそ!*
サブスクの支払いを管理します 💴

*🔧 コマンド:*
/list - サブスク一覧 (例: /list 音楽)
/add - サブスク追加
/delete - サブスク削除 (例: /delete <ID>)
/summary - 月額・年額の合計
/categories - カテゴリ別支出とグラフ
/reminders - 支払い通知
/remind\\_days - 通知タイミング (1/3/5/7日前)
/dismiss - 通知を非表示
/help - ヘルプ
"""


@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")
    await update.message.reply_text(
        f"こんにちは、{user.first_name}さん! 👋\n"
        f"サブスクの金額と支払日を登録すると、支払い前にお知らせします。\n\n"
        f"/help でコマンド一覧を表示します。"
    )


@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
