"""
services/tracker_service.py
----------------------------
Keeps the derived views (totals, category breakdown, reminders) in step
with the subscription store.

The tracker registers itself as a store listener, so every add/remove
recomputes all three views before the mutating call returns. Reminders
are also recomputed by the scheduled job and on threshold changes.
"""

from datetime import date
from typing import Callable, Optional

from config import REMINDER_THRESHOLD_DAYS
from models.notification import Notification
from models.subscription import Subscription
from services.reminder_service import build_notifications, validate_threshold
from services.spend_service import CategorySpend, SpendTotals, by_category, totals
from services.subscription_store import SubscriptionStore
from utils.logger import get_logger

logger = get_logger(__name__)


class SubscriptionTracker:
    """
    Read side of the bot: exposes the current derived views.

    Args:
        store: The subscription store to follow.
        threshold_days: Initial reminder threshold (one of 1, 3, 5, 7).
        clock: Returns "today"; injectable for tests.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        threshold_days: int = REMINDER_THRESHOLD_DAYS,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.clock = clock
        self._threshold_days = validate_threshold(threshold_days)
        self._totals = SpendTotals()
        self._breakdown: list[CategorySpend] = []
        self._notifications: list[Notification] = []
        store.add_listener(self._on_change)
        self._on_change(store.list())

    # ── Views ─────────────────────────────────────────────

    @property
    def totals(self) -> SpendTotals:
        return self._totals

    @property
    def breakdown(self) -> list[CategorySpend]:
        return list(self._breakdown)

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    @property
    def threshold_days(self) -> int:
        return self._threshold_days

    # ── Commands ──────────────────────────────────────────

    def set_threshold(self, days: int) -> list[Notification]:
        """
        Change the reminder threshold and recompute reminders.

        Raises:
            ValueError: If ``days`` is not an allowed option.
        """
        self._threshold_days = validate_threshold(days)
        logger.info(f"Reminder threshold set to {days} days")
        return self.refresh_reminders()

    def refresh_reminders(self, today: Optional[date] = None) -> list[Notification]:
        """
        Rebuild the reminder list from scratch.
        Previously dismissed reminders come back if still due.
        """
        self._notifications = build_notifications(
            self.store.list(), today or self.clock(), self._threshold_days
        )
        return self.notifications

    def dismiss(self, notification_id: str) -> bool:
        """
        Hide a reminder until the next recompute.

        Returns:
            True if a reminder with that id was displayed.
        """
        remaining = [n for n in self._notifications if n.id != notification_id]
        dismissed = len(remaining) != len(self._notifications)
        self._notifications = remaining
        return dismissed

    # ── Listener ──────────────────────────────────────────

    def _on_change(self, subscriptions: list[Subscription]) -> None:
        self._totals = totals(subscriptions)
        self._breakdown = by_category(subscriptions)
        self._notifications = build_notifications(
            subscriptions, self.clock(), self._threshold_days
        )
        logger.debug(
            f"Recomputed views: {len(subscriptions)} subscriptions, "
            f"{len(self._notifications)} reminders"
        )
