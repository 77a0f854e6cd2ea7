"""
services/reminder_service.py
-----------------------------
Computes days until each subscription's next payment day and builds the
reminder list for those falling within the threshold.

Payment timing is a day of month only. A day that has already passed
(or is today) rolls over to next month.
"""

from datetime import date
from typing import Iterable
from uuid import uuid4

from dateutil.relativedelta import relativedelta

from config import REMINDER_THRESHOLD_OPTIONS
from models.notification import Notification
from models.subscription import Subscription
from utils.logger import get_logger

logger = get_logger(__name__)


def validate_threshold(days: int) -> int:
    """
    Check a reminder threshold against the allowed options.

    Raises:
        ValueError: If ``days`` is not one of REMINDER_THRESHOLD_OPTIONS.
    """
    if days not in REMINDER_THRESHOLD_OPTIONS:
        raise ValueError(
            f"Reminder threshold must be one of {REMINDER_THRESHOLD_OPTIONS}, got {days}"
        )
    return days


def days_in_month(today: date) -> int:
    """Number of days in the month containing ``today`` (leap-year aware)."""
    last_day = today + relativedelta(day=31)
    return last_day.day


def days_until_payment(payment_day: int, today: date) -> int:
    """
    Days from ``today`` until the next occurrence of ``payment_day``.

    A payment day on or before today counts from the end of this month.
    The result is not clamped to the length of next month: day 31 seen
    from a 30-day month is 31 days away even if next month has 30 days.
    """
    if payment_day > today.day:
        return payment_day - today.day
    return (days_in_month(today) - today.day) + payment_day


def reminder_message(subscription: Subscription, days_remaining: int) -> str:
    return f"「{subscription.name}」の支払いがあと{days_remaining}日後に予定されています。"


def build_notifications(
    subscriptions: Iterable[Subscription],
    today: date,
    threshold_days: int,
) -> list[Notification]:
    """
    Build the reminder list for one pass.

    Args:
        subscriptions: Current subscription set, in store order.
        today: Reference date for the pass.
        threshold_days: Remind when the payment is this many days away or less.

    Returns:
        A new list of Notification objects, in store order.
    """
    notifications = []
    for sub in subscriptions:
        if sub.payment_day is None:
            logger.debug(f"No payment day in '{sub.payment_date}' for '{sub.name}', skipping")
            continue

        days = days_until_payment(sub.payment_day, today)
        if days <= threshold_days:
            notifications.append(Notification(
                id=uuid4().hex,
                subscription=sub,
                days_remaining=days,
                message=reminder_message(sub, days),
            ))

    return notifications
