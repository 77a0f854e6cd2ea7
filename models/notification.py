"""
models/notification.py
----------------------
Derived payment reminder. A fresh set is built on every reminder pass.
"""

from dataclasses import dataclass

from models.subscription import Subscription


@dataclass(frozen=True)
class Notification:
    """
    An upcoming-payment reminder for one subscription.

    Attributes:
        id: Generated per computation; not stable across passes.
        subscription: The subscription the reminder is about.
        days_remaining: Days until the next payment day (>= 0).
        message: Human-readable reminder text.
    """
    id: str
    subscription: Subscription
    days_remaining: int
    message: str

    def __str__(self) -> str:
        return self.message
