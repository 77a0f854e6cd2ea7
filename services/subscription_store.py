"""
services/subscription_store.py
-------------------------------
Authoritative in-memory set of subscriptions.

Every mutation persists the full list and then synchronously notifies the
registered listeners, so derived views are up to date when add()/remove()
return.
"""

import math
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from models.subscription import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORY,
    AllCategories,
    BillingCycle,
    Category,
    CategoryFilter,
    Subscription,
)
from repositories.subscription_repo import SubscriptionRepository
from utils.logger import get_logger

logger = get_logger(__name__)

Listener = Callable[[list[Subscription]], None]


class SubscriptionStore:
    """
    Holds the subscription set and keeps the persisted copy in sync.

    Responsibilities:
        - Validate raw form input and create records.
        - Remove records by id.
        - Persist the whole list after each mutation.
        - Notify listeners with the new snapshot.
    """

    def __init__(self, repo: SubscriptionRepository):
        self.repo = repo
        self._subscriptions: list[Subscription] = []
        self._listeners: list[Listener] = []

    def load(self) -> None:
        """
        Replace the in-memory set with the persisted one.

        Raises:
            PersistedStateError: If the stored data is malformed.
        """
        self._subscriptions = self.repo.load()
        self._notify()

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked with the new snapshot after every change."""
        self._listeners.append(listener)

    # ── CREATE ────────────────────────────────────────────

    def add(
        self,
        name: str,
        price: str,
        cycle: str,
        payment_date: str,
        category: Optional[str] = None,
    ) -> Optional[Subscription]:
        """
        Create a subscription from raw form input.

        Args:
            name: Display name.
            price: Price per cycle as typed, e.g. "1490".
            cycle: "monthly" or "yearly".
            payment_date: Free-text schedule, e.g. "毎月15日".
            category: Category label; empty means the default category.

        Returns:
            The new Subscription, or None if the input was rejected.

        Raises:
            Exception: Whatever the key-value store raises on a failed write.
        """
        if not _filled(name) or not _filled(price) or not _filled(payment_date):
            logger.info("Rejected subscription: name, price and payment date are required")
            return None

        try:
            amount = float(price)
        except ValueError:
            logger.info(f"Rejected subscription '{name}': price {price!r} is not a number")
            return None
        if not math.isfinite(amount) or amount <= 0:
            logger.info(f"Rejected subscription '{name}': price must be positive")
            return None

        try:
            billing_cycle = BillingCycle(cycle)
            sub_category = Category(category) if _filled(category) else DEFAULT_CATEGORY
        except ValueError as e:
            logger.info(f"Rejected subscription '{name}': {e}")
            return None

        subscription = Subscription(
            id=uuid4().hex,
            name=name.strip(),
            price=amount,
            cycle=billing_cycle,
            payment_date=payment_date.strip(),
            category=sub_category,
            created_at=datetime.now(),
        )
        self._subscriptions.append(subscription)
        logger.info(f"Added subscription '{subscription.name}' #{subscription.id}")
        self._commit()
        return subscription

    # ── READ ──────────────────────────────────────────────

    def list(self, category_filter: CategoryFilter = ALL_CATEGORIES) -> list[Subscription]:
        """Return all subscriptions, or only those in one category."""
        if isinstance(category_filter, AllCategories):
            return list(self._subscriptions)
        return [s for s in self._subscriptions if s.category == category_filter]

    def get(self, subscription_id: str) -> Optional[Subscription]:
        """Fetch a single subscription by id."""
        for sub in self._subscriptions:
            if sub.id == subscription_id:
                return sub
        return None

    def __len__(self) -> int:
        return len(self._subscriptions)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, subscription_id: str) -> bool:
        """
        Remove a subscription by id. Unknown ids are a no-op.

        Returns:
            True if a record was removed.
        """
        remaining = [s for s in self._subscriptions if s.id != subscription_id]
        removed = len(remaining) != len(self._subscriptions)
        self._subscriptions = remaining
        if removed:
            logger.info(f"Deleted subscription #{subscription_id}")
        self._commit()
        return removed

    # ── HELPERS ───────────────────────────────────────────

    def _commit(self) -> None:
        """Persist the current set, then recompute derived views even if the write failed."""
        try:
            self.repo.save(self._subscriptions)
        finally:
            self._notify()

    def _notify(self) -> None:
        snapshot = list(self._subscriptions)
        for listener in self._listeners:
            listener(snapshot)


def _filled(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ""
