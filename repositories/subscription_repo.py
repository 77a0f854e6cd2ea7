"""
repositories/subscription_repo.py
----------------------------------
Serializes the full subscription list to a single key-value entry.
The value is a JSON array, one object per record, in insertion order.
"""

import json
import math
from datetime import datetime

from models.subscription import BillingCycle, Category, Subscription
from repositories.kv_repo import KeyValueStore
from utils.errors import PersistedStateError
from utils.logger import get_logger

logger = get_logger(__name__)


class SubscriptionRepository:
    """Loads and saves the subscription list under one fixed key."""

    def __init__(self, kv_store: KeyValueStore, key: str):
        self.kv_store = kv_store
        self.key = key

    # ── READ ──────────────────────────────────────────────

    def load(self) -> list[Subscription]:
        """
        Read the stored subscription list.

        Returns:
            The stored subscriptions, or an empty list if the key is absent.

        Raises:
            PersistedStateError: If the stored value cannot be decoded.
        """
        raw = self.kv_store.get(self.key)
        if raw is None:
            logger.info(f"No stored subscriptions under '{self.key}', starting empty")
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistedStateError(self.key, f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise PersistedStateError(self.key, "expected a JSON array")

        subscriptions = []
        seen_ids = set()
        for index, item in enumerate(data):
            try:
                sub = self._dict_to_subscription(item)
            except (KeyError, TypeError, ValueError) as e:
                raise PersistedStateError(self.key, f"record #{index}: {e!r}") from e
            if sub.id in seen_ids:
                raise PersistedStateError(self.key, f"record #{index}: duplicate id {sub.id!r}")
            seen_ids.add(sub.id)
            subscriptions.append(sub)

        logger.info(f"Loaded {len(subscriptions)} subscriptions from '{self.key}'")
        return subscriptions

    # ── WRITE ─────────────────────────────────────────────

    def save(self, subscriptions: list[Subscription]) -> None:
        """
        Overwrite the stored list with ``subscriptions``.
        Write errors from the key-value store propagate unchanged.
        """
        payload = json.dumps(
            [self._subscription_to_dict(s) for s in subscriptions],
            ensure_ascii=False,
        )
        self.kv_store.set(self.key, payload)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _subscription_to_dict(sub: Subscription) -> dict:
        return {
            "id": sub.id,
            "name": sub.name,
            "price": sub.price,
            "cycle": sub.cycle.value,
            "paymentDate": sub.payment_date,
            "category": sub.category.value,
            "createdAt": sub.created_at.isoformat(),
        }

    @staticmethod
    def _dict_to_subscription(item: dict) -> Subscription:
        """Convert a stored JSON object to a Subscription domain object."""
        if not isinstance(item, dict):
            raise TypeError(f"expected an object, got {type(item).__name__}")
        name = item["name"]
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"name must be a non-empty string, got {name!r}")
        price = float(item["price"])
        # json.loads accepts NaN and Infinity
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"price must be positive, got {price}")
        return Subscription(
            id=str(item["id"]),
            name=name,
            price=price,
            cycle=BillingCycle(item["cycle"]),
            payment_date=item["paymentDate"],
            category=Category(item["category"]),
            created_at=datetime.fromisoformat(item["createdAt"]),
        )
