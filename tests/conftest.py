from datetime import date, datetime
from typing import Optional

import pytest

from models.subscription import BillingCycle, Category, Subscription
from repositories.subscription_repo import SubscriptionRepository
from services.subscription_store import SubscriptionStore
from services.tracker_service import SubscriptionTracker

# June has 30 days
TODAY = date(2024, 6, 20)


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore that records every write."""

    def __init__(self, initial: Optional[dict] = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value


class FailingKeyValueStore(InMemoryKeyValueStore):
    """KeyValueStore whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")


def make_subscription(
    name: str = "Netflix",
    price: float = 1490.0,
    cycle: BillingCycle = BillingCycle.MONTHLY,
    payment_date: str = "毎月15日",
    category: Category = Category.VIDEO_STREAMING,
    id: Optional[str] = None,
) -> Subscription:
    """Build a record directly, bypassing the store's input validation."""
    return Subscription(
        id=id or f"sub-{name}",
        name=name,
        price=price,
        cycle=cycle,
        payment_date=payment_date,
        category=category,
        created_at=datetime(2024, 1, 1, 9, 30),
    )


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repo(kv_store):
    return SubscriptionRepository(kv_store, "subscriptions")


@pytest.fixture
def store(repo):
    return SubscriptionStore(repo)


@pytest.fixture
def tracker(store):
    return SubscriptionTracker(store, threshold_days=3, clock=lambda: TODAY)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_sub():
    return make_subscription


@pytest.fixture
def failing_store():
    """Store whose persistence layer rejects every write."""
    return SubscriptionStore(SubscriptionRepository(FailingKeyValueStore(), "subscriptions"))
