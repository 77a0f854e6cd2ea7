"""
models/subscription.py
----------------------
Domain model for subscriptions (recurring monthly or yearly charges).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

# "毎月15日" -> 15. ASCII and full-width digits only; int() accepts both.
_PAYMENT_DAY_RE = re.compile(r"([0-9０-９]+)日")


class BillingCycle(str, Enum):
    """How often a subscription is charged."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Category(str, Enum):
    """
    Closed set of spend categories, in display order.
    Used only for aggregation and filtering.
    """
    ENTERTAINMENT = "エンターテイメント"
    SOFTWARE = "ソフトウェア"
    MUSIC = "音楽"
    VIDEO_STREAMING = "動画配信"
    OTHER = "その他"


DEFAULT_CATEGORY = Category.OTHER


class AllCategories:
    """Filter selector meaning "every category". Never stored on a record."""

    label = "すべて"

    def __repr__(self) -> str:
        return "ALL_CATEGORIES"


ALL_CATEGORIES = AllCategories()

CategoryFilter = Union[AllCategories, Category]


def parse_payment_day(payment_date: str) -> Optional[int]:
    """
    Extract the day of month from a free-text schedule such as "毎月15日".

    Returns:
        The day (1-31), or None if the text carries no usable day.
    """
    match = _PAYMENT_DAY_RE.search(payment_date or "")
    if not match:
        return None
    day = int(match.group(1))
    if not 1 <= day <= 31:
        return None
    return day


@dataclass(frozen=True)
class Subscription:
    """
    A recurring payment obligation. Records are never edited, only removed.

    Attributes:
        id: Opaque unique identifier assigned at creation.
        name: Display name (e.g. 'Netflix').
        price: Positive amount per billing cycle, in yen.
        cycle: Monthly or yearly billing.
        payment_date: Free-text schedule, e.g. '毎月15日'.
        category: Spend category used for aggregation.
        created_at: Creation timestamp, informational only.
        payment_day: Day of month parsed from payment_date, or None.
    """
    id: str
    name: str
    price: float
    cycle: BillingCycle
    payment_date: str
    category: Category
    created_at: datetime
    payment_day: Optional[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "payment_day", parse_payment_day(self.payment_date))

    def has_schedule(self) -> bool:
        """Returns True if a payment day could be extracted."""
        return self.payment_day is not None

    def __str__(self) -> str:
        return f"{self.name}: {self.price:.0f} ({self.cycle.value}) | {self.category.value} | {self.payment_date}"
