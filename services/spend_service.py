"""
services/spend_service.py
-------------------------
Spend aggregation over the current subscription set:
running totals and the per-category monthly breakdown.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from models.subscription import Category, Subscription
from services.billing import to_monthly, to_yearly


@dataclass(frozen=True)
class SpendTotals:
    """Sum of monthly and yearly equivalents across all subscriptions."""
    monthly: float = 0.0
    yearly: float = 0.0


@dataclass(frozen=True)
class CategorySpend:
    """Monthly-equivalent spend of one category."""
    category: Category
    amount: float


def totals(subscriptions: Iterable[Subscription]) -> SpendTotals:
    """
    Compute monthly and yearly totals regardless of category.

    Returns:
        SpendTotals; (0, 0) for an empty input.
    """
    monthly = 0.0
    yearly = 0.0
    for sub in subscriptions:
        monthly += to_monthly(sub.price, sub.cycle)
        yearly += to_yearly(sub.price, sub.cycle)
    return SpendTotals(monthly=monthly, yearly=yearly)


def by_category(
    subscriptions: Iterable[Subscription],
    categories: Sequence[Category] = tuple(Category),
) -> list[CategorySpend]:
    """
    Bucket monthly-equivalent spend by category.

    Categories come out in the order given; those summing to exactly 0
    are left out, so the result can be shorter than ``categories``.
    """
    buckets = {category: 0.0 for category in categories}
    for sub in subscriptions:
        if sub.category in buckets:
            buckets[sub.category] += to_monthly(sub.price, sub.cycle)

    return [
        CategorySpend(category=category, amount=amount)
        for category, amount in buckets.items()
        if amount != 0
    ]
