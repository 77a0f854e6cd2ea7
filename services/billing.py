"""
services/billing.py
-------------------
Converts a (price, cycle) pair into monthly and yearly equivalents.
No rounding here; formatting is left to the presentation layer.
"""

from models.subscription import BillingCycle

MONTHS_PER_YEAR = 12


def to_monthly(price: float, cycle: BillingCycle) -> float:
    """Monthly-equivalent amount: yearly prices are spread over 12 months."""
    if cycle == BillingCycle.YEARLY:
        return price / MONTHS_PER_YEAR
    return price


def to_yearly(price: float, cycle: BillingCycle) -> float:
    """Yearly-equivalent amount: monthly prices are charged 12 times."""
    if cycle == BillingCycle.MONTHLY:
        return price * MONTHS_PER_YEAR
    return price
