"""
utils/formatting.py
-------------------
Display helpers shared by the handlers and the chart service.
"""

from models.subscription import BillingCycle

_CYCLE_LABELS = {
    BillingCycle.MONTHLY: "月額",
    BillingCycle.YEARLY: "年額",
}


def format_currency(amount: float) -> str:
    """Render an amount as whole yen, e.g. ``¥1,490``."""
    return f"¥{round(amount):,}"


def cycle_label(cycle: BillingCycle) -> str:
    return _CYCLE_LABELS[cycle]
