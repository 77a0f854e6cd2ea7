from datetime import date

import pytest

from models.subscription import parse_payment_day
from services.reminder_service import (
    build_notifications,
    days_in_month,
    days_until_payment,
    validate_threshold,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("毎月15日", 15),
        ("毎月1日", 1),
        ("31日", 31),
        ("毎月１５日", 15),
        ("毎月١٥日", None),
        ("月末", None),
        ("15", None),
        ("", None),
        ("毎月0日", None),
        ("毎月45日", None),
    ],
)
def test_parse_payment_day(text, expected):
    assert parse_payment_day(text) == expected


def test_subscription_parses_payment_day_once(make_sub):
    assert make_sub(payment_date="毎月25日").payment_day == 25
    assert make_sub(payment_date="不定期").payment_day is None


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2024, 6, 20), 30),
        (date(2024, 1, 5), 31),
        (date(2024, 2, 10), 29),
        (date(2023, 2, 10), 28),
    ],
)
def test_days_in_month(today, expected):
    assert days_in_month(today) == expected


def test_payment_later_this_month(today):
    assert days_until_payment(25, today) == 5


def test_payment_already_passed_rolls_to_next_month(today):
    assert days_until_payment(10, today) == (30 - 20) + 10


def test_payment_today_counts_as_next_month(today):
    assert days_until_payment(20, today) == 30


def test_leap_year_february_rollover():
    assert days_until_payment(1, date(2024, 2, 28)) == 2
    assert days_until_payment(1, date(2023, 2, 28)) == 1


def test_month_end_overflow_is_not_clamped():
    # April has 30 days, but day 31 seen from March 31 stays nominal
    assert days_until_payment(31, date(2024, 3, 31)) == 31


def test_threshold_boundary_is_inclusive(make_sub, today):
    due_in_3 = make_sub("Due3", payment_date="毎月23日")
    due_in_4 = make_sub("Due4", payment_date="毎月24日")

    notifications = build_notifications([due_in_3, due_in_4], today, threshold_days=3)

    assert [n.subscription.name for n in notifications] == ["Due3"]
    assert notifications[0].days_remaining == 3
    assert notifications[0].message == "「Due3」の支払いがあと3日後に予定されています。"


def test_unparseable_schedule_is_skipped_silently(make_sub, today):
    subs = [make_sub("NoDay", payment_date="毎月末"), make_sub("Soon", payment_date="毎月21日")]

    notifications = build_notifications(subs, today, threshold_days=7)

    assert [n.subscription.name for n in notifications] == ["Soon"]


def test_notifications_keep_store_order_and_fresh_ids(make_sub, today):
    subs = [
        make_sub("B", payment_date="毎月22日"),
        make_sub("A", payment_date="毎月21日"),
    ]

    first = build_notifications(subs, today, threshold_days=3)
    second = build_notifications(subs, today, threshold_days=3)

    assert [n.subscription.name for n in first] == ["B", "A"]
    assert {n.id for n in first}.isdisjoint({n.id for n in second})


@pytest.mark.parametrize("days", [1, 3, 5, 7])
def test_validate_threshold_accepts_options(days):
    assert validate_threshold(days) == days


@pytest.mark.parametrize("days", [0, 2, 14, -1])
def test_validate_threshold_rejects_other_values(days):
    with pytest.raises(ValueError):
        validate_threshold(days)
