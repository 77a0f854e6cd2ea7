import pytest

from handlers.reminder_handler import format_notifications
from handlers.subscription_handler import parse_add_args, parse_category_filter
from models.subscription import ALL_CATEGORIES, Category
from security import rate_limiter
from services.reminder_service import build_notifications


def test_parse_add_args_full_form():
    fields = parse_add_args("Netflix | 1,490円 | 月額 | 毎月15日 | 動画配信")

    assert fields == {
        "name": "Netflix",
        "price": "1490",
        "cycle": "monthly",
        "payment_date": "毎月15日",
        "category": "動画配信",
    }


def test_parse_add_args_full_width_price_and_no_category():
    fields = parse_add_args("Office | ￥１２９８４ | 年額 | 毎年4日")

    assert fields["price"] == "12984"
    assert fields["cycle"] == "yearly"
    assert fields["category"] is None


def test_parse_add_args_passes_unknown_cycle_through():
    assert parse_add_args("A | 100 | weekly | 1日")["cycle"] == "weekly"


def test_parse_add_args_needs_four_fields():
    assert parse_add_args("Netflix | 1490 | 月額") is None


def test_parsed_fields_feed_the_store(store):
    sub = store.add(**parse_add_args("Spotify | 980 | monthly | 毎月1日 | 音楽"))

    assert sub.category == Category.MUSIC


@pytest.mark.parametrize("text", ["", "すべて", "all", "  "])
def test_category_filter_all(text):
    assert parse_category_filter(text) is ALL_CATEGORIES


def test_category_filter_single():
    assert parse_category_filter("音楽") == Category.MUSIC


def test_category_filter_unknown():
    with pytest.raises(ValueError):
        parse_category_filter("食費")


def test_format_notifications_lists_dismiss_commands(make_sub, today):
    notifications = build_notifications([make_sub("Netflix", 1490, payment_date="毎月21日")], today, 3)

    text = format_notifications(notifications)

    assert "「Netflix」の支払いがあと1日後に予定されています。" in text
    assert "¥1,490" in text
    assert f"/dismiss {notifications[0].id}" in text


def test_rate_limiter_blocks_after_limit(monkeypatch):
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_MESSAGES", 2)
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_WINDOW_SECONDS", 60)
    user_id = 424242
    rate_limiter._user_timestamps.pop(user_id, None)

    assert rate_limiter.allow_message(user_id, now=1000.0)
    assert rate_limiter.allow_message(user_id, now=1001.0)
    assert not rate_limiter.allow_message(user_id, now=1002.0)
    assert rate_limiter.allow_message(user_id, now=1061.0)
