import json

import pytest

from models.subscription import ALL_CATEGORIES, BillingCycle, Category
from services.subscription_store import SubscriptionStore


def _add(store, name="Netflix", price="1490", cycle="monthly",
         payment_date="毎月15日", category="動画配信"):
    """Add through the store with form-like string input."""
    return store.add(name, price, cycle, payment_date, category)


def test_add_assigns_id_and_persists(store, kv_store):
    sub = _add(store)

    assert sub is not None
    assert sub.id
    assert sub.price == pytest.approx(1490.0)
    assert sub.cycle == BillingCycle.MONTHLY
    assert sub.category == Category.VIDEO_STREAMING
    assert store.list() == [sub]
    stored = json.loads(kv_store.data["subscriptions"])
    assert [item["id"] for item in stored] == [sub.id]


def test_ids_are_unique(store):
    first = _add(store, name="A")
    second = _add(store, name="A")

    assert first.id != second.id


@pytest.mark.parametrize(
    "fields",
    [
        {"name": ""},
        {"name": "   "},
        {"price": ""},
        {"payment_date": ""},
        {"name": None},
    ],
)
def test_add_with_missing_required_field_is_a_no_op(store, kv_store, fields):
    result = _add(store, **fields)

    assert result is None
    assert len(store.list()) == 0
    assert kv_store.writes == 0


@pytest.mark.parametrize(
    "fields",
    [
        {"price": "abc"},
        {"price": "0"},
        {"price": "-100"},
        {"price": "nan"},
        {"cycle": "weekly"},
        {"category": "食費"},
        {"category": "すべて"},
    ],
)
def test_add_with_invalid_value_is_a_no_op(store, fields):
    assert _add(store, **fields) is None
    assert store.list() == []


def test_add_without_category_defaults_to_other(store):
    sub = _add(store, category=None)

    assert sub.category == Category.OTHER


def test_remove_existing_record(store):
    keep = _add(store, name="Keep")
    drop = _add(store, name="Drop")

    assert store.remove(drop.id) is True
    assert store.list() == [keep]


def test_remove_unknown_id_is_a_no_op(store):
    _add(store)
    before = store.list()

    assert store.remove("does-not-exist") is False
    assert store.list() == before


def test_list_filters_by_category(store):
    music = _add(store, name="Spotify", category="音楽")
    video = _add(store, name="Netflix", category="動画配信")

    assert store.list(ALL_CATEGORIES) == [music, video]
    assert store.list(Category.MUSIC) == [music]
    assert store.list(Category.SOFTWARE) == []


def test_listeners_run_after_each_mutation(store):
    snapshots = []
    store.add_listener(snapshots.append)

    sub = _add(store)
    _add(store, name="")
    store.remove(sub.id)

    assert [len(s) for s in snapshots] == [1, 0]


def test_load_restores_persisted_set(repo, store):
    added = [_add(store, name="A"), _add(store, name="B", cycle="yearly")]

    reloaded = SubscriptionStore(repo)
    reloaded.load()

    assert reloaded.list() == added


def test_write_failure_surfaces_but_keeps_views_consistent(failing_store):
    snapshots = []
    failing_store.add_listener(snapshots.append)

    with pytest.raises(OSError):
        _add(failing_store)

    assert len(failing_store.list()) == 1
    assert len(snapshots[-1]) == 1


def test_remove_write_failure_surfaces_and_still_notifies(failing_store):
    failing_store.repo.kv_store.data["subscriptions"] = json.dumps([{
        "id": "netflix",
        "name": "Netflix",
        "price": 1490,
        "cycle": "monthly",
        "paymentDate": "毎月15日",
        "category": "動画配信",
        "createdAt": "2024-01-01T09:30:00",
    }])
    failing_store.load()
    snapshots = []
    failing_store.add_listener(snapshots.append)

    with pytest.raises(OSError):
        failing_store.remove("netflix")

    assert failing_store.list() == []
    assert snapshots == [[]]


def test_add_trims_surrounding_whitespace(store):
    sub = _add(store, name="  Netflix ", payment_date=" 毎月15日 ")

    assert sub.name == "Netflix"
    assert sub.payment_date == "毎月15日"
    assert sub.payment_day == 15
