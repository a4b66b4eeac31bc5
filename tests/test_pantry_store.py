"""Pantry store tests."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from kitchenwise.errors import ConflictError, NotFoundError, StorageError, ValidationError
from kitchenwise.models.pantry import PantryItem
from kitchenwise.models.user import User


def test_add_applies_defaults(store, owner):
    """Blank unit and category fall back to piece and Other."""
    record = store.add(owner.id, "Salt", 1, unit="", category="  ")

    assert record.id is not None
    assert record.unit == "piece"
    assert record.category == "Other"
    assert record.owner_id == owner.id
    assert record.added_at is not None
    assert record.version == 1


def test_add_trims_name(store, owner):
    record = store.add(owner.id, "  Olive Oil ", 2, unit="cup")
    assert record.name == "Olive Oil"


@pytest.mark.parametrize(
    "name,quantity,message",
    [
        ("", 1, "Item name is required"),
        ("   ", 1, "Item name is required"),
        (None, 1, "Item name is required"),
        ("Salt", 0, "Quantity must be greater than 0"),
        ("Salt", -2, "Quantity must be greater than 0"),
        ("Salt", float("nan"), "Quantity must be greater than 0"),
        ("Salt", float("inf"), "Quantity must be greater than 0"),
    ],
)
def test_add_rejects_invalid_input(store, owner, name, quantity, message):
    with pytest.raises(ValidationError) as exc:
        store.add(owner.id, name, quantity)
    assert exc.value.message == message


@pytest.mark.parametrize("owner_id", [None, 0, -1, True, "1"])
def test_add_requires_owner(store, owner_id):
    with pytest.raises(ValidationError):
        store.add(owner_id, "Salt", 1)


def test_add_emits_event(store, owner, events):
    store.add(owner.id, "Salt", 1)
    assert events.names() == ["pantry.added"]


def test_list_by_owner_orders_by_name(store, owner, db):
    other = User(email="other@example.com", password_hash="x")
    db.add(other)
    db.commit()

    store.add(owner.id, "tomatoes", 1)
    store.add(owner.id, "Basil", 1)
    store.add(owner.id, "Carrots", 1)
    store.add(other.id, "Apples", 1)

    names = [r.name for r in store.list_by_owner(owner.id)]
    assert names == ["Basil", "Carrots", "tomatoes"]


def test_get_by_id_missing_returns_none(store):
    assert store.get_by_id(99999) is None


def test_get_for_owner_hides_other_owners_items(store, owner, db):
    other = User(email="other@example.com", password_hash="x")
    db.add(other)
    db.commit()
    record = store.add(other.id, "Flour", 2)

    with pytest.raises(NotFoundError):
        store.get_for_owner(record.id, owner.id)


def test_search_matches_name_category_and_unit(store, owner):
    store.add(owner.id, "Basmati Rice", 3, unit="cup", category="Grains")
    store.add(owner.id, "Ground Beef", 2, unit="lb", category="Meat")
    store.add(owner.id, "Tomatoes", 5, category="Vegetables")

    assert [r.name for r in store.search(owner.id, "RICE")] == ["Basmati Rice"]
    assert [r.name for r in store.search(owner.id, "meat")] == ["Ground Beef"]
    assert [r.name for r in store.search(owner.id, "lb")] == ["Ground Beef"]
    assert len(store.search(owner.id)) == 3


def test_search_category_filter(store, owner):
    store.add(owner.id, "Carrots", 3, category="Vegetables")
    store.add(owner.id, "Celery", 1, category="Vegetables")
    store.add(owner.id, "Cheddar", 1, category="Dairy")

    assert [r.name for r in store.search(owner.id, category="Vegetables")] == [
        "Carrots",
        "Celery",
    ]
    assert len(store.search(owner.id, category="All")) == 3
    assert [r.name for r in store.search(owner.id, "ch", category="Dairy")] == ["Cheddar"]


def test_search_escapes_wildcards(store, owner):
    store.add(owner.id, "Milk 2%", 1)
    store.add(owner.id, "Milk", 1)

    assert [r.name for r in store.search(owner.id, "2%")] == ["Milk 2%"]


def test_update_overwrites_fields(store, owner):
    record = store.add(owner.id, "Milk", 1, unit="l", category="Dairy")
    expires = datetime.now(UTC) + timedelta(days=4)

    updated = store.update(
        replace(record, name="Oat Milk", quantity=2, unit="", category="Drinks", expires_at=expires)
    )

    assert updated.name == "Oat Milk"
    assert updated.quantity == 2
    assert updated.unit == "piece"
    assert updated.category == "Drinks"
    assert updated.expires_at is not None
    assert updated.version == record.version + 1


def test_update_missing_returns_none(store, owner):
    record = store.add(owner.id, "Milk", 1)
    assert store.update(replace(record, id=99999)) is None


def test_update_allows_zero_but_not_negative(store, owner):
    record = store.add(owner.id, "Milk", 1)

    assert store.update(replace(record, quantity=0)).quantity == 0
    with pytest.raises(ValidationError):
        store.update(replace(record, quantity=-1))


@pytest.mark.parametrize("quantity", [float("nan"), float("inf"), float("-inf")])
def test_update_rejects_non_finite_quantity(store, owner, quantity):
    record = store.add(owner.id, "Milk", 1)

    with pytest.raises(ValidationError):
        store.update(replace(record, quantity=quantity))
    assert store.get_by_id(record.id).quantity == 1


def test_update_with_stale_version_conflicts(store, owner, events):
    record = store.add(owner.id, "Milk", 3)
    store.update(replace(record, quantity=2))

    with pytest.raises(ConflictError):
        store.update(replace(record, quantity=1))
    assert "pantry.version_conflict" in events.names()
    assert store.get_by_id(record.id).quantity == 2


def test_remove(store, owner):
    record = store.add(owner.id, "Milk", 1)

    assert store.remove(record.id) is True
    assert store.get_by_id(record.id) is None
    assert store.remove(record.id) is False


def test_remove_with_stale_version_conflicts(store, owner):
    record = store.add(owner.id, "Milk", 3)
    store.update(replace(record, quantity=2))

    with pytest.raises(ConflictError):
        store.remove(record.id, expected_version=record.version)
    assert store.get_by_id(record.id) is not None


def test_stats_windows(store, owner, db):
    now = datetime.now(UTC)
    store.add(owner.id, "Yogurt", 1, category="Dairy", expires_at=now - timedelta(days=1))
    store.add(owner.id, "Spinach", 2, category="Vegetables", expires_at=now + timedelta(days=3))
    store.add(owner.id, "Rice", 3, category="Grains", expires_at=now + timedelta(days=30))
    old = store.add(owner.id, "Salt", 1.5, category="Spices")
    db.query(PantryItem).filter(PantryItem.id == old.id).update(
        {"added_at": now - timedelta(days=10)}
    )
    db.commit()

    stats = store.stats(owner.id, now=now)

    assert stats.total_items == 4
    assert stats.total_quantity == pytest.approx(7.5)
    assert stats.categories_count == 4
    assert stats.expired_items == 1
    assert stats.expiring_items == 1
    assert stats.recently_added == 3
    assert stats.last_updated == now


def test_stats_empty_pantry(store, owner):
    stats = store.stats(owner.id)

    assert stats.total_items == 0
    assert stats.total_quantity == 0
    assert stats.categories_count == 0


def test_owner_exists(store, owner):
    assert store.owner_exists(owner.id) is True
    assert store.owner_exists(owner.id + 1000) is False


def test_stats_window_edges(store, owner, db):
    """Expiry compares calendar days; today and today+7 are both "expiring"."""
    now = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
    midnight = datetime(2026, 10, 19, 0, 0, tzinfo=UTC)
    store.add(owner.id, "Earlier Today", 1, expires_at=midnight)
    store.add(owner.id, "Last Day", 1, expires_at=midnight + timedelta(days=7, hours=23))
    store.add(owner.id, "Day Eight", 1, expires_at=midnight + timedelta(days=8))
    store.add(owner.id, "Yesterday", 1, expires_at=midnight - timedelta(hours=1))
    on_edge = store.add(owner.id, "Week Old", 1)
    stale = store.add(owner.id, "Older", 1)
    db.query(PantryItem).filter(PantryItem.id == on_edge.id).update(
        {"added_at": now - timedelta(days=7)}
    )
    db.query(PantryItem).filter(PantryItem.id == stale.id).update(
        {"added_at": now - timedelta(days=7, seconds=1)}
    )
    for item in ("Earlier Today", "Last Day", "Day Eight", "Yesterday"):
        db.query(PantryItem).filter(PantryItem.name == item).update(
            {"added_at": now - timedelta(days=30)}
        )
    db.commit()

    stats = store.stats(owner.id, now=now)

    assert stats.expired_items == 1
    assert stats.expiring_items == 2
    assert stats.recently_added == 1


def test_refresh_failure_is_storage_error(store, owner, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def broken_refresh(instance):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(store.db, "refresh", broken_refresh)

    with pytest.raises(StorageError):
        store.add(owner.id, "Milk", 1)
