"""Owner-scoped persistence and retrieval of pantry records."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from kitchenwise.errors import ConflictError, NotFoundError, StorageError, ValidationError
from kitchenwise.models.pantry import PantryItem
from kitchenwise.models.user import User
from kitchenwise.services.events import EventSink, NullEventSink

DEFAULT_UNIT = "piece"
DEFAULT_CATEGORY = "Other"
ALL_CATEGORIES = "All"

# Window used for both "expiring soon" and "recently added"
STATS_WINDOW_DAYS = 7


@dataclass(frozen=True)
class PantryRecord:
    """Detached copy of a stored pantry item."""

    id: int | None
    owner_id: int
    name: str
    quantity: float
    unit: str
    category: str
    added_at: datetime
    expires_at: datetime | None = None
    version: int | None = None


@dataclass(frozen=True)
class PantryStatsSnapshot:
    """Read-side summary of one owner's pantry."""

    total_items: int
    total_quantity: float
    categories_count: int
    expiring_items: int
    expired_items: int
    recently_added: int
    last_updated: datetime


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_record(row: PantryItem) -> PantryRecord:
    return PantryRecord(
        id=row.id,
        owner_id=row.user_id,
        name=row.name,
        quantity=row.quantity,
        unit=row.unit,
        category=row.category,
        added_at=as_utc(row.added_at),
        expires_at=as_utc(row.expires_at),
        version=row.version,
    )


def _clean(value: str | None, default: str) -> str:
    value = (value or "").strip()
    return value or default


def validate_owner_id(owner_id: int | None) -> int:
    """Return the owner id or raise ValidationError when it is unset."""
    if owner_id is None or isinstance(owner_id, bool) or not isinstance(owner_id, int):
        raise ValidationError("owner id is required")
    if owner_id <= 0:
        raise ValidationError("owner id is required")
    return owner_id


class PantryStore:
    """Pantry persistence scoped by owner.

    Every method returns ``PantryRecord`` copies; callers never hold live ORM
    rows, so the only way to change stored state is through this class.
    """

    def __init__(self, db: Session, events: EventSink | None = None):
        self.db = db
        self.events = events or NullEventSink()

    # --- Reads ---

    def list_by_owner(self, owner_id: int) -> list[PantryRecord]:
        """Return all of the owner's records ordered by name."""
        stmt = select(PantryItem).where(PantryItem.user_id == owner_id)
        return self._fetch(self._ordered(stmt))

    def get_by_id(self, item_id: int) -> PantryRecord | None:
        """Return a record by id, or None when it does not exist."""
        row = self._load(item_id)
        return _to_record(row) if row else None

    def get_for_owner(self, item_id: int, owner_id: int) -> PantryRecord:
        """Return a record that belongs to ``owner_id`` or raise NotFoundError."""
        record = self.get_by_id(item_id)
        if record is None or record.owner_id != owner_id:
            raise NotFoundError("Pantry item not found")
        return record

    def search(
        self,
        owner_id: int,
        search_term: str | None = None,
        category: str | None = None,
    ) -> list[PantryRecord]:
        """Filter the owner's records by a free-text term and/or a category.

        The term matches case-insensitively anywhere in name, category or unit.
        A category of "All" means no category restriction.
        """
        stmt = select(PantryItem).where(PantryItem.user_id == owner_id)

        term = (search_term or "").strip().lower()
        if term:
            stmt = stmt.where(
                or_(
                    func.lower(PantryItem.name).contains(term, autoescape=True),
                    func.lower(PantryItem.category).contains(term, autoescape=True),
                    func.lower(PantryItem.unit).contains(term, autoescape=True),
                )
            )

        if category and category.strip() and category.strip() != ALL_CATEGORIES:
            stmt = stmt.where(PantryItem.category == category.strip())

        return self._fetch(self._ordered(stmt))

    def owner_exists(self, owner_id: int) -> bool:
        try:
            return self.db.get(User, owner_id) is not None
        except SQLAlchemyError as e:
            raise StorageError("Failed to look up pantry owner") from e

    def stats(self, owner_id: int, now: datetime | None = None) -> PantryStatsSnapshot:
        """Summarize the owner's pantry.

        ``now`` is captured once so the expiring, expired and recently-added
        windows are evaluated against the same instant.
        """
        now = as_utc(now) or datetime.now(UTC)
        today = now.date()
        horizon = today + timedelta(days=STATS_WINDOW_DAYS)
        added_since = now - timedelta(days=STATS_WINDOW_DAYS)

        records = self.list_by_owner(owner_id)
        expiring = 0
        expired = 0
        for record in records:
            if record.expires_at is None:
                continue
            expiry_day = record.expires_at.date()
            if expiry_day < today:
                expired += 1
            elif expiry_day <= horizon:
                expiring += 1

        return PantryStatsSnapshot(
            total_items=len(records),
            total_quantity=sum(record.quantity for record in records),
            categories_count=len({record.category for record in records}),
            expiring_items=expiring,
            expired_items=expired,
            recently_added=sum(1 for record in records if record.added_at >= added_since),
            last_updated=now,
        )

    # --- Writes ---

    def add(
        self,
        owner_id: int | None,
        name: str | None,
        quantity: float | None,
        unit: str | None = None,
        category: str | None = None,
        expires_at: datetime | None = None,
    ) -> PantryRecord:
        """Validate, default and persist a new record."""
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        if quantity is None or not math.isfinite(quantity) or quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")
        owner_id = validate_owner_id(owner_id)

        row = PantryItem(
            user_id=owner_id,
            name=name.strip(),
            quantity=float(quantity),
            unit=_clean(unit, DEFAULT_UNIT),
            category=_clean(category, DEFAULT_CATEGORY),
            added_at=datetime.now(UTC),
            expires_at=expires_at,
        )
        self.db.add(row)
        self._commit("add", refresh=row)

        record = _to_record(row)
        self.events.emit("pantry.added", item_id=record.id, owner_id=owner_id, item=record.name)
        return record

    def update(self, record: PantryRecord) -> PantryRecord | None:
        """Overwrite name, quantity, unit, category and expiry of a stored record.

        Returns None when the id does not exist. When ``record.version`` is set
        and no longer matches the stored row, raises ConflictError.
        """
        if not record.name or not record.name.strip():
            raise ValidationError("Item name is required")
        if record.quantity is None or not math.isfinite(record.quantity):
            raise ValidationError("Quantity must be a finite number")
        if record.quantity < 0:
            raise ValidationError("Quantity cannot be negative")

        row = self._load(record.id)
        if row is None:
            self.events.emit("pantry.update_missing", item_id=record.id)
            return None
        self._check_version(row, record.version)

        row.name = record.name.strip()
        row.quantity = float(record.quantity)
        row.unit = _clean(record.unit, DEFAULT_UNIT)
        row.category = _clean(record.category, DEFAULT_CATEGORY)
        row.expires_at = record.expires_at
        self._commit("update", refresh=row)

        updated = _to_record(row)
        self.events.emit(
            "pantry.updated", item_id=updated.id, item=updated.name, quantity=updated.quantity
        )
        return updated

    def remove(self, item_id: int, expected_version: int | None = None) -> bool:
        """Delete a record. Returns False when it does not exist."""
        row = self._load(item_id)
        if row is None:
            return False
        self._check_version(row, expected_version)

        name = row.name
        self.db.delete(row)
        self._commit("remove")
        self.events.emit("pantry.removed", item_id=item_id, item=name)
        return True

    # --- Helpers ---

    @staticmethod
    def _ordered(stmt):
        return stmt.order_by(func.lower(PantryItem.name), PantryItem.name, PantryItem.id)

    def _fetch(self, stmt) -> list[PantryRecord]:
        try:
            rows = self.db.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            raise StorageError("Failed to read pantry items") from e
        return [_to_record(row) for row in rows]

    def _load(self, item_id: int | None) -> PantryItem | None:
        if item_id is None:
            return None
        try:
            return self.db.get(PantryItem, item_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise StorageError("Failed to read pantry item") from e

    def _check_version(self, row: PantryItem, expected: int | None) -> None:
        if expected is not None and row.version != expected:
            self.events.emit(
                "pantry.version_conflict", item_id=row.id, expected=expected, actual=row.version
            )
            raise ConflictError("Pantry item was modified concurrently")

    def _commit(self, operation: str, refresh: PantryItem | None = None) -> None:
        try:
            self.db.commit()
            if refresh is not None:
                self.db.refresh(refresh)
        except StaleDataError as e:
            self.db.rollback()
            raise ConflictError("Pantry item was modified concurrently") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.events.emit("pantry.storage_error", operation=operation, error=str(e))
            raise StorageError(f"Failed to {operation} pantry item") from e
