"""Apply quantity decrements to pantry records, deleting them at exhaustion."""

import math
from dataclasses import dataclass, replace

from kitchenwise.errors import ConflictError, NotFoundError, ValidationError
from kitchenwise.services.events import EventSink, NullEventSink
from kitchenwise.services.pantry_store import PantryRecord, PantryStore

DEFAULT_MAX_ATTEMPTS = 3

# Float residue below this is treated as fully consumed
QUANTITY_EPSILON = 1e-9


@dataclass(frozen=True)
class ConsumptionOutcome:
    """Result of one consumption: either the remaining record or the removed name."""

    item_id: int
    name: str
    unit: str
    consumed_amount: float
    remaining: PantryRecord | None = None

    @property
    def removed(self) -> str | None:
        """Name of the deleted record, or None when some quantity is left."""
        return self.name if self.remaining is None else None


class ConsumptionEngine:
    """Decrement pantry quantities through the store.

    Each call reads the record, computes the new quantity and performs exactly
    one write (an update or a delete) guarded by the version it read. A stale
    version is retried from a fresh read up to ``max_attempts`` times.
    """

    def __init__(
        self,
        store: PantryStore,
        events: EventSink | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.store = store
        self.events = events or NullEventSink()
        self.max_attempts = max(1, max_attempts)

    def consume(
        self, item_id: int, amount: float, owner_id: int | None = None
    ) -> ConsumptionOutcome:
        """Consume exactly ``amount``; fails if less than that is available."""
        return self._consume(item_id, amount, owner_id, clamp=False)

    def consume_available(
        self, item_id: int, amount: float, owner_id: int | None = None
    ) -> ConsumptionOutcome:
        """Consume up to ``amount``, limited to what the record currently holds."""
        return self._consume(item_id, amount, owner_id, clamp=True)

    def _consume(
        self, item_id: int, amount: float, owner_id: int | None, clamp: bool
    ) -> ConsumptionOutcome:
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise ValidationError("amount must be positive")

        for attempt in range(1, self.max_attempts + 1):
            record = self._read(item_id, owner_id)
            if clamp:
                used = min(amount, record.quantity)
            elif amount > record.quantity:
                raise ValidationError("cannot consume more than available")
            else:
                used = amount

            try:
                return self._apply(record, used)
            except ConflictError:
                self.events.emit(
                    "pantry.consume_conflict",
                    item_id=item_id,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                )
                if attempt == self.max_attempts:
                    raise

        raise ConflictError("Pantry item was modified concurrently")  # pragma: no cover

    def _read(self, item_id: int, owner_id: int | None) -> PantryRecord:
        record = self.store.get_by_id(item_id)
        if record is None or (owner_id is not None and record.owner_id != owner_id):
            raise NotFoundError("Pantry item not found")
        return record

    def _apply(self, record: PantryRecord, used: float) -> ConsumptionOutcome:
        left = record.quantity - used

        if left <= QUANTITY_EPSILON:
            if not self.store.remove(record.id, expected_version=record.version):
                raise NotFoundError("Pantry item not found")
            self.events.emit(
                "pantry.consumed_completely", item_id=record.id, item=record.name, amount=used
            )
            return ConsumptionOutcome(
                item_id=record.id,
                name=record.name,
                unit=record.unit,
                consumed_amount=used,
            )

        updated = self.store.update(replace(record, quantity=left))
        if updated is None:
            raise NotFoundError("Pantry item not found")
        self.events.emit(
            "pantry.consumed",
            item_id=record.id,
            item=record.name,
            amount=used,
            remaining=updated.quantity,
        )
        return ConsumptionOutcome(
            item_id=record.id,
            name=updated.name,
            unit=updated.unit,
            consumed_amount=used,
            remaining=updated,
        )
