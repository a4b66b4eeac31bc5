"""Reconcile free-text recipe ingredient lines against a user's pantry."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from kitchenwise.errors import NotFoundError
from kitchenwise.services.consumption import ConsumptionEngine
from kitchenwise.services.events import EventSink, NullEventSink
from kitchenwise.services.pantry_store import (
    DEFAULT_UNIT,
    PantryRecord,
    PantryStore,
    validate_owner_id,
)

_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d+)?|\.\d+)$")


@dataclass(frozen=True)
class ParsedIngredient:
    """Quantity, unit and name pulled out of one ingredient line."""

    name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class ConsumedIngredient:
    """A pantry record that was drawn down for a recipe line."""

    name: str
    id: int
    consumed_amount: float
    unit: str


@dataclass
class MatchResult:
    """Outcome of reconciling a whole ingredient list."""

    consumed: list[ConsumedIngredient] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IngredientAvailability:
    """Report-only view of whether a recipe line is covered by the pantry."""

    line: str
    parsed: ParsedIngredient
    match: PantryRecord | None

    @property
    def available(self) -> bool:
        return self.match is not None

    @property
    def sufficient(self) -> bool:
        return self.match is not None and self.match.quantity >= self.parsed.quantity


def _parse_quantity(token: str) -> float | None:
    if not _NUMBER_RE.match(token):
        return None
    value = float(token)
    return value if value > 0 else None


def parse_ingredient_line(line: str) -> ParsedIngredient:
    """Split an ingredient line into quantity, unit and name.

    "2 cups flour" -> (2, "cups", "flour"); "3 Tomatoes" -> (3, "piece",
    "Tomatoes"). Anything that does not start with a positive number followed
    by at least one more word becomes one piece named after the whole line.
    """
    tokens = line.split()
    quantity = _parse_quantity(tokens[0]) if len(tokens) >= 2 else None

    if quantity is None:
        return ParsedIngredient(name=line, quantity=1.0, unit=DEFAULT_UNIT)

    if len(tokens) >= 3:
        return ParsedIngredient(name=" ".join(tokens[2:]), quantity=quantity, unit=tokens[1])
    return ParsedIngredient(name=tokens[1], quantity=quantity, unit=DEFAULT_UNIT)


def names_match(pantry_name: str, ingredient_name: str) -> bool:
    """Case-insensitive substring containment in either direction."""
    pantry = pantry_name.strip().lower()
    ingredient = ingredient_name.strip().lower()
    if not pantry or not ingredient:
        return False
    return ingredient in pantry or pantry in ingredient


def find_match(ingredient_name: str, records: Iterable[PantryRecord]) -> PantryRecord | None:
    """Return the first record (in the given order) whose name matches."""
    for record in records:
        if names_match(record.name, ingredient_name):
            return record
    return None


class IngredientMatcher:
    """Match recipe ingredient lines to pantry records and optionally consume them."""

    def __init__(
        self,
        store: PantryStore,
        engine: ConsumptionEngine,
        events: EventSink | None = None,
    ):
        self.store = store
        self.engine = engine
        self.events = events or NullEventSink()

    def check_availability(
        self, owner_id: int, lines: Sequence[str]
    ) -> list[IngredientAvailability]:
        """Report which lines the pantry covers without changing anything."""
        records = self._load_pantry(owner_id)
        report = []
        for line in lines:
            parsed = parse_ingredient_line(line)
            match = find_match(parsed.name, records) if parsed.name.strip() else None
            report.append(IngredientAvailability(line=line, parsed=parsed, match=match))
        return report

    def match_and_consume(self, owner_id: int, lines: Sequence[str]) -> MatchResult:
        """Consume pantry stock for each recipe line, in order.

        The pantry is read once. Later lines see what earlier lines consumed,
        so two lines naming the same item draw from one shrinking quantity and
        an item used up by one line is no longer matchable.
        """
        records = self._load_pantry(owner_id)
        result = MatchResult()

        for line in lines:
            if not line or not line.strip():
                continue
            parsed = parse_ingredient_line(line)
            match = find_match(parsed.name, records)
            if match is None:
                result.unmatched.append(parsed.name)
                continue

            try:
                outcome = self.engine.consume_available(
                    match.id, parsed.quantity, owner_id=owner_id
                )
            except NotFoundError:
                # Removed since the pantry was read
                records = [r for r in records if r.id != match.id]
                result.unmatched.append(parsed.name)
                continue

            if outcome.remaining is None:
                records = [r for r in records if r.id != match.id]
            else:
                records = [outcome.remaining if r.id == match.id else r for r in records]

            result.consumed.append(
                ConsumedIngredient(
                    name=match.name,
                    id=match.id,
                    consumed_amount=outcome.consumed_amount,
                    unit=match.unit,
                )
            )

        self.events.emit(
            "pantry.ingredients_matched",
            owner_id=owner_id,
            consumed=len(result.consumed),
            unmatched=len(result.unmatched),
        )
        return result

    def _load_pantry(self, owner_id: int) -> list[PantryRecord]:
        owner_id = validate_owner_id(owner_id)
        if not self.store.owner_exists(owner_id):
            raise NotFoundError("Pantry owner not found")
        return self.store.list_by_owner(owner_id)
