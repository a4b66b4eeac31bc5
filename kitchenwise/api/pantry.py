"""Pantry API endpoints."""

from dataclasses import replace
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from kitchenwise.api.dependencies import (
    get_consumption_engine,
    get_current_user,
    get_ingredient_matcher,
    get_pantry_store,
)
from kitchenwise.errors import NotFoundError
from kitchenwise.models.user import User
from kitchenwise.schemas.pantry import (
    ConsumeRequest,
    ConsumeResponse,
    IngredientAvailabilityResponse,
    IngredientLinesRequest,
    MatchAndConsumeResponse,
    PantryDeleteResponse,
    PantryItemCreate,
    PantryItemPatch,
    PantryItemResponse,
    PantryStatsResponse,
)
from kitchenwise.services.consumption import ConsumptionEngine, ConsumptionOutcome
from kitchenwise.services.ingredient_matcher import IngredientMatcher
from kitchenwise.services.pantry_store import PantryRecord, PantryStore

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


def resolve_patch(record: PantryRecord, patch: PantryItemPatch) -> PantryRecord:
    """Merge a partial update into a full record.

    Null or blank fields keep the stored value and a negative quantity is
    ignored. The patch's version, when given, replaces the stored one so the
    store can detect a stale write.
    """

    def pick(value: str | None, current: str) -> str:
        return value.strip() if value and value.strip() else current

    quantity = record.quantity
    if patch.quantity is not None and patch.quantity >= 0:
        quantity = patch.quantity

    return replace(
        record,
        name=pick(patch.name, record.name),
        quantity=quantity,
        unit=pick(patch.unit, record.unit),
        category=pick(patch.category, record.category),
        expires_at=patch.expires_at if patch.expires_at is not None else record.expires_at,
        version=patch.version if patch.version is not None else record.version,
    )


def _consume_response(outcome: ConsumptionOutcome) -> ConsumeResponse:
    if outcome.removed:
        message = f"Consumed all of {outcome.name}; item removed from pantry"
    else:
        message = f"Consumed {outcome.consumed_amount:g} {outcome.unit} of {outcome.name}"
    return ConsumeResponse(
        message=message,
        consumed_item=outcome.name,
        consumed_amount=outcome.consumed_amount,
        removed=outcome.removed is not None,
        item=PantryItemResponse.model_validate(outcome.remaining) if outcome.remaining else None,
    )


@router.get("", response_model=list[PantryItemResponse])
def list_pantry_items(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
):
    """List all pantry items for the current user, ordered by name."""
    return store.list_by_owner(current_user.id)


@router.get("/search", response_model=list[PantryItemResponse])
def search_pantry_items(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
    search_term: Annotated[str | None, Query(max_length=100)] = None,
    category: Annotated[str | None, Query(max_length=50)] = None,
):
    """Search pantry items by name, category or unit, optionally within one category."""
    return store.search(current_user.id, search_term, category)


@router.get("/stats", response_model=PantryStatsResponse)
def get_pantry_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
):
    """Get pantry statistics for the current user."""
    return store.stats(current_user.id)


@router.post("/match", response_model=list[IngredientAvailabilityResponse])
def check_ingredients(
    request: IngredientLinesRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    matcher: Annotated[IngredientMatcher, Depends(get_ingredient_matcher)],
):
    """Report which recipe lines the pantry covers, without consuming anything."""
    report = matcher.check_availability(current_user.id, request.ingredients)
    return [
        IngredientAvailabilityResponse(
            line=entry.line,
            name=entry.parsed.name,
            quantity=entry.parsed.quantity,
            unit=entry.parsed.unit,
            available=entry.available,
            sufficient=entry.sufficient,
            pantry_item=PantryItemResponse.model_validate(entry.match) if entry.match else None,
        )
        for entry in report
    ]


@router.post("/consume-ingredients", response_model=MatchAndConsumeResponse)
def consume_ingredients(
    request: IngredientLinesRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    matcher: Annotated[IngredientMatcher, Depends(get_ingredient_matcher)],
):
    """Consume pantry stock for each recipe line; unmatched lines are reported back."""
    result = matcher.match_and_consume(current_user.id, request.ingredients)
    return MatchAndConsumeResponse(
        consumed=[
            {"id": c.id, "name": c.name, "consumed_amount": c.consumed_amount, "unit": c.unit}
            for c in result.consumed
        ],
        unmatched=result.unmatched,
    )


@router.get("/{item_id}", response_model=PantryItemResponse)
def get_pantry_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
):
    """Get a pantry item by ID."""
    return store.get_for_owner(item_id, current_user.id)


@router.post("", response_model=PantryItemResponse, status_code=status.HTTP_201_CREATED)
def create_pantry_item(
    item_data: PantryItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
):
    """Add an item to the pantry."""
    return store.add(
        current_user.id,
        item_data.name,
        item_data.quantity,
        unit=item_data.unit,
        category=item_data.category,
        expires_at=item_data.expires_at,
    )


@router.put("/{item_id}", response_model=PantryItemResponse)
def update_pantry_item(
    item_id: int,
    patch: PantryItemPatch,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
):
    """Update a pantry item. Omitted or blank fields keep their stored values."""
    record = store.get_for_owner(item_id, current_user.id)
    updated = store.update(resolve_patch(record, patch))
    if updated is None:
        raise NotFoundError("Pantry item not found")
    return updated


@router.delete("/{item_id}", response_model=PantryDeleteResponse)
def delete_pantry_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
    version: Annotated[int | None, Query()] = None,
):
    """Remove an item from the pantry."""
    record = store.get_for_owner(item_id, current_user.id)
    if not store.remove(item_id, expected_version=version):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pantry item not found")
    return PantryDeleteResponse(message="Item deleted successfully", deleted_item=record.name)


@router.post("/{item_id}/consume", response_model=ConsumeResponse)
def consume_pantry_item(
    item_id: int,
    request: ConsumeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ConsumptionEngine, Depends(get_consumption_engine)],
):
    """Consume an exact amount; fails when the pantry holds less."""
    outcome = engine.consume(item_id, request.amount, owner_id=current_user.id)
    return _consume_response(outcome)


@router.post("/{item_id}/consume-available", response_model=ConsumeResponse)
def consume_available_pantry_item(
    item_id: int,
    request: ConsumeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ConsumptionEngine, Depends(get_consumption_engine)],
):
    """Consume up to an amount, limited to what the pantry holds."""
    outcome = engine.consume_available(item_id, request.amount, owner_id=current_user.id)
    return _consume_response(outcome)
