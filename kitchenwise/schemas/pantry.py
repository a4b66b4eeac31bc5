"""Pantry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PantryItemCreate(BaseModel):
    """Create a pantry item."""

    name: str = Field(..., max_length=100)
    quantity: float
    unit: str | None = Field(None, max_length=20)
    category: str | None = Field(None, max_length=50)
    expires_at: datetime | None = None


class PantryItemPatch(BaseModel):
    """Partial update of a pantry item.

    Null or blank fields keep the stored value; a negative quantity is ignored.
    """

    name: str | None = Field(None, max_length=100)
    quantity: float | None = None
    unit: str | None = Field(None, max_length=20)
    category: str | None = Field(None, max_length=50)
    expires_at: datetime | None = None
    version: int | None = None


class PantryItemResponse(BaseModel):
    """Pantry item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    quantity: float
    unit: str
    category: str
    added_at: datetime
    expires_at: datetime | None
    version: int | None = None


class PantryDeleteResponse(BaseModel):
    """Result of deleting a pantry item."""

    message: str
    deleted_item: str


class ConsumeRequest(BaseModel):
    """Amount to take out of a pantry item."""

    amount: float


class ConsumeResponse(BaseModel):
    """Result of consuming a pantry item."""

    message: str
    consumed_item: str
    consumed_amount: float
    removed: bool
    item: PantryItemResponse | None = None


class PantryStatsResponse(BaseModel):
    """Pantry statistics for the current user."""

    model_config = ConfigDict(from_attributes=True)

    total_items: int
    total_quantity: float
    categories_count: int
    expiring_items: int
    expired_items: int
    recently_added: int
    last_updated: datetime


# --- Ingredient matching ---


class IngredientLinesRequest(BaseModel):
    """Free-text recipe ingredient lines, e.g. "2 cups flour"."""

    ingredients: list[str] = Field(..., min_length=1)


class ConsumedIngredientResponse(BaseModel):
    """A pantry item drawn down for a recipe line."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    consumed_amount: float
    unit: str


class MatchAndConsumeResponse(BaseModel):
    """Which recipe lines consumed pantry stock and which had no match."""

    consumed: list[ConsumedIngredientResponse]
    unmatched: list[str]


class IngredientAvailabilityResponse(BaseModel):
    """Whether one recipe line is covered by the pantry."""

    line: str
    name: str
    quantity: float
    unit: str
    available: bool
    sufficient: bool
    pantry_item: PantryItemResponse | None = None
