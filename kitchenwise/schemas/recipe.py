"""Recipe schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from kitchenwise.schemas.pantry import ConsumedIngredientResponse

# --- Generated recipes (validated output of the text model) ---


class Nutrition(BaseModel):
    """Per-serving nutrition estimate."""

    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: float | None = Field(None, ge=0)


class GeneratedRecipe(BaseModel):
    """A recipe as returned by the text generation service."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    cuisine: str | None = Field(None, max_length=50)
    difficulty_level: str | None = Field(
        None, max_length=20, validation_alias=AliasChoices("difficulty_level", "difficultyLevel")
    )
    prep_time_minutes: int | None = Field(
        None, ge=0, validation_alias=AliasChoices("prep_time_minutes", "prepTimeMinutes")
    )
    cook_time_minutes: int | None = Field(
        None, ge=0, validation_alias=AliasChoices("cook_time_minutes", "cookTimeMinutes")
    )
    servings: int | None = Field(None, ge=1)
    ingredients: list[str] = Field(..., min_length=1)
    instructions: list[str] = Field(..., min_length=1)
    tags: list[str] = []


class DetailedRecipe(GeneratedRecipe):
    """A generated recipe expanded with nutrition and tips."""

    nutrition: Nutrition | None = None
    tips: list[str] = []


class GenerateRecipesRequest(BaseModel):
    """Ask for recipe suggestions; defaults to the caller's pantry item names."""

    available_ingredients: list[str] | None = None
    cuisine_filter: str | None = Field(None, max_length=50)
    difficulty_filter: str | None = Field(None, max_length=20)
    max_recipes: int = Field(5, ge=1, le=10)


class RecipeDetailRequest(BaseModel):
    """Ask for the detailed version of a recipe."""

    recipe_name: str = Field(..., min_length=1, max_length=200)
    available_ingredients: list[str] = []


class ImageGenerationRequest(BaseModel):
    """Ask for a photo of a recipe."""

    recipe_name: str = Field(..., min_length=1, max_length=200)
    recipe_description: str | None = None
    cuisine: str | None = Field(None, max_length=50)


class ImageGenerationResponse(BaseModel):
    """Generated recipe image."""

    image_url: str
    image_prompt: str


# --- Saved recipes ---


class RecipeCreate(BaseModel):
    """Save a generated recipe."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    cuisine: str | None = Field(None, max_length=50)
    difficulty_level: str | None = Field(None, max_length=20)
    prep_time_minutes: int | None = Field(None, ge=0)
    cook_time_minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    ingredients: list[str] = []
    instructions: list[str] = []
    nutrition: Nutrition | None = None
    image_url: str | None = Field(None, max_length=500)
    generated_with: list[str] | None = None
    cuisine_requested: str | None = Field(None, max_length=50)


class RecipeResponse(BaseModel):
    """Saved recipe response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None
    cuisine: str | None
    difficulty_level: str | None
    prep_time_minutes: int | None
    cook_time_minutes: int | None
    servings: int | None
    ingredients: list[str]
    instructions: list[str]
    nutrition: Nutrition | None
    image_url: str | None
    generated_with: list[str] | None
    cuisine_requested: str | None
    created_at: datetime


class FavoriteResponse(BaseModel):
    """Favorite state of a recipe for the current user."""

    recipe_id: int
    is_favorite: bool


# --- Cooking sessions ---


class CookRequest(BaseModel):
    """Start cooking a recipe and draw its ingredients from the pantry."""

    recipe_name: str | None = Field(None, max_length=200)
    recipe_id: int | None = None
    ingredients: list[str] | None = None


class CookingSessionResponse(BaseModel):
    """Cooking session response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int | None
    recipe_name: str
    ingredients_used: list[str]
    started_at: datetime
    completed_at: datetime | None
    is_completed: bool


class CookResponse(BaseModel):
    """Cooking session plus what was consumed from the pantry."""

    session: CookingSessionResponse
    consumed: list[ConsumedIngredientResponse]
    unmatched: list[str]
