"""Recipe API endpoints: generation, saved recipes, favorites and cooking."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from kitchenwise.api.dependencies import (
    get_current_user,
    get_pantry_store,
    get_recipe_generator,
    get_recipe_service,
)
from kitchenwise.errors import ValidationError
from kitchenwise.models.user import User
from kitchenwise.schemas.recipe import (
    CookingSessionResponse,
    CookRequest,
    CookResponse,
    DetailedRecipe,
    FavoriteResponse,
    GeneratedRecipe,
    GenerateRecipesRequest,
    ImageGenerationRequest,
    ImageGenerationResponse,
    RecipeCreate,
    RecipeDetailRequest,
    RecipeResponse,
)
from kitchenwise.services.pantry_store import PantryStore
from kitchenwise.services.recipe_generator import RecipeGenerator
from kitchenwise.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


# --- Generation ---


@router.post("/generate", response_model=list[GeneratedRecipe])
async def generate_recipes(
    request: GenerateRecipesRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[PantryStore, Depends(get_pantry_store)],
    generator: Annotated[RecipeGenerator, Depends(get_recipe_generator)],
):
    """Suggest recipes for the given ingredients, or for everything in the pantry."""
    ingredients = request.available_ingredients
    if not ingredients:
        ingredients = [record.name for record in store.list_by_owner(current_user.id)]
    if not ingredients:
        raise ValidationError("No ingredients available. Add items to your pantry first.")

    return await generator.generate_recipes(
        ingredients,
        cuisine=request.cuisine_filter,
        difficulty=request.difficulty_filter,
        max_recipes=request.max_recipes,
    )


@router.post("/details", response_model=DetailedRecipe)
async def get_recipe_details(
    request: RecipeDetailRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    generator: Annotated[RecipeGenerator, Depends(get_recipe_generator)],
):
    """Get the detailed version of a recipe, with nutrition and tips."""
    return await generator.get_recipe_details(request.recipe_name, request.available_ingredients)


@router.post("/generate-image", response_model=ImageGenerationResponse)
async def generate_recipe_image(
    request: ImageGenerationRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    generator: Annotated[RecipeGenerator, Depends(get_recipe_generator)],
):
    """Generate a photo of the finished dish."""
    image_url, prompt = await generator.generate_image(
        request.recipe_name, request.recipe_description, request.cuisine
    )
    return ImageGenerationResponse(image_url=image_url, image_prompt=prompt)


# --- Saved recipes ---


@router.get("", response_model=list[RecipeResponse])
def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    cuisine: Annotated[str | None, Query(max_length=50)] = None,
):
    """List saved recipes, optionally filtered by cuisine."""
    return service.list_recipes(current_user.id, cuisine)


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def save_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Save a recipe."""
    return service.create_recipe(current_user.id, recipe_data)


@router.get("/favorites", response_model=list[RecipeResponse])
def list_favorite_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """List the current user's favorite recipes."""
    return service.list_favorites(current_user.id)


# --- Cooking sessions ---


@router.post("/cook", response_model=CookResponse, status_code=status.HTTP_201_CREATED)
def cook_recipe(
    request: CookRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Start cooking: consume the recipe's ingredients and record a session."""
    session, result = service.cook(
        current_user.id,
        recipe_name=request.recipe_name,
        recipe_id=request.recipe_id,
        ingredients=request.ingredients,
    )
    return CookResponse(
        session=CookingSessionResponse.model_validate(session),
        consumed=[
            {"id": c.id, "name": c.name, "consumed_amount": c.consumed_amount, "unit": c.unit}
            for c in result.consumed
        ],
        unmatched=result.unmatched,
    )


@router.get("/sessions", response_model=list[CookingSessionResponse])
def list_cooking_sessions(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List recent cooking sessions."""
    return service.list_sessions(current_user.id, limit)


@router.post("/sessions/{session_id}/complete", response_model=CookingSessionResponse)
def complete_cooking_session(
    session_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Mark a cooking session as completed."""
    return service.complete_session(current_user.id, session_id)


# --- Single recipe ---


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a saved recipe by ID."""
    return service.get_recipe(current_user.id, recipe_id)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a saved recipe."""
    service.delete_recipe(current_user.id, recipe_id)


@router.post("/{recipe_id}/favorite", response_model=FavoriteResponse)
def add_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Mark a recipe as favorite."""
    return FavoriteResponse(
        recipe_id=recipe_id, is_favorite=service.set_favorite(current_user.id, recipe_id, True)
    )


@router.delete("/{recipe_id}/favorite", response_model=FavoriteResponse)
def remove_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Unmark a recipe as favorite."""
    return FavoriteResponse(
        recipe_id=recipe_id, is_favorite=service.set_favorite(current_user.id, recipe_id, False)
    )
