"""Recipe service for saved recipes, favorites and cooking sessions."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from kitchenwise.errors import NotFoundError, ValidationError
from kitchenwise.models.recipe import CookingSession, FavoriteRecipe, Recipe
from kitchenwise.schemas.recipe import RecipeCreate
from kitchenwise.services.ingredient_matcher import IngredientMatcher, MatchResult

logger = logging.getLogger(__name__)


def describe_consumption(amount: float, unit: str, name: str) -> str:
    """Format a consumed ingredient the way it is stored on a cooking session."""
    return f"{amount:g} {unit} {name}"


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session, matcher: IngredientMatcher | None = None):
        self.db = db
        self.matcher = matcher

    # --- Saved recipes ---

    def create_recipe(self, user_id: int, data: RecipeCreate) -> Recipe:
        """Save a recipe for the user."""
        payload = data.model_dump()
        recipe = Recipe(user_id=user_id, **payload)
        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Saved recipe '{recipe.name}' for user {user_id}")
        return recipe

    def list_recipes(self, user_id: int, cuisine: str | None = None) -> list[Recipe]:
        """List saved recipes, optionally restricted to one cuisine."""
        query = self.db.query(Recipe).filter(Recipe.user_id == user_id)
        if cuisine:
            query = query.filter(func.lower(Recipe.cuisine) == cuisine.strip().lower())
        return query.order_by(Recipe.name).all()

    def get_recipe(self, user_id: int, recipe_id: int) -> Recipe:
        """Get a saved recipe that belongs to the user."""
        recipe = (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.user_id == user_id)
            .first()
        )
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    def delete_recipe(self, user_id: int, recipe_id: int) -> None:
        recipe = self.get_recipe(user_id, recipe_id)
        self.db.delete(recipe)
        self.db.commit()

    # --- Favorites ---

    def set_favorite(self, user_id: int, recipe_id: int, favorite: bool) -> bool:
        """Mark or unmark a recipe as favorite. Returns the resulting state."""
        self.get_recipe(user_id, recipe_id)
        existing = (
            self.db.query(FavoriteRecipe)
            .filter(FavoriteRecipe.user_id == user_id, FavoriteRecipe.recipe_id == recipe_id)
            .first()
        )
        if favorite and not existing:
            self.db.add(
                FavoriteRecipe(user_id=user_id, recipe_id=recipe_id, added_at=datetime.now(UTC))
            )
            self.db.commit()
        elif not favorite and existing:
            self.db.delete(existing)
            self.db.commit()
        return favorite

    def list_favorites(self, user_id: int) -> list[Recipe]:
        """List the user's favorite recipes, most recently favorited first."""
        return (
            self.db.query(Recipe)
            .join(FavoriteRecipe, FavoriteRecipe.recipe_id == Recipe.id)
            .filter(FavoriteRecipe.user_id == user_id)
            .order_by(FavoriteRecipe.added_at.desc(), Recipe.name)
            .all()
        )

    # --- Cooking sessions ---

    def cook(
        self,
        user_id: int,
        recipe_name: str | None = None,
        recipe_id: int | None = None,
        ingredients: list[str] | None = None,
    ) -> tuple[CookingSession, MatchResult]:
        """Consume a recipe's ingredients from the pantry and record the session.

        Ingredient lines default to those of the saved recipe when ``recipe_id``
        is given and no explicit lines are passed.
        """
        if self.matcher is None:
            raise RuntimeError("RecipeService.cook requires an IngredientMatcher")

        recipe = self.get_recipe(user_id, recipe_id) if recipe_id is not None else None
        name = (recipe_name or "").strip() or (recipe.name if recipe else "")
        if not name:
            raise ValidationError("Recipe name is required")

        lines = ingredients if ingredients is not None else (recipe.ingredients if recipe else [])
        lines = [line for line in lines if line and line.strip()]
        if not lines:
            raise ValidationError("Ingredients to consume are required")

        result = self.matcher.match_and_consume(user_id, lines)

        session = CookingSession(
            user_id=user_id,
            recipe_id=recipe.id if recipe else None,
            recipe_name=name,
            ingredients_used=[
                describe_consumption(c.consumed_amount, c.unit, c.name) for c in result.consumed
            ],
            started_at=datetime.now(UTC),
            is_completed=False,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)

        logger.info(
            f"Cooking started for {name}. Consumed: {len(result.consumed)}, "
            f"Not found: {len(result.unmatched)}"
        )
        return session, result

    def complete_session(self, user_id: int, session_id: int) -> CookingSession:
        """Mark a cooking session as completed."""
        session = (
            self.db.query(CookingSession)
            .filter(CookingSession.id == session_id, CookingSession.user_id == user_id)
            .first()
        )
        if not session:
            raise NotFoundError("Cooking session not found")
        if not session.is_completed:
            session.is_completed = True
            session.completed_at = datetime.now(UTC)
            self.db.commit()
            self.db.refresh(session)
        return session

    def list_sessions(self, user_id: int, limit: int = 20) -> list[CookingSession]:
        """List recent cooking sessions for the user."""
        return (
            self.db.query(CookingSession)
            .filter(CookingSession.user_id == user_id)
            .order_by(CookingSession.started_at.desc(), CookingSession.id.desc())
            .limit(limit)
            .all()
        )
