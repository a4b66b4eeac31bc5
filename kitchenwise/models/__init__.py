"""SQLAlchemy models."""

from kitchenwise.models.pantry import PantryItem
from kitchenwise.models.recipe import CookingSession, FavoriteRecipe, Recipe
from kitchenwise.models.user import User

__all__ = [
    "User",
    "PantryItem",
    "Recipe",
    "FavoriteRecipe",
    "CookingSession",
]
