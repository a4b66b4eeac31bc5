"""Pydantic schemas for API requests and responses."""

from kitchenwise.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from kitchenwise.schemas.pantry import (
    PantryItemCreate,
    PantryItemPatch,
    PantryItemResponse,
    PantryStatsResponse,
)
from kitchenwise.schemas.recipe import GeneratedRecipe, RecipeCreate, RecipeResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "PantryItemCreate",
    "PantryItemPatch",
    "PantryItemResponse",
    "PantryStatsResponse",
    "GeneratedRecipe",
    "RecipeCreate",
    "RecipeResponse",
]
