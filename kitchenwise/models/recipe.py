"""Saved recipe, favorite and cooking session models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from kitchenwise.database import Base
from kitchenwise.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe generated by the text model and saved by a user."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    cuisine = Column(String(50), nullable=True)
    difficulty_level = Column(String(20), nullable=True)
    prep_time_minutes = Column(Integer, nullable=True)
    cook_time_minutes = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True)
    ingredients = Column(JSON, nullable=False, default=list)  # free-text ingredient lines
    instructions = Column(JSON, nullable=False, default=list)
    nutrition = Column(JSON, nullable=True)
    image_url = Column(String(500), nullable=True)
    generated_with = Column(JSON, nullable=True)
    cuisine_requested = Column(String(50), nullable=True)

    # Relationships
    user = relationship("User", backref="recipes")
    favorites = relationship(
        "FavoriteRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )


class FavoriteRecipe(Base):
    """Junction between a user and a recipe they marked as favorite."""

    __tablename__ = "favorite_recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    added_at = Column(DateTime(timezone=True), nullable=False)

    recipe = relationship("Recipe", back_populates="favorites")

    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),)


class CookingSession(Base, TimestampMixin):
    """A single cook of a recipe and the pantry ingredients it used."""

    __tablename__ = "cooking_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    recipe_name = Column(String(200), nullable=False)
    ingredients_used = Column(JSON, nullable=False, default=list)
    started_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)

    recipe = relationship("Recipe")
