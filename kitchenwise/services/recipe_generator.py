"""Recipe suggestions and images from the generation service."""

import json
import logging

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from kitchenwise.errors import RecipeGenerationError, ValidationError
from kitchenwise.schemas.recipe import DetailedRecipe, GeneratedRecipe
from kitchenwise.services.llm import LLMService
from kitchenwise.services.llm_prompts import (
    RECIPE_DETAIL_SYSTEM_PROMPT,
    RECIPE_GENERATION_SYSTEM_PROMPT,
    get_recipe_detail_prompt,
    get_recipe_generation_prompt,
    get_recipe_image_prompt,
)

logger = logging.getLogger(__name__)

_recipe_list = TypeAdapter(list[GeneratedRecipe])


class RecipeGenerator:
    """Turn pantry ingredient names into validated recipe suggestions."""

    def __init__(self, llm_service: LLMService | None = None):
        self.llm_service = llm_service or LLMService()

    async def generate_recipes(
        self,
        ingredients: list[str],
        cuisine: str | None = None,
        difficulty: str | None = None,
        max_recipes: int = 5,
    ) -> list[GeneratedRecipe]:
        """Ask the text model for recipes and validate the reply.

        Raises RecipeGenerationError when the service fails or its output does
        not match the recipe schema.
        """
        ingredients = [i.strip() for i in ingredients if i and i.strip()]
        if not ingredients:
            raise ValidationError("At least one ingredient is required")

        logger.info(f"Generating recipes for ingredients: {', '.join(ingredients)}")
        prompt = get_recipe_generation_prompt(ingredients, cuisine, difficulty, max_recipes)
        payload = await self._generate_json(prompt, RECIPE_GENERATION_SYSTEM_PROMPT)

        try:
            recipes = _recipe_list.validate_python(payload)
        except SchemaError as e:
            logger.warning(f"Generated recipes did not match schema: {e}")
            raise RecipeGenerationError("Recipe service returned malformed recipes") from e

        logger.info(f"Successfully generated {len(recipes)} recipes")
        return recipes[:max_recipes]

    async def get_recipe_details(self, recipe_name: str, ingredients: list[str]) -> DetailedRecipe:
        """Ask the text model for a detailed version of one recipe."""
        logger.info(f"Getting detailed recipe for: {recipe_name}")
        prompt = get_recipe_detail_prompt(recipe_name, ingredients)
        payload = await self._generate_json(prompt, RECIPE_DETAIL_SYSTEM_PROMPT)

        try:
            return DetailedRecipe.model_validate(payload)
        except SchemaError as e:
            logger.warning(f"Detailed recipe did not match schema: {e}")
            raise RecipeGenerationError("Recipe service returned a malformed recipe") from e

    async def generate_image(
        self,
        recipe_name: str,
        description: str | None = None,
        cuisine: str | None = None,
    ) -> tuple[str, str]:
        """Generate a photo of the dish. Returns (image_url, prompt)."""
        prompt = get_recipe_image_prompt(
            recipe_name,
            description or "A delicious homemade dish",
            cuisine or "International",
        )
        try:
            url = await self.llm_service.generate_image(prompt)
        except httpx.HTTPError as e:
            logger.error(f"Error generating image for recipe {recipe_name}: {e}")
            raise RecipeGenerationError("Failed to generate recipe image") from e

        if not url:
            logger.warning(f"No image URL returned for recipe: {recipe_name}")
            raise RecipeGenerationError("Failed to generate recipe image")
        logger.info(f"Generated image for recipe {recipe_name}")
        return url, prompt

    async def _generate_json(self, prompt: str, system_prompt: str):
        try:
            return await self.llm_service.generate_json(prompt=prompt, system_prompt=system_prompt)
        except (httpx.HTTPError, json.JSONDecodeError, KeyError, IndexError) as e:
            logger.error(f"Recipe generation failed: {e}")
            raise RecipeGenerationError("Failed to generate recipes") from e
