"""LLM prompt templates for recipe generation and recipe images."""

RECIPE_GENERATION_SYSTEM_PROMPT = """You are a professional chef AI assistant. You create practical, delicious recipes from the ingredients a home cook already has.

Respond ONLY with a valid JSON array, no other text, matching this schema:
[
  {
    "name": "Recipe Name",
    "description": "Brief description",
    "cuisine": "Cuisine type",
    "difficultyLevel": "Easy" | "Medium" | "Hard",
    "prepTimeMinutes": 15,
    "cookTimeMinutes": 25,
    "servings": 4,
    "ingredients": ["2 cups Basmati Rice", "3 piece Tomatoes"],
    "instructions": ["Step 1", "Step 2"],
    "tags": ["tag1", "tag2"]
  }
]

Write every ingredient as "<quantity> <unit> <name>" (for example "2 cups flour" or "3 piece Tomatoes") so quantities can be matched against the pantry. Seasonings without a measurable quantity may be written as plain text ("Salt to taste")."""


def get_recipe_generation_prompt(
    ingredients: list[str],
    cuisine: str | None = None,
    difficulty: str | None = None,
    max_recipes: int = 5,
) -> str:
    """Generate prompt for suggesting recipes from pantry ingredients."""
    prompt = f"""Generate up to {max_recipes} creative and practical recipes using ONLY the following ingredients (you can suggest common pantry staples like salt, pepper, oil if needed):

Available ingredients: {", ".join(ingredients)}"""

    if cuisine:
        prompt += f"\nCuisine preference: {cuisine}"
    if difficulty:
        prompt += f"\nDifficulty level: {difficulty}"

    prompt += """

Make sure:
- Only use ingredients from the available list (plus basic seasonings)
- Instructions are clear and concise
- Times are realistic
- Response is valid JSON only"""
    return prompt


RECIPE_DETAIL_SYSTEM_PROMPT = """You are a professional chef AI assistant. Expand a recipe into a detailed, professional version.

Respond ONLY with a valid JSON object, no other text, matching this schema:
{
  "name": "Recipe Name",
  "description": "Detailed description",
  "cuisine": "Cuisine type",
  "difficultyLevel": "Easy" | "Medium" | "Hard",
  "prepTimeMinutes": 15,
  "cookTimeMinutes": 25,
  "servings": 4,
  "ingredients": ["ingredient with quantity"],
  "instructions": ["Detailed step 1", "Detailed step 2"],
  "nutrition": {"calories": 350, "protein": 15, "carbs": 45, "fat": 12, "fiber": 6},
  "tips": ["Cooking tip 1"],
  "tags": ["tag1"]
}"""


def get_recipe_detail_prompt(recipe_name: str, ingredients: list[str]) -> str:
    """Generate prompt for a detailed version of one recipe."""
    return f"""Create a detailed version of the recipe "{recipe_name}" using these ingredients: {", ".join(ingredients) or "any common ingredients"}.

Make the instructions detailed and professional. Include realistic nutrition estimates per serving.

Respond with JSON only."""


def get_recipe_image_prompt(recipe_name: str, description: str, cuisine: str) -> str:
    """Generate prompt for a photograph of the finished dish."""
    return (
        f"A professional, appetizing photograph of {recipe_name}, a {cuisine.lower()} dish. "
        f"{description} "
        "The image should show the finished dish beautifully plated, with vibrant colors "
        "and appealing presentation. Professional food photography style, well-lit, "
        "restaurant quality presentation, overhead or 45-degree angle view."
    )
