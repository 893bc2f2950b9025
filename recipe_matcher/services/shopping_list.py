"""Shopping list for a set of chosen recipes.

The list is the union of every recipe's missing ingredients (lenient
matcher), de-duplicated case-insensitively and sorted alphabetically. When
GEMINI_API_KEY is set, Gemini consolidates near-duplicates ("garlic",
"garlic cloves"); any LLM failure or unusable answer keeps the
deterministic list.
"""

import asyncio
import json
import re
from typing import Optional

from google import genai

from recipe_matcher.matching.matcher import find_missing_ingredients, normalize_ingredient
from recipe_matcher.models.models import Recipe, ShoppingListRequest
from recipe_matcher.utils.config import config
from recipe_matcher.utils.errors import safe_execute_async, safe_execute_sync
from recipe_matcher.utils.logger import logger

SHOPPING_LIST_PROMPT = (
    "You are helping a home cook build a shopping list. Merge duplicates and "
    "near-duplicates in the ingredient list below (for example 'garlic' and "
    "'garlic cloves'), keep generic grocery names, and do not add new items. "
    'Return ONLY valid JSON: {{"shoppingList": ["item", ...]}}.\n\nIngredients: {items}'
)


def build_shopping_list(recipes: list[Recipe], user_ingredients: list[str]) -> list[str]:
    """Missing ingredients across recipes, de-duplicated, sorted case-insensitively.

    The first spelling seen for an ingredient is the one kept.
    """
    seen: set[str] = set()
    shopping_list = []
    for recipe in recipes:
        for ingredient in find_missing_ingredients(user_ingredients, recipe.ingredients):
            key = normalize_ingredient(ingredient)
            if key and key not in seen:
                seen.add(key)
                shopping_list.append(ingredient.strip())
    return sorted(shopping_list, key=normalize_ingredient)


def parse_shopping_list_response(response_text: str) -> Optional[list[str]]:
    """Extract the item list from an LLM answer.

    Accepts {"shoppingList": [...]} or a bare JSON array, optionally wrapped
    in explanatory text. Returns None when no list of strings is found.
    """

    def _parse_direct():
        return json.loads(response_text)

    def _parse_embedded():
        match = re.search(r"\{.*\}|\[.*\]", response_text, re.DOTALL)
        return json.loads(match.group()) if match else None

    parsed = safe_execute_sync(_parse_direct, "Direct JSON parse", log_level="debug")
    if parsed is None:
        parsed = safe_execute_sync(_parse_embedded, "Embedded JSON extraction", log_level="debug")

    if isinstance(parsed, dict):
        parsed = parsed.get("shoppingList")
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        return None
    items = [item.strip() for item in parsed if item.strip()]
    return items or None


async def _consolidate_with_gemini(items: list[str]) -> Optional[list[str]]:
    client = genai.Client(api_key=config.GEMINI_API_KEY)
    response = await asyncio.to_thread(
        client.models.generate_content,
        model=config.SHOPPING_LIST_MODEL,
        contents=SHOPPING_LIST_PROMPT.format(items=", ".join(items)),
    )
    return parse_shopping_list_response(response.text or "")


async def generate_shopping_list(recipes: list[Recipe], user_ingredients: list[str]) -> list[str]:
    """Shopping list for ``recipes`` given what the user already has.

    Raises:
        pydantic.ValidationError: If recipes is empty or user_ingredients
            holds non-string entries.
    """
    request = ShoppingListRequest(recipes=recipes, user_ingredients=user_ingredients)
    shopping_list = build_shopping_list(request.recipes, request.user_ingredients)

    if not shopping_list or not config.gemini_configured:
        return shopping_list

    consolidated = await safe_execute_async(
        _consolidate_with_gemini(shopping_list),
        "Gemini shopping list consolidation",
        default_return=None,
    )
    if not consolidated:
        logger.info("Using deterministic shopping list")
        return shopping_list
    return consolidated
