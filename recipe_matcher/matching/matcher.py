"""Ingredient text matching.

Two predicates:
- ingredient_matches(): lenient, boundary-aware containment in either
  direction. Used for coverage and the matched/missing partition.
- is_exact_match(): strict, used only to count exact hits. A single-word
  ingredient never exact-matches a multi-word one ("cheese" vs "feta cheese").
"""

import re
from functools import lru_cache

# Letters and digits (any script); underscore is not part of an ingredient word
_WORD_CHAR = r"[^\W_]"


def normalize_ingredient(ingredient: str) -> str:
    """Lowercase and trim an ingredient name."""
    return ingredient.strip().lower()


def generate_ingredient_slug(ingredient: str) -> str:
    """URL-safe slug for an ingredient name.

    >>> generate_ingredient_slug("  Honey & Mustard ")
    'honey-mustard'
    """
    slug = normalize_ingredient(ingredient)
    slug = re.sub(r"[^\w\s-]|_", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


@lru_cache(maxsize=1024)
def _boundary_pattern(needle: str) -> re.Pattern:
    return re.compile(rf"(?<!{_WORD_CHAR}){re.escape(needle)}(?!{_WORD_CHAR})")


def _contains_word_bounded(haystack: str, needle: str) -> bool:
    return _boundary_pattern(needle).search(haystack) is not None


def ingredient_matches(user_ingredient: str, recipe_ingredient: str) -> bool:
    """Lenient match between a user ingredient and a recipe ingredient.

    Case and surrounding whitespace are ignored. Besides equality, either
    side may occur inside the other as a whole-word span, so "pepper" matches
    "bell pepper" (and vice versa) while "rice" does not match "licorice".

    Args:
        user_ingredient: Ingredient supplied by the user.
        recipe_ingredient: Ingredient listed by the recipe.

    Returns:
        True if the pair matches. Empty or blank inputs never match.
    """
    user = normalize_ingredient(user_ingredient)
    recipe = normalize_ingredient(recipe_ingredient)
    if not user or not recipe:
        return False
    if user == recipe:
        return True
    return _contains_word_bounded(recipe, user) or _contains_word_bounded(user, recipe)


def is_exact_match(user_ingredient: str, recipe_ingredient: str) -> bool:
    """Strict match used for the exact-match metric.

    Identical normalized names always match. Otherwise both names must be
    multi-word. With equal word counts the words must be identical (only the
    spacing may differ); with different counts every word of the shorter name
    must appear among the words of the longer one ("feta cheese" vs
    "crumbled feta cheese").
    """
    user = normalize_ingredient(user_ingredient)
    recipe = normalize_ingredient(recipe_ingredient)
    if not user or not recipe:
        return False
    if user == recipe:
        return True

    user_words = user.split()
    recipe_words = recipe.split()
    if len(user_words) < 2 or len(recipe_words) < 2:
        return False
    if len(user_words) == len(recipe_words):
        return user_words == recipe_words

    shorter, longer = sorted((user_words, recipe_words), key=len)
    longer_words = set(longer)
    return all(word in longer_words for word in shorter)


def find_matched_ingredients(user_ingredients: list[str], recipe_ingredients: list[str]) -> list[str]:
    """Recipe ingredients (in recipe order) matched by at least one user ingredient."""
    return [
        recipe_ingredient
        for recipe_ingredient in recipe_ingredients
        if any(ingredient_matches(user, recipe_ingredient) for user in user_ingredients)
    ]


def find_missing_ingredients(user_ingredients: list[str], recipe_ingredients: list[str]) -> list[str]:
    """Recipe ingredients (in recipe order) no user ingredient matches."""
    return [
        recipe_ingredient
        for recipe_ingredient in recipe_ingredients
        if not any(ingredient_matches(user, recipe_ingredient) for user in user_ingredients)
    ]
