"""Per-recipe metrics derived from the matchers and embeddings.

All calculators return 0 for empty inputs instead of raising.
"""

from typing import Optional

from recipe_matcher.matching.embeddings import EmbeddingGenerator, cosine_similarity, get_embedding_generator
from recipe_matcher.matching.matcher import ingredient_matches, is_exact_match
from recipe_matcher.utils.logger import logger


def join_ingredients(ingredients: list[str]) -> str:
    """Text fed to the embedding generator for an ingredient list."""
    return ", ".join(ingredients)


def calculate_ingredient_match_rate(user_ingredients: list[str], recipe_ingredients: list[str]) -> float:
    """Fraction of the user's ingredients the recipe uses (lenient matcher)."""
    if not user_ingredients:
        return 0.0
    used = sum(
        1
        for user in user_ingredients
        if any(ingredient_matches(user, recipe) for recipe in recipe_ingredients)
    )
    return used / len(user_ingredients)


def calculate_utilization_score(user_ingredients: list[str], recipe_ingredients: list[str]) -> float:
    """Fraction of the recipe's ingredients the user has (lenient matcher)."""
    if not recipe_ingredients:
        return 0.0
    covered = sum(
        1
        for recipe in recipe_ingredients
        if any(ingredient_matches(user, recipe) for user in user_ingredients)
    )
    return covered / len(recipe_ingredients)


# Legacy name used by older result payloads ("coverageScore")
calculate_coverage_score = calculate_utilization_score


def calculate_exact_matches(user_ingredients: list[str], recipe_ingredients: list[str]) -> int:
    """Number of recipe ingredients hit by the strict exact matcher."""
    return sum(
        1
        for recipe in recipe_ingredients
        if any(is_exact_match(user, recipe) for user in user_ingredients)
    )


def clamp_similarity(value: float) -> float:
    """Negative similarity means "no signal", not "anti-match"."""
    return max(0.0, min(1.0, value))


async def calculate_similarity_score(
    user_ingredients: list[str],
    recipe_ingredients: list[str],
    generator: Optional[EmbeddingGenerator] = None,
    user_embedding: Optional[list[float]] = None,
    user_source: Optional[str] = None,
) -> float:
    """Cosine similarity of the two ingredient lists' embeddings, clamped to [0, 1].

    Both vectors always come from the same provider: when the recipe vector's
    source differs from the user vector's (a remote call failed for one of
    them), both sides are re-embedded with the local fallback.

    Args:
        user_ingredients: Ingredients supplied by the user.
        recipe_ingredients: Ingredients listed by the recipe.
        generator: Embedding generator (process-wide one by default).
        user_embedding: Precomputed user embedding, reused across recipes.
        user_source: Provider of ``user_embedding``. When omitted with a
            precomputed embedding, the vector is trusted as is.
    """
    generator = generator or get_embedding_generator()
    user_text = join_ingredients(user_ingredients)
    recipe_text = join_ingredients(recipe_ingredients)

    if user_embedding is None:
        user_embedding, user_source = await generator.embed_with_source(user_text)
    recipe_embedding, recipe_source = await generator.embed_with_source(recipe_text)

    if user_source is not None and recipe_source != user_source:
        logger.debug(f"Embedding sources differ ({user_source}/{recipe_source}), comparing fallback vectors")
        user_embedding = await generator.embed_fallback(user_text)
        recipe_embedding = await generator.embed_fallback(recipe_text)

    return clamp_similarity(cosine_similarity(user_embedding, recipe_embedding))
