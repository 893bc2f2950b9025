"""Unit tests for per-recipe metrics."""

from unittest.mock import AsyncMock

import pytest

from recipe_matcher.matching.embeddings import (
    FALLBACK_SOURCE,
    REMOTE_SOURCE,
    EmbeddingGenerator,
    fallback_embedding,
)
from recipe_matcher.matching.metrics import (
    calculate_coverage_score,
    calculate_exact_matches,
    calculate_ingredient_match_rate,
    calculate_similarity_score,
    calculate_utilization_score,
    clamp_similarity,
    join_ingredients,
)
from recipe_matcher.utils.config import EMBEDDING_DIMENSIONS
from recipe_matcher.utils.errors import EmbeddingServiceError


class TestIngredientMatchRate:
    """Fraction of the user's ingredients used by the recipe."""

    def test_all_used(self):
        assert calculate_ingredient_match_rate(["carrot", "onion"], ["carrot", "onion", "celery"]) == 1.0

    def test_none_used(self):
        assert calculate_ingredient_match_rate(["chocolate"], ["carrot", "onion"]) == 0.0

    def test_partial(self):
        assert calculate_ingredient_match_rate(["chicken", "beef"], ["chicken breast"]) == 0.5

    def test_empty_user_list(self):
        assert calculate_ingredient_match_rate([], ["carrot"]) == 0.0

    def test_empty_recipe_list(self):
        assert calculate_ingredient_match_rate(["carrot"], []) == 0.0


class TestUtilizationScore:
    """Fraction of the recipe's ingredients the user has."""

    def test_partial(self):
        score = calculate_utilization_score(["chicken"], ["chicken breast", "soy sauce", "garlic"])
        assert score == pytest.approx(1 / 3)

    def test_full(self):
        assert calculate_utilization_score(["garlic", "rice"], ["Rice", "garlic"]) == 1.0

    def test_empty_recipe(self):
        assert calculate_utilization_score(["garlic"], []) == 0.0

    def test_coverage_alias(self):
        assert calculate_coverage_score is calculate_utilization_score


class TestExactMatches:
    """Count of recipe ingredients hit by the strict matcher."""

    def test_identical_lists(self):
        assert calculate_exact_matches(["carrot", "celery", "onion"], ["carrot", "celery", "onion"]) == 3

    def test_single_word_vs_multi_word(self):
        assert calculate_exact_matches(["chicken"], ["chicken breast", "soy sauce", "garlic"]) == 0

    def test_multi_word_subset(self):
        assert calculate_exact_matches(["feta cheese"], ["crumbled feta cheese", "olives"]) == 1

    def test_specific_user_ingredient_vs_generic_recipe_ingredient(self):
        assert calculate_exact_matches(["feta cheese"], ["bread", "cheese", "butter"]) == 0
        assert calculate_exact_matches(["feta cheese"], ["tomato", "feta cheese", "olives"]) == 1

    def test_bounded_by_recipe_size(self):
        user = ["garlic", "Garlic", "GARLIC"]
        assert calculate_exact_matches(user, ["garlic"]) == 1


class TestSimilarityScore:
    """Embedding similarity, clamped to [0, 1]."""

    def test_join(self):
        assert join_ingredients(["a", "b c"]) == "a, b c"
        assert join_ingredients([]) == ""

    @pytest.mark.parametrize("raw, expected", [(-0.4, 0.0), (0.3, 0.3), (1.0000001, 1.0)])
    def test_clamp(self, raw, expected):
        assert clamp_similarity(raw) == expected

    @pytest.mark.asyncio
    async def test_identical_lists(self, fallback_generator):
        score = await calculate_similarity_score(["carrot", "celery"], ["carrot", "celery"], generator=fallback_generator)
        assert score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_within_bounds(self, fallback_generator):
        score = await calculate_similarity_score(["chicken"], ["chocolate", "sugar"], generator=fallback_generator)
        assert 0.0 <= score <= 1.0

    @pytest.mark.asyncio
    async def test_uses_precomputed_user_embedding(self, fallback_generator):
        """The supplied user vector is used as is."""
        user_embedding = fallback_embedding("tomato, basil")
        score = await calculate_similarity_score(
            ["something else entirely"],
            ["tomato", "basil"],
            generator=fallback_generator,
            user_embedding=user_embedding,
        )
        assert score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_remote_failure_mid_comparison_never_mixes_sources(self):
        """User text embedded remotely, recipe text falls back: both sides use the fallback."""
        remote = AsyncMock()
        remote.source = REMOTE_SOURCE
        remote.embed.side_effect = [[0.1] * EMBEDDING_DIMENSIONS, EmbeddingServiceError("429")]
        generator = EmbeddingGenerator(remote=remote, use_cache=False)
        ingredients = ["chicken", "rice", "garlic"]

        score = await calculate_similarity_score(ingredients, list(ingredients), generator=generator)

        assert score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_precomputed_remote_user_embedding_with_fallback_recipe(self):
        remote = AsyncMock()
        remote.source = REMOTE_SOURCE
        remote.embed.side_effect = EmbeddingServiceError("429")
        generator = EmbeddingGenerator(remote=remote, use_cache=False)

        score = await calculate_similarity_score(
            ["tomato", "basil"],
            ["tomato", "basil"],
            generator=generator,
            user_embedding=[0.1] * EMBEDDING_DIMENSIONS,
            user_source=REMOTE_SOURCE,
        )

        assert score == pytest.approx(1.0)
        assert generator.last_source == FALLBACK_SOURCE
