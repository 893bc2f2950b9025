"""Unit tests for the recommendation service."""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from recipe_matcher.matching.embeddings import EmbeddingGenerator
from recipe_matcher.services.recommendations import generate_recipe_recommendations, run_recommendations
from recipe_matcher.utils.errors import EmbeddingServiceError, IngredientValidationError


class TestGenerateRecipeRecommendations:
    """Test ranking end to end with the fallback embedding."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ingredients", [[], ["", "   "], None])
    async def test_no_usable_ingredients(self, ingredients, fallback_generator):
        assert await generate_recipe_recommendations(ingredients, generator=fallback_generator) == []

    @pytest.mark.asyncio
    async def test_non_string_ingredient(self, fallback_generator):
        with pytest.raises(IngredientValidationError):
            await generate_recipe_recommendations(["chicken", 5], generator=fallback_generator)

    @pytest.mark.asyncio
    async def test_zero_overlap_recipes_excluded(self, make_recipe, fallback_generator):
        recipes = [make_recipe(["chocolate", "sugar"], id="dessert"), make_recipe(["chicken breast"], id="chicken")]
        results = await generate_recipe_recommendations(["chicken"], recipes=recipes, generator=fallback_generator)
        assert [r.recipe.id for r in results] == ["chicken"]

    @pytest.mark.asyncio
    async def test_nothing_matches(self, make_recipe, fallback_generator):
        recipes = [make_recipe(["chocolate", "sugar"])]
        assert await generate_recipe_recommendations(["chicken"], recipes=recipes, generator=fallback_generator) == []

    @pytest.mark.asyncio
    async def test_sorted_by_combined_score(self, make_recipe, fallback_generator):
        recipes = [
            make_recipe(["carrot", "potato", "beef", "flour", "salt"], id="partial"),
            make_recipe(["carrot", "celery", "onion"], id="exact"),
            make_recipe(["onion", "garlic"], id="some"),
        ]
        results = await generate_recipe_recommendations(
            ["carrot", "celery", "onion"], recipes=recipes, generator=fallback_generator
        )

        assert results[0].recipe.id == "exact"
        scores = [r.combined_score for r in results]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_limit(self, make_recipe, fallback_generator):
        recipes = [make_recipe(["garlic", f"item {i}"]) for i in range(5)]
        results = await generate_recipe_recommendations(
            ["garlic"], recipes=recipes, generator=fallback_generator, limit=2
        )
        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_uses_local_catalog_by_default(self, fallback_generator):
        results = await generate_recipe_recommendations(["carrot", "celery", "onion"], generator=fallback_generator)

        assert results
        assert results[0].recipe.id == "local-3"
        assert all(r.matched_ingredients for r in results)

    @pytest.mark.asyncio
    async def test_candidates_come_from_sources(self, make_recipe, fallback_generator):
        with patch(
            "recipe_matcher.services.recommendations.get_candidate_recipes",
            new_callable=AsyncMock,
            return_value=[make_recipe(["garlic"], id="only")],
        ) as mock_candidates:
            results = await generate_recipe_recommendations([" garlic "], generator=fallback_generator)

        mock_candidates.assert_awaited_once_with(["garlic"])
        assert [r.recipe.id for r in results] == ["only"]

    @pytest.mark.asyncio
    async def test_remote_embedding_failure_does_not_fail_request(self, make_recipe, caplog):
        caplog.set_level(logging.INFO, logger="recipe_matcher")
        remote = AsyncMock()
        remote.source = "REMOTE"
        remote.embed.side_effect = EmbeddingServiceError("401 Unauthorized")
        generator = EmbeddingGenerator(remote=remote, use_cache=False)

        results = await generate_recipe_recommendations(
            ["garlic"], recipes=[make_recipe(["garlic", "rice"])], generator=generator
        )

        assert len(results) == 1
        assert generator.last_source == "FALLBACK"
        assert "EMBEDDING_SOURCE=FALLBACK" in caplog.text

    @pytest.mark.asyncio
    async def test_flaky_remote_scores_identical_list_as_similar(self, make_recipe):
        remote = AsyncMock()
        remote.source = "REMOTE"
        remote.embed.side_effect = [[0.1] * 384, EmbeddingServiceError("429")]
        generator = EmbeddingGenerator(remote=remote, use_cache=False)

        results = await generate_recipe_recommendations(
            ["chicken", "rice", "garlic"], recipes=[make_recipe(["chicken", "rice", "garlic"])], generator=generator
        )

        assert results[0].similarity_score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_user_embedding_computed_once(self, make_recipe):
        generator = EmbeddingGenerator(use_cache=False)
        recipes = [make_recipe(["garlic"]), make_recipe(["rice"]), make_recipe(["garlic", "rice"])]
        with patch.object(generator, "embed_with_source", wraps=generator.embed_with_source) as spy:
            await generate_recipe_recommendations(["garlic", "rice"], recipes=recipes, generator=generator)
        texts = [c.args[0] for c in spy.call_args_list]
        assert texts.count("garlic, rice") == 2  # user list once, identical recipe list once
        assert len(texts) == 1 + len(recipes)


class TestRunRecommendations:
    """Test the synchronous wrapper."""

    def test_sync_wrapper(self, make_recipe, fallback_generator):
        results = run_recommendations(
            ["garlic"], recipes=[make_recipe(["garlic", "rice"])], generator=fallback_generator
        )
        assert len(results) == 1
        assert results[0].matched_ingredients == ["garlic"]
