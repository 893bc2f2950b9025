"""Pytest configuration shared by all tests.

Unit tests never reach the network: remote embeddings and remote recipe
sources are disabled before any recipe_matcher module is imported.
"""

import os

import pytest


def pytest_configure(config):
    """Disable optional remote collaborators for the whole test session.

    Empty values also keep a developer's .env file from re-enabling them
    (load_dotenv never overrides variables that are already set).
    """
    os.environ["GEMINI_API_KEY"] = ""
    os.environ["SPOONACULAR_API_KEY"] = ""
    os.environ["USE_SPOONACULAR"] = "false"
    os.environ["USE_THEMEALDB"] = "false"


@pytest.fixture
def fallback_generator():
    """Embedding generator that only uses the deterministic fallback."""
    from recipe_matcher.matching.embeddings import EmbeddingGenerator

    return EmbeddingGenerator(use_cache=False)


@pytest.fixture
def make_recipe():
    """Factory for Recipe objects with sensible defaults."""
    from recipe_matcher.models.models import Recipe

    counter = {"n": 0}

    def _make(ingredients, name=None, **kwargs):
        counter["n"] += 1
        return Recipe(
            id=kwargs.pop("id", f"test-{counter['n']}"),
            name=name or f"Recipe {counter['n']}",
            ingredients=ingredients,
            cook_time=kwargs.pop("cook_time", 20),
            servings=kwargs.pop("servings", 2),
            **kwargs,
        )

    return _make
