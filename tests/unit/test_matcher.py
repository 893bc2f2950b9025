"""Unit tests for ingredient text matching.

Tests cover:
- Lenient matcher (case, whitespace, word-boundary containment)
- Strict exact matcher (single-word vs multi-word rule)
- Slug generation and normalization
- Matched/missing partition
"""

import pytest

from recipe_matcher.matching.matcher import (
    find_matched_ingredients,
    find_missing_ingredients,
    generate_ingredient_slug,
    ingredient_matches,
    is_exact_match,
    normalize_ingredient,
)


class TestNormalizeIngredient:
    """Test lowercase + trim normalization."""

    def test_lowercase_and_trim(self):
        assert normalize_ingredient("  Chicken Breast  ") == "chicken breast"
        assert normalize_ingredient("GARLIC") == "garlic"

    def test_empty_strings(self):
        assert normalize_ingredient("") == ""
        assert normalize_ingredient("   ") == ""


class TestGenerateIngredientSlug:
    """Test slug generation."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Chicken Breast", "chicken-breast"),
            ("  bell pepper  ", "bell-pepper"),
            ("bell   pepper", "bell-pepper"),
            ("bell@pepper!", "bellpepper"),
            ("honey & mustard", "honey-mustard"),
            ("---garlic---", "garlic"),
            ("@olive oil!", "olive-oil"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_slug(self, name, expected):
        assert generate_ingredient_slug(name) == expected


class TestIngredientMatches:
    """Test the lenient matcher."""

    def test_exact_regardless_of_case(self):
        assert ingredient_matches("chicken", "Chicken") is True
        assert ingredient_matches("GARLIC", "garlic") is True
        assert ingredient_matches("Olive Oil", "olive oil") is True

    def test_user_ingredient_inside_recipe_ingredient(self):
        assert ingredient_matches("cauliflower", "Cauliflower Rice") is True
        assert ingredient_matches("chicken", "chicken breast") is True
        assert ingredient_matches("pepper", "bell pepper") is True

    def test_recipe_ingredient_inside_user_ingredient(self):
        assert ingredient_matches("Cauliflower Rice", "cauliflower") is True
        assert ingredient_matches("chicken breast", "chicken") is True
        assert ingredient_matches("bell pepper", "pepper") is True

    def test_different_ingredients_do_not_match(self):
        assert ingredient_matches("chicken", "beef") is False
        assert ingredient_matches("onion", "garlic") is False
        assert ingredient_matches("milk", "cheese") is False
        assert ingredient_matches("tomato", "potato") is False

    def test_substring_inside_another_word_does_not_match(self):
        """'rice' must not match inside 'licorice'."""
        assert ingredient_matches("rice", "licorice") is False
        assert ingredient_matches("licorice", "rice") is False
        assert ingredient_matches("egg", "eggplant") is False
        assert ingredient_matches("oil", "boiled potatoes") is False

    def test_digits_count_as_word_characters(self):
        assert ingredient_matches("7", "7up") is False

    def test_punctuation_is_a_boundary(self):
        assert ingredient_matches("tomato", "tomato, diced") is True
        assert ingredient_matches("pepper", "salt-and-pepper") is True

    def test_whitespace_handling(self):
        assert ingredient_matches("  chicken  ", "chicken breast") is True
        assert ingredient_matches("garlic", "  garlic  ") is True

    def test_empty_inputs_never_match(self):
        assert ingredient_matches("", "rice") is False
        assert ingredient_matches("rice", "") is False
        assert ingredient_matches("   ", "   ") is False

    def test_regex_characters_are_literal(self):
        assert ingredient_matches("c++", "c++ sauce") is True
        assert ingredient_matches("a.b", "axb") is False

    def test_deterministic(self):
        results = {ingredient_matches("pepper", "bell pepper") for _ in range(5)}
        assert results == {True}


class TestIsExactMatch:
    """Test the strict matcher used for exact-match counting."""

    def test_identical_after_normalization(self):
        assert is_exact_match("Feta Cheese ", "feta cheese") is True
        assert is_exact_match("garlic", "GARLIC") is True

    def test_single_word_never_matches_multi_word(self):
        assert is_exact_match("cheese", "feta cheese") is False
        assert is_exact_match("feta cheese", "cheese") is False
        assert is_exact_match("chicken", "chicken breast") is False

    def test_multi_word_subset_of_longer_phrase(self):
        assert is_exact_match("feta cheese", "crumbled feta cheese") is True
        assert is_exact_match("crumbled feta cheese", "feta cheese") is True

    def test_multi_word_not_subset(self):
        assert is_exact_match("goat cheese", "crumbled feta cheese") is False

    def test_same_word_count_but_different(self):
        assert is_exact_match("red onion", "white onion") is False

    def test_spacing_differences_only(self):
        assert is_exact_match("feta  cheese", "feta cheese") is True
        assert is_exact_match("extra virgin\tolive oil", "extra virgin olive oil") is True

    def test_single_words_that_differ(self):
        assert is_exact_match("rice", "beans") is False

    def test_empty_inputs(self):
        assert is_exact_match("", "") is False


class TestPartition:
    """Test matched/missing partition of recipe ingredients."""

    def test_partition_preserves_recipe_order(self):
        recipe = ["chicken breast", "soy sauce", "garlic", "rice"]
        user = ["rice", "chicken"]
        assert find_matched_ingredients(user, recipe) == ["chicken breast", "rice"]
        assert find_missing_ingredients(user, recipe) == ["soy sauce", "garlic"]

    def test_partition_covers_recipe(self):
        recipe = ["Tomato", "tomato", "basil", "olive oil"]
        user = ["tomato", "oil"]
        matched = find_matched_ingredients(user, recipe)
        missing = find_missing_ingredients(user, recipe)
        assert set(matched) | set(missing) == set(recipe)
        assert not set(matched) & set(missing)

    def test_no_user_ingredients(self):
        assert find_matched_ingredients([], ["salt"]) == []
        assert find_missing_ingredients([], ["salt"]) == ["salt"]
