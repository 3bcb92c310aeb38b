"""Unit tests for the filter-phrase builder."""
from apps.plan_service.services.filter_builder import build_filter_spec
from apps.plan_service.services.vocabulary import CONSUMED_FRAGMENTS


class TestBuildFilterSpec:
    """Test cases for build_filter_spec."""

    def test_residual_title_filter(self):
        """Test leftover noun becomes the title filter."""
        spec = build_filter_spec("increase hoodie prices by 10%", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains == "hoodie"

    def test_only_structural_words_leaves_filter_empty(self):
        """Test that stop-words and keywords alone give an empty filter."""
        spec = build_filter_spec("archive all products", CONSUMED_FRAGMENTS["status"])
        assert spec.title_contains is None
        assert spec.is_empty()

    def test_short_residue_is_dropped(self):
        """Test residue shorter than three characters."""
        spec = build_filter_spec("raise ab prices by 5%", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains is None

    def test_three_character_residue_is_kept(self):
        """Test residue of exactly three characters."""
        spec = build_filter_spec("raise mug prices by 5%", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains == "mug"

    def test_quoted_literals_removed(self):
        """Test quoted tag values do not leak into the filter."""
        spec = build_filter_spec('add "Summer Sale" tag to winter jackets', CONSUMED_FRAGMENTS["tags"])
        assert spec.title_contains == "winter jackets"

    def test_currency_amount_removed(self):
        """Test amounts are stripped together with their currency symbol."""
        spec = build_filter_spec("set price to $19.99 for summer hoodies", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains == "summer hoodies"

    def test_apostrophes_are_kept(self):
        """Test possessives are not stripped as quoted literals."""
        spec = build_filter_spec(
            "increase price by 10% for men's and women's hoodies", CONSUMED_FRAGMENTS["price"]
        )
        assert spec.title_contains == "men's women's hoodies"

    def test_trailing_punctuation_removed(self):
        """Test punctuation at the edges of the residue."""
        spec = build_filter_spec("increase prices by 10% for hoodies.", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains == "hoodies"

    def test_case_insensitive_keywords_case_preserved_residue(self):
        """Test keywords match in any case while the residue keeps its case."""
        spec = build_filter_spec("Increase HOODIE Prices by 10%", CONSUMED_FRAGMENTS["price"])
        assert spec.title_contains == "HOODIE"

    def test_fragments_match_whole_words_only(self):
        """Test that 'set' does not eat into 'reset'."""
        spec = build_filter_spec("reset hoodies", ["set"])
        assert spec.title_contains == "reset hoodies"

    def test_multi_word_fragment(self):
        """Test a consumed location label spanning several words."""
        spec = build_filter_spec(
            "set stock of hoodies to 10 at Main Warehouse",
            [*CONSUMED_FRAGMENTS["inventory"], "Main Warehouse"],
        )
        assert spec.title_contains == "hoodies"

    def test_no_consumed_fragments(self):
        """Test that only stop-words and numbers are removed by default."""
        spec = build_filter_spec("all the blue mugs 5")
        assert spec.title_contains == "blue mugs"

    def test_other_filter_fields_stay_empty(self):
        """Test that only the title filter is ever filled."""
        spec = build_filter_spec("increase hoodie prices by 10%", CONSUMED_FRAGMENTS["price"])
        assert spec.must.vendors == []
        assert spec.must.tags == []
        assert spec.must_not.tags == []
        assert spec.numeric.price_gte is None
        assert not spec.is_empty()
