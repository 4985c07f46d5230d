"""Unit tests for TitleClassifier.

Tests cover:
- Whole-word keyword matching
- Shape + finish combinations
- Shape table and freeform shapes
- Gemstone alias resolution
- Edge cases
"""
from types import MappingProxyType

import pytest

from collection_sync.services.classification import (
    KeywordRule,
    TitleClassifier,
    build_rules,
    has_word,
)
from collection_sync.taxonomy import CollectionTaxonomy
from tests.conftest import (
    AMETHYST,
    BEADS,
    FREEFORM,
    HEART,
    RONDELLE_FACETED,
    RONDELLE_FROSTED,
    RONDELLE_POLISHED,
    ROSE_QUARTZ,
    ROUND_FACETED,
    ROUND_FROSTED,
    ROUND_POLISHED,
    TEARDROP,
    TIGER_EYE,
)


class TestHasWord:
    """Test whole-word matching."""

    def test_matches_standalone_word(self):
        """A standalone word matches."""
        assert has_word("ROSE QUARTZ BEADS 8MM", "BEADS")

    def test_rejects_substring(self):
        """A word inside a longer word does not match."""
        assert not has_word("BEADSTORM CLASP", "BEADS")
        assert not has_word("SEEDBEADS", "BEADS")

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert has_word("round beads", "ROUND")

    def test_punctuation_is_a_boundary(self):
        """Punctuation separates words."""
        assert has_word("BEADS, 8MM", "BEADS")
        assert has_word("(ROUND)", "ROUND")

    def test_multi_word_alias(self):
        """Multi-word aliases match as a phrase."""
        assert has_word("NATURAL ROSE QUARTZ", "ROSE QUARTZ")
        assert not has_word("ROSE AND QUARTZ", "ROSE QUARTZ")

    def test_regex_characters_are_literal(self):
        """Regex metacharacters in a word are matched literally."""
        assert has_word("TIGER'S EYE BEADS", "TIGER'S EYE")
        assert not has_word("ROUNDXBEADS", "ROUND.BEADS")


class TestKeywordRules:
    """Test classifier rules."""

    def test_beads_any_case(self, taxonomy):
        """BEADS matches regardless of case."""
        classifier = TitleClassifier(taxonomy)

        for title in ("Beads", "BEADS", "amethyst beads", "Lot of bEaDs"):
            assert BEADS in classifier.classify(title), f"Failed for: {title}"

    def test_beadstorm_is_not_beads(self, taxonomy):
        """BEADS inside another word is ignored."""
        classifier = TitleClassifier(taxonomy)

        assert BEADS not in classifier.classify("Beadstorm Clasp Set")

    def test_round_faceted(self, taxonomy):
        """ROUND with FACETED maps to the round faceted collection."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Round Faceted Amethyst 6mm")

        assert ROUND_FACETED in result
        assert ROUND_POLISHED not in result
        assert ROUND_FROSTED not in result

    def test_finish_alone_does_nothing(self, taxonomy):
        """A finish word without a shape adds nothing."""
        classifier = TitleClassifier(taxonomy)

        assert classifier.classify("Faceted Polished Frosted") == []

    def test_round_finishes_are_not_exclusive(self, taxonomy):
        """Several finishes on one title all match."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Round Polished and Frosted Beads")

        assert ROUND_POLISHED in result
        assert ROUND_FROSTED in result
        assert ROUND_FACETED not in result

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Round Polish Jasper", ROUND_POLISHED),
            ("Round Facet Jasper", ROUND_FACETED),
            ("Round Frost Jasper", ROUND_FROSTED),
            ("Rondelle Polished Jasper", RONDELLE_POLISHED),
            ("Rondelle Faceted Jasper", RONDELLE_FACETED),
            ("Rondelle Frost Jasper", RONDELLE_FROSTED),
        ],
    )
    def test_finish_word_variants(self, taxonomy, title, expected):
        """Short and long finish spellings are equivalent."""
        classifier = TitleClassifier(taxonomy)

        assert expected in classifier.classify(title)

    def test_rondelle_does_not_imply_round(self, taxonomy):
        """RONDELLE does not trigger the ROUND rules."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Rondelle Faceted Beads")

        assert RONDELLE_FACETED in result
        assert ROUND_FACETED not in result

    def test_shape_table(self, taxonomy):
        """Shape words map to their collections."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Heart and Teardrop Pendant Beads")

        assert HEART in result
        assert TEARDROP in result

    def test_shape_requires_whole_word(self, taxonomy):
        """Shape words must match whole."""
        classifier = TitleClassifier(taxonomy)

        assert HEART not in classifier.classify("Heartstring Charm")

    def test_freeform_added_once(self, taxonomy):
        """Several freeform words add FREEFORM once."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Freeform Nugget Chips")

        assert result.count(FREEFORM) == 1


class TestGemstoneAliases:
    """Test gemstone alias resolution."""

    def test_canonical_name(self, taxonomy):
        """The canonical gemstone name matches."""
        classifier = TitleClassifier(taxonomy)

        assert ROSE_QUARTZ in classifier.classify("Rose Quartz Heart")

    def test_alias_without_canonical_name(self, taxonomy):
        """An alias alone resolves to the gemstone."""
        classifier = TitleClassifier(taxonomy)

        assert TIGER_EYE in classifier.classify("Tiger's Eye Round Polished Beads")
        assert ROSE_QUARTZ in classifier.classify("Pink Quartz Chips")

    def test_two_aliases_of_one_stone_count_once(self, taxonomy):
        """Two aliases of one gemstone add it once."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Tiger Eye / Tigers Eye Mix")

        assert result == [TIGER_EYE]

    def test_unmapped_stone_is_ignored(self, taxonomy):
        """A gemstone with no collection adds nothing."""
        classifier = TitleClassifier(taxonomy)

        # Lapis has aliases but no collection in the snapshot
        assert classifier.classify("Lapis Lazuli Cabochon") == []

    def test_several_stones(self, taxonomy):
        """Several gemstones in one title all match."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Amethyst and Rose Quartz Mix")

        assert set(result) == {AMETHYST, ROSE_QUARTZ}


class TestClassifierScenarios:
    """End-to-end title scenarios and edge cases."""

    def test_round_faceted_rose_quartz_beads(self, taxonomy):
        """Typical bead title matches type, finish and stone."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Round Faceted Rose Quartz Beads 8mm")

        assert set(result) == {ROUND_FACETED, BEADS, ROSE_QUARTZ}
        assert len(result) == 3

    def test_result_follows_rule_order(self, taxonomy):
        """Results follow rule order, not title order."""
        classifier = TitleClassifier(taxonomy)

        result = classifier.classify("Round Faceted Rose Quartz Beads 8mm")

        assert result == [BEADS, ROUND_FACETED, ROSE_QUARTZ]

    @pytest.mark.parametrize("title", [None, ""])
    def test_empty_title(self, taxonomy, title):
        """Empty or missing titles classify to nothing."""
        classifier = TitleClassifier(taxonomy)

        assert classifier.classify(title) == []

    def test_unrelated_title(self, taxonomy):
        """Titles with no known words classify to nothing."""
        classifier = TitleClassifier(taxonomy)

        assert classifier.classify("Gift Card $50") == []

    def test_idempotent(self, taxonomy):
        """Classifying twice gives the same result."""
        classifier = TitleClassifier(taxonomy)
        title = "Rondelle Frosted Amethyst Beads"

        assert classifier.classify(title) == classifier.classify(title)

    def test_duplicate_collection_ids_are_merged(self):
        """Rules sharing a collection ID yield it once."""
        taxonomy = CollectionTaxonomy(
            collection_ids=MappingProxyType({"BEADS": 1}),
            shape_collections=MappingProxyType({"BEADS": 1}),
            freeform_shapes=(),
            stone_aliases=MappingProxyType({}),
        )
        classifier = TitleClassifier(taxonomy)

        assert classifier.classify("Beads") == [1]


class TestBuildRules:
    """Test rule table construction."""

    def test_missing_keys_are_dropped(self):
        """Rules for keys absent from the taxonomy are dropped."""
        taxonomy = CollectionTaxonomy(
            collection_ids=MappingProxyType({"ROUND_FACETED": 7}),
            shape_collections=MappingProxyType({}),
            freeform_shapes=("NUGGET",),
            stone_aliases=MappingProxyType({"JADE": ("JADE",)}),
        )

        rules = build_rules(taxonomy)

        assert [r.name for r in rules] == ["ROUND_FACETED"]

    def test_rule_requires_every_group(self):
        """A rule matches only when every word group hits."""
        rule = KeywordRule(1, (("ROUND",), ("FACETED", "FACET")))

        assert rule.matches("ROUND FACET")
        assert not rule.matches("ROUND")
        assert not rule.matches("FACETED")

    def test_default_taxonomy_builds(self):
        """The bundled taxonomy builds a full rule table."""
        rules = build_rules(CollectionTaxonomy())

        names = [r.name for r in rules]
        assert names[0] == "BEADS"
        assert "FREEFORM" in names
        assert "HEART" in names
