"""Product title classifier using whole-word keyword rules.

Maps a free-text product title to the collections it belongs to.

Strategy:
1. Bead keyword (BEADS)
2. Shape + finish combinations (ROUND/RONDELLE × POLISHED/FACETED/FROSTED)
3. Shape table and freeform shape words
4. Gemstone aliases (first matching alias per stone)

Every word is matched on word boundaries, so "BEADS" does not match
"BEADSTORM".

Example:
    classifier = TitleClassifier(taxonomy)
    classifier.classify("Round Faceted Rose Quartz Beads 8mm")
    # [ROUND_FACETED id, BEADS id, ROSE QUARTZ id]
"""
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

import structlog

from collection_sync.taxonomy.loader import CollectionTaxonomy

logger = structlog.get_logger(__name__)

# Finish words for the shape + finish rules: rule suffix → accepted words
FINISHES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("POLISHED", ("POLISH", "POLISHED")),
    ("FACETED", ("FACETED", "FACET")),
    ("FROSTED", ("FROSTED", "FROST")),
)

# Shapes that combine with a finish word
FINISHED_SHAPES: Tuple[str, ...] = ("ROUND", "RONDELLE")


@lru_cache(maxsize=1024)
def _word_pattern(word: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(word.upper())}\b", re.IGNORECASE)


def has_word(title: str, word: str) -> bool:
    """Return True if ``word`` appears in ``title`` as a whole word."""
    return _word_pattern(word).search(title) is not None


@dataclass(frozen=True)
class KeywordRule:
    """A classification rule.

    The rule matches when every group has at least one whole-word hit.
    """
    collection_id: int
    word_groups: Tuple[Tuple[str, ...], ...]
    name: str = ""

    def matches(self, title: str) -> bool:
        return all(
            any(has_word(title, word) for word in group)
            for group in self.word_groups
        )


def build_rules(taxonomy: CollectionTaxonomy) -> Tuple[KeywordRule, ...]:
    """Build the ordered rule table for a taxonomy.

    Rules whose collection key is missing from the taxonomy are dropped.
    """
    rules: List[KeywordRule] = []
    ids = taxonomy.collection_ids

    if "BEADS" in ids:
        rules.append(KeywordRule(ids["BEADS"], (("BEADS",),), name="BEADS"))

    for shape in FINISHED_SHAPES:
        for suffix, words in FINISHES:
            key = f"{shape}_{suffix}"
            if key in ids:
                rules.append(KeywordRule(ids[key], ((shape,), words), name=key))

    for shape, collection_id in taxonomy.shape_collections.items():
        rules.append(KeywordRule(collection_id, ((shape,),), name=shape))

    if "FREEFORM" in ids and taxonomy.freeform_shapes:
        rules.append(
            KeywordRule(ids["FREEFORM"], (tuple(taxonomy.freeform_shapes),), name="FREEFORM")
        )

    # Any alias counts once per stone, so the alias list is a single group
    for stone, aliases in taxonomy.stone_aliases.items():
        collection_id = taxonomy.gemstone_collections.get(stone)
        if collection_id is None or not aliases:
            continue
        rules.append(KeywordRule(collection_id, (tuple(aliases),), name=stone))

    return tuple(rules)


class TitleClassifier:
    """Rule-based product title classifier.

    Attributes:
        taxonomy: Taxonomy the rules were built from
        rules: Ordered rule table
    """

    def __init__(self, taxonomy: CollectionTaxonomy):
        self.taxonomy = taxonomy
        self.rules = build_rules(taxonomy)

    def classify(self, title: Optional[str]) -> List[int]:
        """Return the collection IDs a title matches.

        Args:
            title: Product title, may be empty or None

        Returns:
            Deduplicated collection IDs in rule order
        """
        if not title:
            logger.debug("No title provided")
            return []

        normalized = title.upper()
        matched = [rule for rule in self.rules if rule.matches(normalized)]
        collection_ids = list(dict.fromkeys(rule.collection_id for rule in matched))

        logger.debug(
            "Title classified",
            title=title,
            rules=[rule.name for rule in matched],
            collection_ids=collection_ids,
        )
        return collection_ids
