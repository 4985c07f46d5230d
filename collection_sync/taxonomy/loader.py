"""
Collection Taxonomy Loader
==========================

Builds the immutable taxonomy the classifier runs against: the static
keyword/shape/alias tables plus a gemstone → collection map derived from
a JSON snapshot of the store's collections.

The snapshot is read once per process through ``TaxonomyProvider``.
"""

import json
import re
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from collection_sync.taxonomy.constants import (
    COLLECTION_IDS,
    FREEFORM_SHAPES,
    SHAPE_COLLECTIONS,
    STONE_ALIASES,
)
from collection_sync.utils.errors import TaxonomyLoadError
from collection_sync.utils.logger import get_logger

logger = get_logger(__name__)

SNAPSHOT_KEYS = ("collections", "custom_collections", "smart_collections")


@dataclass(frozen=True)
class CollectionTaxonomy:
    """
    Read-only classification data.

    Attributes:
        collection_ids: Rule key (BEADS, ROUND_FACETED, ...) → collection ID
        shape_collections: Shape word → collection ID
        freeform_shapes: Words that map to the FREEFORM collection
        stone_aliases: Canonical gemstone → aliases, scanned in order
        gemstone_collections: Canonical gemstone → collection ID
    """

    collection_ids: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(COLLECTION_IDS))
    )
    shape_collections: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(SHAPE_COLLECTIONS))
    )
    freeform_shapes: tuple[str, ...] = FREEFORM_SHAPES
    stone_aliases: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(STONE_ALIASES))
    )
    gemstone_collections: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )


def _slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def build_gemstone_collection_map(
    collections: Iterable[Mapping[str, Any]],
    stone_names: Iterable[str] = STONE_ALIASES.keys(),
) -> dict[str, int]:
    """
    Match canonical gemstone names against collection titles and handles.

    An exact title (or handle) match wins; otherwise the first collection
    whose title contains the stone name as a whole word is used. Stones
    with no matching collection are left out.

    Args:
        collections: Collection objects with at least ``id`` and ``title``
        stone_names: Canonical gemstone names

    Returns:
        Canonical gemstone name → collection ID
    """
    candidates = [
        (int(c["id"]), str(c.get("title") or ""), str(c.get("handle") or ""))
        for c in collections
        if c.get("id") is not None
    ]

    gemstone_map: dict[str, int] = {}
    for stone in stone_names:
        stone_upper = stone.upper()
        stone_slug = _slugify(stone)
        word = re.compile(rf"\b{re.escape(stone_upper)}\b")

        exact = next(
            (
                cid
                for cid, title, handle in candidates
                if title.strip().upper() == stone_upper or handle.lower() == stone_slug
            ),
            None,
        )
        if exact is not None:
            gemstone_map[stone] = exact
            continue

        partial = next(
            (cid for cid, title, _ in candidates if word.search(title.upper())),
            None,
        )
        if partial is not None:
            gemstone_map[stone] = partial

    return gemstone_map


def _read_snapshot(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise TaxonomyLoadError(
            "Collections snapshot not found", details={"path": str(path)}
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyLoadError(
            "Failed to load collections data",
            details={"path": str(path), "error": str(e)},
        ) from e

    if isinstance(data, list):
        collections = data
    elif isinstance(data, dict) and any(k in data for k in SNAPSHOT_KEYS):
        collections = [c for k in SNAPSHOT_KEYS for c in data.get(k, [])]
    else:
        raise TaxonomyLoadError(
            "Collections snapshot has an unexpected shape",
            details={"path": str(path), "type": type(data).__name__},
        )

    if not all(isinstance(c, dict) for c in collections):
        raise TaxonomyLoadError(
            "Collections snapshot entries must be objects", details={"path": str(path)}
        )
    return collections


def load_taxonomy(path: Path) -> CollectionTaxonomy:
    """
    Load the collections snapshot and build the taxonomy.

    Raises:
        TaxonomyLoadError: If the file is missing, unreadable or malformed
    """
    collections = _read_snapshot(path)
    gemstones = build_gemstone_collection_map(collections)

    logger.info(
        "Collections loaded",
        path=str(path),
        collections=len(collections),
        gemstones_mapped=len(gemstones),
        gemstones_unmapped=len(STONE_ALIASES) - len(gemstones),
    )
    return CollectionTaxonomy(gemstone_collections=MappingProxyType(gemstones))


class TaxonomyProvider:
    """
    Lazily loads the taxonomy on first use and caches it.

    A failed load is not cached, so the next call reads the file again.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._taxonomy: CollectionTaxonomy | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._taxonomy is not None

    def get(self) -> CollectionTaxonomy:
        if self._taxonomy is not None:
            return self._taxonomy
        with self._lock:
            if self._taxonomy is None:
                self._taxonomy = load_taxonomy(self.path)
        return self._taxonomy
