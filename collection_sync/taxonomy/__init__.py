"""Collection taxonomy: static rule tables and the snapshot loader."""

from collection_sync.taxonomy.loader import (
    CollectionTaxonomy,
    TaxonomyProvider,
    build_gemstone_collection_map,
    load_taxonomy,
)

__all__ = [
    "CollectionTaxonomy",
    "TaxonomyProvider",
    "build_gemstone_collection_map",
    "load_taxonomy",
]
