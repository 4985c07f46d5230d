"""Static collection taxonomy for the bead catalog.

Collection IDs are the store's Shopify custom collection IDs. Gemstone
collections are not listed here; they are looked up by name in the
collections snapshot (see ``loader.build_gemstone_collection_map``).
"""
from typing import Dict, Tuple

# Keyword collections referenced by the fixed classifier rules
COLLECTION_IDS: Dict[str, int] = {
    "BEADS": 298745086116,
    "ROUND_POLISHED": 298745118884,
    "ROUND_FACETED": 298745151652,
    "ROUND_FROSTED": 298745184420,
    "RONDELLE_POLISHED": 298745217188,
    "RONDELLE_FACETED": 298745249956,
    "RONDELLE_FROSTED": 298745282724,
    "FREEFORM": 298745315492,
}

# Shape word → collection ID. Checked as whole words against the title.
SHAPE_COLLECTIONS: Dict[str, int] = {
    "HEART": 298745348260,
    "TEARDROP": 298745381028,
    "OVAL": 298745413796,
    "CUBE": 298745446564,
    "COIN": 298745479332,
    "TUBE": 298745512100,
    "BICONE": 298745544868,
    "BRIOLETTE": 298745577636,
    "SQUARE": 298745610404,
    "RECTANGLE": 298745643172,
    "STAR": 298745675940,
    "DONUT": 298745708708,
    "SPIKE": 298745741476,
    "SKULL": 298745774244,
}

# Any of these words puts the product in the single FREEFORM collection
FREEFORM_SHAPES: Tuple[str, ...] = (
    "FREEFORM",
    "FREE FORM",
    "FREE-FORM",
    "NUGGET",
    "NUGGETS",
    "CHIP",
    "CHIPS",
    "IRREGULAR",
    "BAROQUE",
    "SLAB",
    "TUMBLED",
)

# Canonical gemstone name → surface forms seen in product titles.
# The canonical name is listed first; order matters only for logging.
STONE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "AGATE": ("AGATE", "AGATES"),
    "AMAZONITE": ("AMAZONITE", "AMAZONSTONE"),
    "AMETHYST": ("AMETHYST", "AMETHYSTS"),
    "AQUAMARINE": ("AQUAMARINE",),
    "AVENTURINE": ("AVENTURINE", "GREEN AVENTURINE", "INDIAN JADE"),
    "BLACK ONYX": ("BLACK ONYX", "ONYX"),
    "CARNELIAN": ("CARNELIAN", "CORNELIAN"),
    "CITRINE": ("CITRINE",),
    "CLEAR QUARTZ": ("CLEAR QUARTZ", "ROCK CRYSTAL", "CRYSTAL QUARTZ"),
    "FLUORITE": ("FLUORITE", "RAINBOW FLUORITE"),
    "GARNET": ("GARNET", "GARNETS"),
    "HEMATITE": ("HEMATITE", "HAEMATITE"),
    "HOWLITE": ("HOWLITE", "WHITE HOWLITE"),
    "JADE": ("JADE", "JADEITE", "NEPHRITE"),
    "JASPER": ("JASPER",),
    "LABRADORITE": ("LABRADORITE", "SPECTROLITE"),
    "LAPIS LAZULI": ("LAPIS LAZULI", "LAPIS"),
    "MALACHITE": ("MALACHITE",),
    "MOONSTONE": ("MOONSTONE", "RAINBOW MOONSTONE"),
    "OBSIDIAN": ("OBSIDIAN", "SNOWFLAKE OBSIDIAN"),
    "PERIDOT": ("PERIDOT", "OLIVINE"),
    "PYRITE": ("PYRITE", "FOOL'S GOLD"),
    "RHODONITE": ("RHODONITE",),
    "ROSE QUARTZ": ("ROSE QUARTZ", "PINK QUARTZ"),
    "SMOKY QUARTZ": ("SMOKY QUARTZ", "SMOKEY QUARTZ"),
    "SODALITE": ("SODALITE",),
    "SUNSTONE": ("SUNSTONE",),
    "TIGER EYE": ("TIGER EYE", "TIGERS EYE", "TIGER'S EYE", "TIGEREYE"),
    "TOURMALINE": ("TOURMALINE", "SCHORL"),
    "TURQUOISE": ("TURQUOISE",),
    "UNAKITE": ("UNAKITE",),
}
