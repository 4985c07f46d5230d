"""Title classification for collection assignment."""

from collection_sync.services.classification.classifier import (
    KeywordRule,
    TitleClassifier,
    build_rules,
    has_word,
)

__all__ = ["KeywordRule", "TitleClassifier", "build_rules", "has_word"]
