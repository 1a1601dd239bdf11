from .dedup import deduplicate, text_similarity
from .extractor import ExtractionRun, FactExtractor
from .semantic import (
    EntityClassifier,
    EntitySpans,
    SpacyEntityClassifier,
    build_entity_classifier,
    run_semantic_pass,
)

__all__ = [
    "FactExtractor",
    "ExtractionRun",
    "deduplicate",
    "text_similarity",
    "EntityClassifier",
    "EntitySpans",
    "SpacyEntityClassifier",
    "build_entity_classifier",
    "run_semantic_pass",
]
