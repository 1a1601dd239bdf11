from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.normalize.text import split_sentences
from resume_scorer.schemas.facts import AggregatedFact, CandidateFact

from .context import match_context
from .dedup import deduplicate
from .keywords import scan_keywords
from .patterns import match_patterns
from .semantic import EntityClassifier, run_semantic_pass

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExtractionRun:
    facts: list[AggregatedFact] = field(default_factory=list)
    candidate_count: int = 0
    duplicates_removed: int = 0
    semantic_used: bool = False


class FactExtractor:
    """Four-pass fact extraction over normalized résumé text.

    Passes run in a fixed order (exact patterns, context windows, the optional
    entity classifier, keyword scan) and their candidates are deduplicated
    together, so the result depends only on the text and the rule table.
    """

    def __init__(
        self,
        rulebook: RuleBook,
        classifier: EntityClassifier | None = None,
        *,
        semantic_timeout_seconds: float = 3.0,
    ) -> None:
        self.rulebook = rulebook
        self.classifier = classifier
        self.semantic_timeout_seconds = semantic_timeout_seconds

    def extract(
        self,
        text: str,
        *,
        use_semantic: bool = True,
        timeout_seconds: float | None = None,
    ) -> ExtractionRun:
        if not text or not text.strip():
            return ExtractionRun()

        limits = self.rulebook.value("extraction.limits", {})
        sentences = split_sentences(
            text,
            min_chars=int(limits.get("min_sentence_chars", 6)),
            max_sentences=int(limits.get("max_sentences", 100)),
        )

        candidates: list[CandidateFact] = []
        candidates.extend(match_patterns(text, self.rulebook))
        candidates.extend(match_context(sentences, self.rulebook))

        semantic_used = False
        if use_semantic and self.classifier is not None:
            semantic_facts, semantic_used = run_semantic_pass(
                self.classifier,
                sentences,
                self.rulebook,
                timeout_seconds=timeout_seconds or self.semantic_timeout_seconds,
            )
            candidates.extend(semantic_facts)

        candidates.extend(scan_keywords(text, sentences, self.rulebook))

        dedup_cfg = self.rulebook.value("extraction.dedup", {})
        facts, removed = deduplicate(
            candidates,
            threshold=float(dedup_cfg.get("similarity_threshold", 0.8)),
            same_subcategory_threshold=float(dedup_cfg.get("same_subcategory_threshold", 0.6)),
        )
        logger.debug(
            "fact_extraction_complete sentences=%s candidates=%s kept=%s removed=%s semantic=%s",
            len(sentences),
            len(candidates),
            len(facts),
            removed,
            semantic_used,
        )
        return ExtractionRun(
            facts=facts,
            candidate_count=len(candidates),
            duplicates_removed=removed,
            semantic_used=semantic_used,
        )
