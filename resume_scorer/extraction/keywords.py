from __future__ import annotations

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.normalize.text import Sentence
from resume_scorer.schemas.facts import CandidateFact


def keyword_confidence(sentence: str, keyword: str, rulebook: RuleBook) -> float:
    cfg = rulebook.value("extraction.keyword_confidence", {})
    lowered = sentence.lower()
    needle = keyword.lower()
    confidence = float(cfg["base"])
    if lowered == needle:
        confidence += float(cfg["exact_bonus"])
    elif needle in lowered:
        confidence += float(cfg["contains_bonus"])
    if int(cfg["length_min"]) <= len(sentence) <= int(cfg["length_max"]):
        confidence += float(cfg["length_bonus"])
    if rulebook.marker("achievement").search(sentence):
        confidence += float(cfg["marker_bonus"])
    if rulebook.marker("institution").search(sentence):
        confidence += float(cfg["institution_bonus"])
    return round(min(confidence, 1.0), 4)


def scan_keywords(text: str, sentences: list[Sentence], rulebook: RuleBook) -> list[CandidateFact]:
    """Keyword pass: each sentence that mentions a configured keyword becomes a fact."""
    if not text:
        return []

    low = int(rulebook.value("extraction.keyword_confidence.sentence_min_chars", 5))
    high = int(rulebook.value("extraction.keyword_confidence.sentence_max_chars", 100))
    lowered_text = text.lower()
    lowered_sentences = [(sentence, sentence.text.lower()) for sentence in sentences]
    facts: list[CandidateFact] = []

    for rule in rulebook.subcategories:
        for keyword in rule.keywords:
            needle = keyword.lower()
            if needle not in lowered_text:
                continue
            for sentence, lowered in lowered_sentences:
                if needle not in lowered or not low <= len(sentence.text) <= high:
                    continue
                facts.append(
                    CandidateFact(
                        category=rule.category,
                        subcategory=rule.subcategory,
                        raw_text=sentence.text,
                        confidence=keyword_confidence(sentence.text, keyword, rulebook),
                        method="keyword_scan",
                        source_position=sentence.start,
                        source_span=keyword,
                    )
                )
    return facts
