from __future__ import annotations

import re

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.normalize.text import Sentence
from resume_scorer.schemas.facts import CandidateFact

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_NAME_RE = re.compile(r"(?:姓名|我是|叫)[:\s]*([^\s]{2,4})")
_SCHOOL_RE = re.compile(r"([^\s]*?(?:大学|学院|学校)[^\s]*)")
_TOKEN_SPLIT_RE = re.compile(r"[\s，,。；;：:]")


def context_score(sentence: str, context_words: tuple[str, ...]) -> float:
    if not context_words:
        return 0.0
    lowered = sentence.lower()
    present = sum(1 for word in context_words if word.lower() in lowered)
    return min(present / len(context_words), 1.0)


def extract_from_context(subcategory: str, sentence: str, rulebook: RuleBook) -> str | None:
    if subcategory == "email":
        match = _EMAIL_RE.search(sentence)
        return match.group(0) if match else None
    if subcategory == "phone":
        match = rulebook.marker("mobile").search(sentence)
        return match.group(0) if match else None
    if subcategory == "name":
        match = _NAME_RE.search(sentence)
        return match.group(1) if match else None
    if subcategory == "school":
        match = _SCHOOL_RE.search(sentence)
        return match.group(1) if match else None

    low = int(rulebook.value("extraction.context_confidence.generic_min_chars", 3))
    high = int(rulebook.value("extraction.context_confidence.generic_max_chars", 19))
    for token in _TOKEN_SPLIT_RE.split(sentence):
        if low <= len(token) <= high:
            return token
    return None


def match_context(sentences: list[Sentence], rulebook: RuleBook) -> list[CandidateFact]:
    """Context-window pass: sentences dense in a subcategory's cue words."""
    threshold = float(rulebook.value("extraction.context_confidence.threshold", 0.3))
    factor = float(rulebook.value("extraction.context_confidence.factor", 0.8))
    facts: list[CandidateFact] = []

    for sentence in sentences:
        for rule in rulebook.subcategories:
            score = context_score(sentence.text, rule.context_words)
            if score <= threshold:
                continue
            extracted = extract_from_context(rule.subcategory, sentence.text, rulebook)
            if not extracted:
                continue
            facts.append(
                CandidateFact(
                    category=rule.category,
                    subcategory=rule.subcategory,
                    raw_text=extracted,
                    confidence=round(score * factor, 4),
                    method="context_analysis",
                    source_position=sentence.start,
                    source_span=sentence.text,
                )
            )
    return facts
