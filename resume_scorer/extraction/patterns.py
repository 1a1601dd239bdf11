from __future__ import annotations

import re

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.facts import CandidateFact

_SEGMENT_RE = re.compile(r"[^。\n]+")


def last_group(match: re.Match[str]) -> str:
    """Text of the last capture group that took part in the match, else the whole match."""
    for index in range(match.re.groups, 0, -1):
        value = match.group(index)
        if value is not None:
            return value
    return match.group(0)


def pattern_confidence(text: str, index: int, rulebook: RuleBook) -> float:
    cfg = rulebook.value("extraction.pattern_confidence", {})
    confidence = float(cfg["base"])
    confidence += max(0, int(cfg["priority_ranks"]) - index) * float(cfg["priority_step"])
    if int(cfg["length_min"]) <= len(text) <= int(cfg["length_max"]):
        confidence += float(cfg["length_bonus"])
    if "@" in text:
        confidence += float(cfg["email_bonus"])
    if rulebook.marker("mobile").search(text):
        confidence += float(cfg["mobile_bonus"])
    if rulebook.marker("year").search(text):
        confidence += float(cfg["year_bonus"])
    if rulebook.marker("rank").search(text):
        confidence += float(cfg["rank_bonus"])
    return round(min(confidence, 1.0), 4)


def pattern_segments(text: str, max_chars: int, max_segments: int) -> list[tuple[int, str]]:
    """Split text into ``(offset, chunk)`` windows no longer than ``max_chars``.

    Chunks break at line ends and full stops, which no configured pattern
    crosses; longer lines are cut into fixed-size windows.
    """
    segments: list[tuple[int, str]] = []
    for match in _SEGMENT_RE.finditer(text):
        line = match.group(0)
        for start in range(0, len(line), max_chars):
            chunk = line[start : start + max_chars]
            if chunk.strip():
                segments.append((match.start() + start, chunk))
            if len(segments) >= max_segments:
                return segments
    return segments


def match_patterns(text: str, rulebook: RuleBook) -> list[CandidateFact]:
    """Exact-pattern pass: every configured regex over bounded segments of the document."""
    if not text:
        return []

    limits = rulebook.value("extraction.limits", {})
    min_chars = int(limits.get("min_match_chars", 2))
    per_pattern = int(limits.get("max_matches_per_pattern", 50))
    segments = pattern_segments(
        text,
        max_chars=int(limits.get("max_segment_chars", 300)),
        max_segments=int(limits.get("max_segments", 200)),
    )
    facts: list[CandidateFact] = []

    for rule in rulebook.subcategories:
        for index, pattern in enumerate(rule.patterns):
            emitted = 0
            for offset, segment in segments:
                for match in pattern.regex.finditer(segment):
                    value = last_group(match).strip()
                    if len(value) < min_chars:
                        continue
                    facts.append(
                        CandidateFact(
                            category=rule.category,
                            subcategory=rule.subcategory,
                            raw_text=value,
                            confidence=pattern_confidence(value, index, rulebook),
                            method="exact_pattern",
                            source_position=offset + match.start(),
                            source_span=match.group(0),
                        )
                    )
                    emitted += 1
                    if pattern.first_only or emitted >= per_pattern:
                        break
                if (pattern.first_only and emitted) or emitted >= per_pattern:
                    break
    return facts
