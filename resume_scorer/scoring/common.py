from __future__ import annotations

import math
import re
from typing import Iterable

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.facts import AggregatedFact


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ascii_bounded(pattern: str) -> str:
    """Wrap a pattern so ASCII words only match on alphanumeric boundaries.

    ``\\b`` is useless here because CJK characters count as word characters.
    """
    return rf"(?<![A-Za-z0-9])(?:{pattern})(?![A-Za-z0-9])"


def count_matches(regex: re.Pattern[str], text: str) -> int:
    return sum(1 for _ in regex.finditer(text or ""))


def category_max(rulebook: RuleBook, category: str) -> int:
    return int(rulebook.value(f"scoring.category_max.{category}"))


def confident_facts(
    facts: Iterable[AggregatedFact],
    category: str,
    rulebook: RuleBook,
) -> list[AggregatedFact]:
    threshold = float(rulebook.value(f"scoring.fact_thresholds.{category}", 0.5))
    return [fact for fact in facts if fact.category == category and fact.confidence > threshold]
