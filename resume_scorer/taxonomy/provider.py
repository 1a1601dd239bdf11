from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class SchoolMatch:
    name: str
    tier: str
    score: int


class SchoolRankProvider(Protocol):
    def rank(self, school_name: str) -> SchoolMatch:
        """Return the tier and 0-15 score of a school name or alias."""

    def rank_text(self, text: str) -> int:
        """Score a document that mentions no recognisable school name."""
