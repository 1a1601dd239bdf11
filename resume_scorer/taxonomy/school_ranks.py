from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from .provider import SchoolMatch, SchoolRankProvider

_FULL_NAME_MARKERS = ("大学", "学院", "university", "college")
_LEADING_VERB_RE = re.compile(r"^(?:毕业于|就读于|毕业|就读|在|于)+")


class LocalSchoolRanks(SchoolRankProvider):
    """School tiers backed by the bundled school_ranks.json table.

    Full names are matched before aliases so that an alias such as 南大 never
    shadows a different university whose full name happens to contain it.
    Aliases only apply to abbreviated mentions that carry no 大学/学院 suffix.
    """

    def __init__(self, ranks_path: str | Path | None = None) -> None:
        path = Path(ranks_path) if ranks_path else Path(__file__).with_name("school_ranks.json")
        raw = self._load(path)
        self._tiers = [
            (
                str(entry["tier"]),
                int(entry["score"]),
                tuple(str(name).lower() for name in entry.get("names", [])),
                tuple(str(alias).lower() for alias in entry.get("aliases", [])),
            )
            for entry in raw["tiers"]
        ]
        generic = raw["generic"]
        self._generic_markers = tuple(str(m).lower() for m in generic["markers"])
        self._generic_score = int(generic["score"])
        self._prestige_markers = tuple(str(m).lower() for m in generic["prestige_markers"])
        self._prestige_score = int(generic["prestige_score"])
        vocational = raw["vocational"]
        self._vocational_markers = tuple(str(m).lower() for m in vocational["markers"])
        self._vocational_score = int(vocational["score"])
        self._unknown_score = int(raw["unknown_score"])
        self._text_fallback = [
            (re.compile(str(item["pattern"]), re.IGNORECASE), int(item["score"]))
            for item in raw["text_fallback"]
        ]

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict) or "tiers" not in raw:
            raise RuntimeError(f"Invalid school rank table '{path}': missing 'tiers'.")
        return raw

    def rank(self, school_name: str) -> SchoolMatch:
        cleaned = clean_school_name(school_name)
        query = cleaned.lower()
        if not query:
            return SchoolMatch(name=cleaned, tier="unknown", score=self._unknown_score)

        for tier, score, names, _ in self._tiers:
            if any(name in query for name in names):
                return SchoolMatch(name=cleaned, tier=tier, score=score)

        if not any(marker in query for marker in _FULL_NAME_MARKERS):
            for tier, score, _, aliases in self._tiers:
                if any(alias in query for alias in aliases):
                    return SchoolMatch(name=cleaned, tier=tier, score=score)

        if any(marker in query for marker in self._vocational_markers):
            return SchoolMatch(name=cleaned, tier="vocational", score=self._vocational_score)
        if any(marker in query for marker in self._generic_markers):
            if any(marker in query for marker in self._prestige_markers):
                return SchoolMatch(name=cleaned, tier="generic_prestige", score=self._prestige_score)
            return SchoolMatch(name=cleaned, tier="generic", score=self._generic_score)
        return SchoolMatch(name=cleaned, tier="unknown", score=self._unknown_score)

    def rank_text(self, text: str) -> int:
        for pattern, score in self._text_fallback:
            if pattern.search(text or ""):
                return score
        return self._unknown_score


def clean_school_name(raw: str) -> str:
    value = (raw or "").strip()
    value = _LEADING_VERB_RE.sub("", value)
    return value.strip(" :;,.，。、()")
