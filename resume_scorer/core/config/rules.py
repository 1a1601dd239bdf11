from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

from .scoring import get_scoring_config, lookup

logger = logging.getLogger(__name__)

_PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE
_ASCII_WORD = re.compile(r"[A-Za-z0-9]")
_COMPACT_RE = re.compile(r"[.\s]")


@dataclass(frozen=True, slots=True)
class PatternRule:
    regex: re.Pattern[str]
    first_only: bool = False


@dataclass(frozen=True, slots=True)
class SubcategoryRule:
    category: str
    subcategory: str
    patterns: tuple[PatternRule, ...]
    keywords: tuple[str, ...]
    context_words: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SkillBucket:
    name: str
    label: str
    cap: int
    threshold: int
    bonus_cap: int
    description: str
    keywords: tuple[str, ...]
    matchers: tuple[re.Pattern[str], ...]

    def matched_keywords(self, text: str) -> list[str]:
        return [
            keyword
            for keyword, matcher in zip(self.keywords, self.matchers)
            if matcher.search(text)
        ]


@dataclass(frozen=True, slots=True)
class RuleBook:
    """Compiled, read-only view of the scoring rule table."""

    version: str
    config: Mapping[str, Any]
    subcategories: tuple[SubcategoryRule, ...]
    skill_buckets: tuple[SkillBucket, ...]
    markers: Mapping[str, re.Pattern[str]]

    def value(self, path: str, default: Any = None) -> Any:
        return lookup(self.config, path, default)

    def marker(self, name: str) -> re.Pattern[str]:
        return self.markers[name]

    def bucket(self, name: str) -> SkillBucket | None:
        for bucket in self.skill_buckets:
            if bucket.name == name:
                return bucket
        return None


def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile a skill keyword into a case-insensitive matcher.

    ASCII edges only match on alphanumeric boundaries so ``Go`` does not fire
    inside ``Google``; a dotted or spaced keyword such as ``Node.js`` also
    matches its compact spelling ``nodejs``.
    """
    variants = [keyword]
    compact = _COMPACT_RE.sub("", keyword)
    if compact and compact != keyword:
        variants.append(compact)

    parts: list[str] = []
    for variant in sorted(variants, key=len, reverse=True):
        part = re.escape(variant)
        if _ASCII_WORD.match(variant[0]):
            part = r"(?<![A-Za-z0-9])" + part
        if _ASCII_WORD.match(variant[-1]):
            part = part + r"(?![A-Za-z0-9])"
        parts.append(part)
    return re.compile("|".join(parts), re.IGNORECASE)


def _compile(regex: str, where: str) -> re.Pattern[str]:
    try:
        return re.compile(regex, _PATTERN_FLAGS)
    except re.error as exc:
        raise RuntimeError(f"Invalid pattern in scoring config at {where}: {exc}") from exc


def _pattern_rule(raw: Any, where: str) -> PatternRule:
    if isinstance(raw, Mapping):
        return PatternRule(regex=_compile(str(raw["regex"]), where), first_only=bool(raw.get("first", False)))
    return PatternRule(regex=_compile(str(raw), where))


def _subcategory_rules(config: Mapping[str, Any]) -> tuple[SubcategoryRule, ...]:
    rules: list[SubcategoryRule] = []
    categories = lookup(config, "extraction.categories", {}) or {}
    for category, subcategories in categories.items():
        for subcategory, spec in (subcategories or {}).items():
            where = f"extraction.categories.{category}.{subcategory}"
            rules.append(
                SubcategoryRule(
                    category=str(category),
                    subcategory=str(subcategory),
                    patterns=tuple(
                        _pattern_rule(raw, f"{where}.patterns[{index}]")
                        for index, raw in enumerate(spec.get("patterns", []) or [])
                    ),
                    keywords=tuple(str(k) for k in spec.get("keywords", []) or []),
                    context_words=tuple(str(w) for w in spec.get("context_words", []) or []),
                )
            )
    return tuple(rules)


def _skill_buckets(config: Mapping[str, Any]) -> tuple[SkillBucket, ...]:
    buckets: list[SkillBucket] = []
    for name, spec in (lookup(config, "scoring.skills.buckets", {}) or {}).items():
        keywords = tuple(dict.fromkeys(str(k) for k in spec.get("keywords", []) or []))
        buckets.append(
            SkillBucket(
                name=str(name),
                label=str(spec.get("label", name)),
                cap=int(spec["cap"]),
                threshold=int(spec["specialization_threshold"]),
                bonus_cap=int(spec["bonus_cap"]),
                description=str(spec.get("description", "{count}")),
                keywords=keywords,
                matchers=tuple(keyword_pattern(k) for k in keywords),
            )
        )
    return tuple(buckets)


def build_rulebook(config: Mapping[str, Any]) -> RuleBook:
    markers = {
        str(name): _compile(str(regex), f"extraction.markers.{name}")
        for name, regex in (lookup(config, "extraction.markers", {}) or {}).items()
    }
    rulebook = RuleBook(
        version=str(config.get("version", "")),
        config=config,
        subcategories=_subcategory_rules(config),
        skill_buckets=_skill_buckets(config),
        markers=markers,
    )
    logger.debug(
        "rulebook_compiled version=%s subcategories=%s buckets=%s",
        rulebook.version,
        len(rulebook.subcategories),
        len(rulebook.skill_buckets),
    )
    return rulebook


@lru_cache(maxsize=1)
def get_default_rulebook() -> RuleBook:
    return build_rulebook(get_scoring_config())
