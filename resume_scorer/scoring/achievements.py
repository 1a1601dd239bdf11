from __future__ import annotations

import re

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore
from resume_scorer.schemas.facts import AggregatedFact

from .common import ascii_bounded, category_max, confident_facts

_AWARD_EVENT = r"(?:竞赛|比赛|大赛|挑战杯)"

# Tiers are listed strongest first; a span claimed by a stronger tier is not
# counted again by a weaker one.
TIER_PATTERNS: dict[str, tuple[tuple[str, re.Pattern[str]], ...]] = {
    "leadership": (
        (
            "chairman",
            re.compile(
                r"(?<!副)(?:主席|会长|社长|团长|队长)|(?<!vice )(?<!vice-)" + ascii_bounded("president|chairman"),
                re.IGNORECASE,
            ),
        ),
        ("deputy", re.compile(r"副主席|副会长|副社长|副部长|部长|vice[ -]?(?:president|chair(?:man)?)", re.IGNORECASE)),
        ("member", re.compile(r"班长|团支书|学生干部|社团干部|组织委员|宣传委员|学习委员|干事")),
    ),
    "honor": (
        ("national", re.compile(r"国家.{0,10}?(?:奖学金|助学金)|(?:国家级|全国).{0,10}?(?:优秀|先进|标兵)")),
        ("provincial", re.compile(r"(?:省级?|市级).{0,10}?(?:奖学金|优秀|先进|标兵)")),
        (
            "school",
            re.compile(
                r"校级?.{0,10}?奖学金|[一二三]等奖学金|学业奖学金|三好学生|优秀学生|优秀团员|优秀干部"
                r"|先进个人|优秀毕业生|优秀班干部|学习标兵|道德模范|优秀志愿者"
            ),
        ),
        ("college", re.compile(r"院级.{0,10}?(?:奖学金|优秀|先进)")),
    ),
    "competition": (
        (
            "international",
            re.compile(
                r"(?:国际|世界).{0,15}?" + _AWARD_EVENT + "|" + ascii_bounded(r"ACM[- ]?ICPC|ICPC|ACM"),
                re.IGNORECASE,
            ),
        ),
        ("national", re.compile(r"(?:全国|国家级).{0,15}?" + _AWARD_EVENT + "|挑战杯")),
        ("provincial", re.compile(r"(?:省级?|市级).{0,15}?" + _AWARD_EVENT)),
        (
            "school",
            re.compile(
                r"(?:校级?|院级).{0,15}?" + _AWARD_EVENT
                + "|" + _AWARD_EVENT + r".{0,10}?(?:[一二三]等奖|冠军|亚军|季军|第[一二三]名|获奖)"
            ),
        ),
    ),
    "certificate": (
        (
            "advanced",
            re.compile(r"注册会计师|司法考试|法律职业资格|注册建筑师|注册工程师|" + ascii_bounded("CPA|PMP|CFA|ACCA|CISSP")),
        ),
        (
            "general",
            re.compile(
                r"英语.{0,4}?[四六]级|教师资格证?|计算机.{0,6}?[一二三四]级|计算机等级|软件设计师|驾驶证|托福|雅思|"
                + ascii_bounded(r"CET-?[46]|TOEFL|IELTS"),
                re.IGNORECASE,
            ),
        ),
    ),
}

DEFAULT_TIER = {
    "leadership": "member",
    "honor": "school",
    "competition": "school",
    "certificate": "general",
}

# achievement-fact subcategory -> rubric sub-score
_FACT_GROUPS = {
    "scholarship": "honor",
    "honor": "honor",
    "competition": "competition",
    "certificate": "certificate",
    "leadership": "leadership",
}


def count_tiers(text: str, group: str) -> dict[str, int]:
    claimed: list[tuple[int, int]] = []
    counts: dict[str, int] = {}
    for tier, pattern in TIER_PATTERNS[group]:
        found = 0
        for match in pattern.finditer(text or ""):
            start, end = match.span()
            if any(start < other_end and other_start < end for other_start, other_end in claimed):
                continue
            claimed.append((start, end))
            found += 1
        counts[tier] = found
    return counts


def classify_fact(fact: AggregatedFact) -> tuple[str, str] | None:
    group = _FACT_GROUPS.get(fact.subcategory)
    if group is None:
        return None
    for tier, pattern in TIER_PATTERNS[group]:
        if pattern.search(fact.raw_text):
            return group, tier
    return group, DEFAULT_TIER[group]


def _clip(raw_items: dict[str, float], order: list[str], sub_cap: int, maximum: int, mode: str) -> tuple[dict[str, int], dict[str, float]]:
    itemized: dict[str, int] = {}
    overflow: dict[str, float] = {}
    remaining = maximum
    for group in order:
        raw = raw_items[group]
        if mode == "shared_pool":
            kept = min(raw, sub_cap, remaining)
            remaining -= kept
        else:
            kept = min(raw, sub_cap)
        itemized[group] = int(kept)
        if raw > kept:
            overflow[group] = raw - kept
    return itemized, overflow


def score_achievements(facts: list[AggregatedFact], text: str, rulebook: RuleBook) -> CategoryScore:
    order = [str(group) for group in rulebook.value("scoring.achievements.order", list(TIER_PATTERNS))]
    weights = rulebook.value("scoring.achievements.tier_points", {})
    sub_cap = int(rulebook.value("scoring.achievements.sub_cap", 5))
    mode = str(rulebook.value("scoring.achievements.clip_mode", "per_item"))
    maximum = category_max(rulebook, "achievements")

    fact_counts: dict[str, dict[str, int]] = {group: {} for group in order}
    for fact in confident_facts(facts, "achievements", rulebook):
        classified = classify_fact(fact)
        if classified is None:
            continue
        group, tier = classified
        fact_counts[group][tier] = fact_counts[group].get(tier, 0) + 1

    tier_counts: dict[str, dict[str, int]] = {}
    raw_items: dict[str, float] = {}
    for group in order:
        text_counts = count_tiers(text, group)
        merged = {
            tier: max(text_counts.get(tier, 0), fact_counts[group].get(tier, 0))
            for tier, _ in TIER_PATTERNS[group]
        }
        tier_counts[group] = merged
        raw_items[group] = float(sum(count * int(weights[group][tier]) for tier, count in merged.items()))

    itemized, overflow = _clip(raw_items, order, sub_cap, maximum, mode)
    raw_total = sum(itemized.values())
    return CategoryScore(
        category="achievements",
        raw_total=sum(raw_items.values()),
        capped_total=min(raw_total, maximum),
        max_score=maximum,
        itemized=itemized,
        sub_caps={group: sub_cap for group in order},
        raw_items=raw_items,
        overflow=overflow,
        evidence={
            "clip_mode": mode,
            "tiers": tier_counts,
            "counts": {group: sum(counts.values()) for group, counts in tier_counts.items()},
        },
    )
