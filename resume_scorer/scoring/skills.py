from __future__ import annotations

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore
from resume_scorer.schemas.facts import AggregatedFact

from .common import category_max, confident_facts


def score_skills(facts: list[AggregatedFact], text: str, rulebook: RuleBook) -> CategoryScore:
    skill_facts = confident_facts(facts, "skills", rulebook)
    fact_text = "\n".join(fact.raw_text for fact in skill_facts)

    itemized: dict[str, int] = {}
    raw_items: dict[str, float] = {}
    overflow: dict[str, float] = {}
    matched: dict[str, list[str]] = {}
    for bucket in rulebook.skill_buckets:
        # Facts are spans of the same document, so the distinct union equals the max of both counts.
        found = list(dict.fromkeys(bucket.matched_keywords(text or "") + bucket.matched_keywords(fact_text)))
        count = len(found)
        matched[bucket.name] = found
        itemized[bucket.name] = min(count, bucket.cap)
        raw_items[bucket.name] = float(count)
        if count > bucket.cap:
            overflow[bucket.name] = float(count - bucket.cap)

    raw_total = sum(itemized.values())
    maximum = category_max(rulebook, "skills")
    return CategoryScore(
        category="skills",
        raw_total=raw_total,
        capped_total=min(raw_total, maximum),
        max_score=maximum,
        itemized=itemized,
        sub_caps={bucket.name: bucket.cap for bucket in rulebook.skill_buckets},
        raw_items=raw_items,
        overflow=overflow,
        evidence={"matched": matched},
    )
