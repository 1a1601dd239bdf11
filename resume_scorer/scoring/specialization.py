from __future__ import annotations

import math

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore, Specialization


def skill_specializations(skills: CategoryScore, rulebook: RuleBook) -> list[Specialization]:
    found: list[Specialization] = []
    for bucket in rulebook.skill_buckets:
        count = int(skills.raw_items.get(bucket.name, 0))
        if count < bucket.threshold:
            continue
        bonus = min(count - bucket.threshold + 1, bucket.bonus_cap)
        found.append(
            Specialization(
                type=bucket.name,
                category="skill",
                level=count,
                bonus=bonus,
                description=bucket.description.format(count=count),
            )
        )
    return found


def overflow_specializations(
    score: CategoryScore,
    category: str,
    rulebook: RuleBook,
) -> list[Specialization]:
    """Turn points above each sub-score's cap into bonuses: floor(overflow / divisor), capped."""
    divisor = float(rulebook.value("specialization.divisor", 3))
    bonus_cap = int(rulebook.value("specialization.bonus_cap", 5))
    descriptions = rulebook.value("specialization.descriptions", {})
    counts = score.evidence.get("counts", {})

    found: list[Specialization] = []
    for sub, extra in score.overflow.items():
        bonus = min(int(math.floor(extra / divisor)), bonus_cap)
        if bonus <= 0:
            continue
        count = int(counts.get(sub, 0))
        template = descriptions.get(sub, "{count}")
        found.append(
            Specialization(
                type=sub,
                category=category,
                level=count,
                bonus=bonus,
                description=template.format(count=count, extra=round(extra, 2)),
            )
        )
    return found


def detect_specializations(
    skills: CategoryScore,
    experience: CategoryScore,
    achievements: CategoryScore,
    rulebook: RuleBook,
) -> list[Specialization]:
    return (
        skill_specializations(skills, rulebook)
        + overflow_specializations(experience, "experience", rulebook)
        + overflow_specializations(achievements, "achievement", rulebook)
    )
