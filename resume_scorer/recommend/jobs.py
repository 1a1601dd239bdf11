from __future__ import annotations

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore, JobRecommendation, Specialization

_MAX_MATCH = 100


def _signal_items(signal: str, skills: CategoryScore, experience: CategoryScore) -> tuple[int, list[str]]:
    if signal == "academic":
        return int(experience.itemized.get("academic", 0)), []
    items = list(skills.evidence.get("matched", {}).get(signal, []))
    return len(items), items


def recommend_jobs(
    skills: CategoryScore,
    experience: CategoryScore,
    education: CategoryScore,
    specializations: list[Specialization],
    rulebook: RuleBook,
) -> list[JobRecommendation]:
    """Rank job categories from skill buckets, academic output and specializations."""
    cfg = rulebook.value("jobs", {})
    boost = int(cfg.get("specialization_boost", 5))
    by_type = {spec.type: spec for spec in specializations}

    candidates: list[JobRecommendation] = []
    for rule in cfg.get("rules", []):
        signal = str(rule["signal"])
        count, items = _signal_items(signal, skills, experience)
        if count < int(rule.get("min_count", 1)):
            continue
        match = min(int(rule["base"]) + int(rule["increment"]) * count, int(rule["ceiling"]))
        specialized = signal in by_type
        if specialized:
            match = min(match + boost, _MAX_MATCH)
        candidates.append(
            JobRecommendation(
                category=str(rule["title"]),
                match=match,
                reason=str(rule["reason"]).format(items="、".join(items[:3])),
                is_specialization=specialized,
            )
        )

    for senior in cfg.get("senior", []):
        spec = by_type.get(str(senior["specialization"]))
        if spec is None or spec.level < int(senior["min_level"]):
            continue
        candidates.append(
            JobRecommendation(
                category=str(senior["title"]),
                match=int(senior["match"]),
                reason=str(senior["reason"]).format(level=spec.level),
                is_specialization=True,
            )
        )

    best: dict[str, JobRecommendation] = {}
    for job in candidates:
        current = best.get(job.category)
        if current is None or job.match > current.match:
            best[job.category] = job

    if not best:
        fallback = cfg.get("fallback", {})
        prestige = int(education.itemized.get("school", 0)) >= int(fallback.get("prestige_school_min", 11))
        entry = fallback["prestige"] if prestige else fallback["default"]
        return [JobRecommendation(category=str(entry["title"]), match=int(entry["match"]), reason=str(entry["reason"]))]

    ranked = sorted(best.values(), key=lambda job: job.match, reverse=True)
    return ranked[: int(cfg.get("top_n", 5))]
