from __future__ import annotations

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore, ExtractionSummary


def generate_suggestions(
    basic_info: CategoryScore,
    education: CategoryScore,
    skills: CategoryScore,
    experience: CategoryScore,
    achievements: CategoryScore,
    extraction: ExtractionSummary,
    rulebook: RuleBook,
) -> list[str]:
    """Category-ordered improvement advice.

    The closing "strong résumé" line is only emitted when no other rule fired.
    """
    limits = rulebook.value("suggestions.thresholds", {})
    messages = rulebook.value("suggestions.messages", {})
    out: list[str] = []

    if basic_info.capped_total < limits["basic_info"]:
        out.append(messages["basic_info"])

    if education.capped_total < limits["education"]:
        fired = False
        if education.itemized.get("academic", 0) == 0:
            out.append(messages["add_gpa"])
            fired = True
        if education.itemized.get("degree", 0) < limits["degree"]:
            out.append(messages["further_study"])
            fired = True
        if not fired:
            out.append(messages["highlight_school"])

    if skills.capped_total < limits["skills"]:
        empty = [bucket.label for bucket in rulebook.skill_buckets if skills.raw_items.get(bucket.name, 0) == 0]
        if empty:
            out.append(messages["missing_skills"].format(buckets="、".join(empty[:2])))
        else:
            out.append(messages["describe_skills"])

    if experience.capped_total < limits["experience"]:
        if experience.itemized.get("internship", 0) < limits["internship"]:
            out.append(messages["more_internships"])
        if experience.itemized.get("project", 0) < limits["project"]:
            out.append(messages["more_projects"])
        if experience.itemized.get("academic", 0) == 0:
            out.append(messages["research"])

    if achievements.capped_total < limits["achievements"]:
        if achievements.itemized.get("honor", 0) == 0 and achievements.itemized.get("competition", 0) == 0:
            out.append(messages["competitions"])
        if achievements.itemized.get("leadership", 0) == 0:
            out.append(messages["leadership"])
        if achievements.itemized.get("certificate", 0) == 0:
            out.append(messages["certificates"])

    if education.itemized.get("school", 0) >= limits["prestige_school"]:
        out.append(messages["prestige_school"])

    if extraction.semantic_used:
        if extraction.coverage_score < limits["coverage"]:
            out.append(messages["low_coverage"])
        if extraction.quality_score < limits["quality"]:
            out.append(messages["low_quality"])

    strong = [
        bucket.label
        for bucket in rulebook.skill_buckets
        if skills.raw_items.get(bucket.name, 0) >= limits["strong_bucket"]
    ]
    if strong:
        out.append(messages["strengths"].format(buckets="、".join(strong)))

    if not out:
        out.append(messages["strong_resume"])
    return out
