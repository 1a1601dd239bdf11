from __future__ import annotations

import re
from dataclasses import dataclass

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore
from resume_scorer.schemas.facts import AggregatedFact
from resume_scorer.taxonomy import SchoolRankProvider, clean_school_name, get_default_school_ranks

from .common import ascii_bounded, category_max, confident_facts, round_half_up

_CLAUSE_SPLIT_RE = re.compile(r"[。;；\n,，、|]")
_SCHOOL_RE = re.compile(r"[^\s,，。;；:、()|]{2,15}(?:大学|学院|学校)")
_EN_SCHOOL_RE = re.compile(
    r"(?:University|College|Institute) of(?: [A-Z][A-Za-z&.-]*)+"
    r"|(?:[A-Z][A-Za-z&.-]*\s)+(?:University|College|Institute)"
)
_DEGREE_RE = re.compile(
    r"博士研究生|硕士研究生|博士后?|硕士|研究生|本科|学士|专科|大专|"
    + ascii_bounded(r"ph\.?d|doctorate|master(?:'s)?|bachelor(?:'s)?"),
    re.IGNORECASE,
)
_GPA_RE = re.compile(r"(?:GPA|绩点|平均分)\s*:?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
_GPA_MENTION_RE = re.compile(r"GPA|绩点|平均分|成绩", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")

DEGREE_ORDER = {"associate": 1, "bachelor": 2, "master": 3, "phd": 4}


@dataclass(frozen=True, slots=True)
class DegreeMention:
    level: str
    school: str | None


def degree_level(token: str) -> str:
    lowered = token.lower()
    if lowered.startswith("博士") or lowered.startswith("ph") or lowered == "doctorate":
        return "phd"
    if lowered.startswith(("硕士", "研究生", "master")):
        return "master"
    if lowered.startswith(("本科", "学士", "bachelor")):
        return "bachelor"
    return "associate"


def find_schools(text: str) -> list[str]:
    found = [clean_school_name(m.group(0)) for m in _SCHOOL_RE.finditer(text or "")]
    found.extend(m.group(0).strip() for m in _EN_SCHOOL_RE.finditer(text or ""))
    return [name for name in dict.fromkeys(found) if len(name) >= 2]


def find_degrees(text: str) -> list[DegreeMention]:
    """Pair every degree keyword with the school named in its clause or a neighbouring one."""
    clauses = [clause.strip() for clause in _CLAUSE_SPLIT_RE.split(text or "")]
    clause_schools = [find_schools(clause) for clause in clauses]
    mentions: list[DegreeMention] = []

    for index, clause in enumerate(clauses):
        levels = list(dict.fromkeys(degree_level(m.group(0)) for m in _DEGREE_RE.finditer(clause)))
        if not levels:
            continue
        school = None
        for candidate in (index, index - 1, index + 1):
            if 0 <= candidate < len(clauses) and clause_schools[candidate]:
                school = clause_schools[candidate][0]
                break
        for level in levels:
            _add_mention(mentions, DegreeMention(level=level, school=school))
    return mentions


def _add_mention(mentions: list[DegreeMention], mention: DegreeMention) -> None:
    for index, existing in enumerate(mentions):
        if existing.level != mention.level:
            continue
        if existing.school == mention.school or mention.school is None:
            return
        if existing.school is None:
            mentions[index] = mention
            return
    mentions.append(mention)


def parse_gpa(text: str, facts: list[AggregatedFact]) -> float | None:
    for match in _GPA_RE.finditer(text or ""):
        value = float(match.group(1))
        if value > 0:
            return value
    for fact in facts:
        if fact.subcategory != "gpa":
            continue
        number = _NUMBER_RE.search(fact.raw_text)
        if number and float(number.group(0)) > 0:
            return float(number.group(0))
    return None


def normalize_gpa(value: float, scale: float = 4.0) -> float:
    if value > 5:
        return value / 25.0
    if value > scale:
        return value * 0.8
    return value


def _academic_score(gpa: float | None, mentioned: bool, rulebook: RuleBook) -> tuple[int, float | None]:
    if gpa is None:
        return (int(rulebook.value("scoring.education.gpa_mentioned_score", 1)) if mentioned else 0), None
    normalized = normalize_gpa(gpa, float(rulebook.value("scoring.education.gpa_scale", 4.0)))
    for band in rulebook.value("scoring.education.gpa_bands", []):
        if normalized >= float(band["min"]):
            return int(band["score"]), normalized
    return int(rulebook.value("scoring.education.gpa_mentioned_score", 1)), normalized


def _degree_score(degrees: list[DegreeMention], rulebook: RuleBook) -> int:
    if not degrees:
        return 0
    points = rulebook.value("scoring.education.degree_points", {})
    best = max(int(points.get(d.level, 0)) for d in degrees)
    extra = (len(degrees) - 1) * int(rulebook.value("scoring.education.extra_degree_bonus", 1))
    return min(best + extra, int(rulebook.value("scoring.education.degree_cap", 5)))


def _school_score(
    degrees: list[DegreeMention],
    schools: list[str],
    text: str,
    ranks: SchoolRankProvider,
) -> tuple[int, dict[str, object]]:
    ranked = {name: ranks.rank(name).score for name in schools}
    best_mentioned = max(ranked.values()) if ranked else None

    def tier(name: str | None) -> int:
        if name:
            return ranked[name] if name in ranked else ranks.rank(name).score
        if best_mentioned is not None:
            return best_mentioned
        return ranks.rank_text(text)

    if len(degrees) >= 2:
        ordered = sorted(degrees, key=lambda d: DEGREE_ORDER[d.level])
        earliest, highest = ordered[0], ordered[-1]
        score = round_half_up(0.5 * tier(earliest.school) + 0.5 * tier(highest.school))
        return score, {"basis": "multi_degree", "earliest": earliest.school, "highest": highest.school}
    if len(degrees) == 1:
        return tier(degrees[0].school), {"basis": "single_degree", "school": degrees[0].school}
    if best_mentioned is not None:
        return best_mentioned, {"basis": "best_mentioned"}
    return ranks.rank_text(text), {"basis": "text_fallback"}


def score_education(
    facts: list[AggregatedFact],
    text: str,
    rulebook: RuleBook,
    ranks: SchoolRankProvider | None = None,
) -> CategoryScore:
    ranks = ranks or get_default_school_ranks()
    education_facts = confident_facts(facts, "education", rulebook)

    degrees = find_degrees(text)
    schools = find_schools(text)
    for fact in education_facts:
        if fact.subcategory == "school":
            for name in find_schools(fact.raw_text) or [clean_school_name(fact.raw_text)]:
                if name and name not in schools:
                    schools.append(name)

    school_cap = int(rulebook.value("scoring.education.school_cap", 15))
    school, school_evidence = _school_score(degrees, schools, text, ranks)
    school = min(school, school_cap)

    gpa = parse_gpa(text, education_facts)
    mentioned = bool(_GPA_MENTION_RE.search(text or "")) or any(f.subcategory == "gpa" for f in education_facts)
    academic, normalized_gpa = _academic_score(gpa, mentioned, rulebook)
    degree = _degree_score(degrees, rulebook)

    itemized = {"school": school, "academic": academic, "degree": degree}
    raw_total = sum(itemized.values())
    maximum = category_max(rulebook, "education")
    return CategoryScore(
        category="education",
        raw_total=raw_total,
        # Displayed cap only; an overscore is flagged, never clipped.
        capped_total=raw_total,
        max_score=maximum,
        itemized=itemized,
        sub_caps={
            "school": school_cap,
            "academic": int(rulebook.value("scoring.education.academic_cap", 5)),
            "degree": int(rulebook.value("scoring.education.degree_cap", 5)),
        },
        raw_items={key: float(value) for key, value in itemized.items()},
        overflow={},
        evidence={
            "schools": schools,
            "degrees": [{"level": d.level, "school": d.school} for d in degrees],
            "gpa": gpa,
            "normalized_gpa": normalized_gpa,
            **school_evidence,
        },
    )
