from __future__ import annotations

import re

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore
from resume_scorer.schemas.facts import AggregatedFact

from .common import ascii_bounded, category_max, confident_facts, count_matches, round_half_up

_INTERNSHIP_RE = re.compile(r"实习|" + ascii_bounded(r"intern(?:ship)?s?"), re.IGNORECASE)
_COMPANY_INTERNSHIP_RE = re.compile(
    r"(?:公司|企业|集团|科技|有限).{0,60}?(?:实习|" + ascii_bounded(r"intern(?:ship)?s?") + ")",
    re.IGNORECASE,
)
_COMPANY_RE = re.compile(
    r"有限公司|股份|集团|科技|互联网|腾讯|阿里|百度|字节|美团|京东|华为|小米|网易|滴滴|快手"
)
_PROJECT_RE = re.compile(r"项目|" + ascii_bounded(r"projects?"), re.IGNORECASE)
_DELIVERABLE_RE = re.compile(r"(?:开发|设计|完成|负责).{0,60}?(?:项目|系统|网站|APP)", re.IGNORECASE)
_OUTCOME_RE = re.compile(r"完成|实现|提升|优化|负责|开发|设计|获得|达到")

# Publication venues, strongest first.
VENUE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "nature_science",
        re.compile(
            r"(?:发表|published|论文|paper).{0,30}?" + ascii_bounded("Nature|Science")
            + "|" + ascii_bounded("Nature|Science") + r"\s*(?:期刊|杂志|论文|journal)"
        ),
    ),
    ("jcr_q1", re.compile(r"JCR\s*(?:Q1|[一1]区)|中科院\s*[一1]区|影响因子\s*[:>]?\s*(?:[5-9]|\d{2,})", re.IGNORECASE)),
    ("sci", re.compile(ascii_bounded("SCIE?"))),
    ("ei", re.compile(ascii_bounded("EI"))),
    ("core_journal", re.compile(r"核心期刊|中文核心|北大核心|CSSCI|CSCD")),
)


def _count_facts(facts: list[AggregatedFact], subcategory: str, marker: str) -> int:
    return sum(1 for fact in facts if fact.subcategory == subcategory or marker in fact.raw_text)


def score_experience(facts: list[AggregatedFact], text: str, rulebook: RuleBook) -> CategoryScore:
    text = text or ""
    experience_facts = confident_facts(facts, "experience", rulebook)
    sub_cap = int(rulebook.value("scoring.experience.sub_cap", 10))

    internship_count = max(
        _count_facts(experience_facts, "internship", "实习"),
        count_matches(_INTERNSHIP_RE, text),
        count_matches(_COMPANY_INTERNSHIP_RE, text),
    )
    internship_points = rulebook.value("scoring.experience.internship_points", {})
    has_company = bool(_COMPANY_RE.search(text))
    internship_raw = internship_count * float(
        internship_points["with_company"] if has_company else internship_points["default"]
    )

    project_count = max(
        _count_facts(experience_facts, "project", "项目"),
        count_matches(_PROJECT_RE, text),
        count_matches(_DELIVERABLE_RE, text),
    )
    project_points = rulebook.value("scoring.experience.project_points", {})
    has_outcome = bool(_OUTCOME_RE.search(text))
    project_raw = project_count * float(
        project_points["with_outcome"] if has_outcome else project_points["default"]
    )

    venue_points = rulebook.value("scoring.experience.venue_points", {})
    venues = {name: count_matches(pattern, text) for name, pattern in VENUE_PATTERNS}
    academic_raw = float(sum(count * float(venue_points.get(name, 0)) for name, count in venues.items()))
    paper_count = sum(venues.values())

    raw_items = {"internship": internship_raw, "project": project_raw, "academic": academic_raw}
    itemized = {key: round_half_up(min(value, sub_cap)) for key, value in raw_items.items()}
    overflow = {key: value - sub_cap for key, value in raw_items.items() if value > sub_cap}

    maximum = category_max(rulebook, "experience")
    raw_total = sum(itemized.values())
    return CategoryScore(
        category="experience",
        raw_total=sum(raw_items.values()),
        capped_total=min(raw_total, maximum),
        max_score=maximum,
        itemized=itemized,
        sub_caps={key: sub_cap for key in raw_items},
        raw_items=raw_items,
        overflow=overflow,
        evidence={
            "counts": {"internship": internship_count, "project": project_count, "academic": paper_count},
            "venues": venues,
            "has_company": has_company,
            "has_outcome": has_outcome,
        },
    )
