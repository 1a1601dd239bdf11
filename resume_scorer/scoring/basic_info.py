from __future__ import annotations

import re
from typing import Callable

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import CategoryScore
from resume_scorer.schemas.facts import AggregatedFact

from .common import ascii_bounded, category_max, confident_facts

_NAME_RE = re.compile(r"姓名\s*:\s*\S{1,4}|个人简历|简历|" + ascii_bounded(r"name\s*:"), re.IGNORECASE)
_NAME_LINE_RE = re.compile(r"^\S{2,4}$", re.MULTILINE)
_MOBILE_RE = re.compile(r"1[3-9]\d{9}")
_LABELLED_PHONE_RE = re.compile(r"(?:电话|手机|tel|phone|mobile)\s*:?\s*\+?\d[\d\s()-]{6,}\d", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_ADDRESS_RE = re.compile(r"市|省|区|县|路|街|号|意向|求职|" + ascii_bounded("address"), re.IGNORECASE)
_WEBSITE_RE = re.compile(r"github|gitlab|个人网站|博客|portfolio|https?://", re.IGNORECASE)
_SOCIAL_RE = re.compile(r"linkedin|微博|知乎", re.IGNORECASE)
_BIRTHDAY_RE = re.compile(r"出生|生日|\d{4}年\d{1,2}月(?:\d{1,2}日)?生|" + ascii_bounded(r"birth(?:day|date)?|dob"), re.IGNORECASE)
_POLITICAL_RE = re.compile(r"党员|团员|群众|政治面貌")

_TEXT_CHECKS: dict[str, Callable[[str], bool]] = {
    "name": lambda text: bool(_NAME_RE.search(text) or _NAME_LINE_RE.search(text)),
    "phone": lambda text: bool(_MOBILE_RE.search(text) or _LABELLED_PHONE_RE.search(text)),
    "email": lambda text: bool(_EMAIL_RE.search(text)),
    "address": lambda text: bool(_ADDRESS_RE.search(text)),
    "website": lambda text: bool(_WEBSITE_RE.search(text)),
    "social": lambda text: bool(_SOCIAL_RE.search(text)),
    "birthday": lambda text: bool(_BIRTHDAY_RE.search(text)),
    "political": lambda text: bool(_POLITICAL_RE.search(text)),
}

# personal-fact subcategory -> rubric item
_FACT_ITEMS = {
    "name": "name",
    "phone": "phone",
    "email": "email",
    "address": "address",
    "intention": "address",
}


def score_basic_info(facts: list[AggregatedFact], text: str, rulebook: RuleBook) -> CategoryScore:
    items = [str(item) for item in rulebook.value("scoring.basic_info.items", [])]
    points = int(rulebook.value("scoring.basic_info.points_per_item", 2))
    maximum = category_max(rulebook, "basic_info")

    sources: dict[str, str] = {}
    for fact in confident_facts(facts, "personal", rulebook):
        item = _FACT_ITEMS.get(fact.subcategory)
        if item in items:
            sources.setdefault(item, "fact")
    for item in items:
        check = _TEXT_CHECKS.get(item)
        if item not in sources and check is not None and check(text or ""):
            sources[item] = "text"

    itemized = {item: points if item in sources else 0 for item in items}
    raw_total = sum(itemized.values())
    return CategoryScore(
        category="basic_info",
        raw_total=raw_total,
        capped_total=min(raw_total, maximum),
        max_score=maximum,
        itemized=itemized,
        sub_caps={item: points for item in items},
        raw_items={item: float(value) for item, value in itemized.items()},
        overflow={},
        evidence={"sources": sources},
    )
