from __future__ import annotations

import logging
from functools import lru_cache

from resume_scorer.core.config import settings
from resume_scorer.core.config.rules import RuleBook, get_default_rulebook
from resume_scorer.extraction import EntityClassifier, ExtractionRun, FactExtractor
from resume_scorer.normalize.text import has_good_structure, normalize_text
from resume_scorer.recommend import generate_suggestions, recommend_jobs
from resume_scorer.report import score_level
from resume_scorer.schemas.analysis import AnalysisOptions, AnalysisResult, ExtractionSummary
from resume_scorer.schemas.facts import CATEGORY_ORDER
from resume_scorer.scoring import (
    detect_specializations,
    score_achievements,
    score_basic_info,
    score_education,
    score_experience,
    score_skills,
)
from resume_scorer.taxonomy import SchoolRankProvider, get_default_school_ranks

logger = logging.getLogger(__name__)


def summarize_extraction(run: ExtractionRun, rulebook: RuleBook) -> ExtractionSummary:
    facts = run.facts
    total = len(facts)
    if total == 0:
        return ExtractionSummary(duplicates_removed=run.duplicates_removed, semantic_used=run.semantic_used)

    high_threshold = float(rulebook.value("extraction.high_confidence", 0.7))
    high = sum(1 for fact in facts if fact.confidence > high_threshold)
    covered = {fact.category for fact in facts}
    overall = sum(fact.confidence for fact in facts) / total
    if total < 5:
        overall *= 0.8
    elif total > 20:
        overall *= 1.1
    return ExtractionSummary(
        total_facts=total,
        high_confidence_facts=high,
        duplicates_removed=run.duplicates_removed,
        coverage_score=round(len(covered) / len(CATEGORY_ORDER), 4),
        quality_score=round(high / total, 4),
        overall_confidence=round(min(overall, 1.0), 4),
        semantic_used=run.semantic_used,
    )


class ResumeAnalyzer:
    """Scores one résumé text end to end.

    The analyzer holds only read-only tables and an optional entity
    classifier, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        classifier: EntityClassifier | None = None,
        *,
        rulebook: RuleBook | None = None,
        school_ranks: SchoolRankProvider | None = None,
        semantic_timeout_seconds: float | None = None,
    ) -> None:
        self.rulebook = rulebook or get_default_rulebook()
        self.school_ranks = school_ranks or get_default_school_ranks()
        self.extractor = FactExtractor(
            self.rulebook,
            classifier,
            semantic_timeout_seconds=semantic_timeout_seconds or settings.semantic_timeout_seconds,
        )

    @property
    def classifier(self) -> EntityClassifier | None:
        return self.extractor.classifier

    def analyze(self, text: str | None, options: AnalysisOptions | None = None) -> AnalysisResult:
        options = options or AnalysisOptions()
        rulebook = self.rulebook
        max_chars = int(rulebook.value("extraction.limits.max_text_chars", 100_000))
        normalized = normalize_text((text or "")[:max_chars])

        run = self.extractor.extract(
            normalized,
            use_semantic=options.use_semantic_classifier,
            timeout_seconds=options.semantic_timeout_seconds,
        )
        facts = run.facts

        basic_info = score_basic_info(facts, normalized, rulebook)
        education = score_education(facts, normalized, rulebook, self.school_ranks)
        skills = score_skills(facts, normalized, rulebook)
        experience = score_experience(facts, normalized, rulebook)
        achievements = score_achievements(facts, normalized, rulebook)

        specializations = detect_specializations(skills, experience, achievements, rulebook)
        base_score = sum(
            score.capped_total for score in (basic_info, education, skills, experience, achievements)
        )
        bonus_score = sum(spec.bonus for spec in specializations)
        total_score = base_score + bonus_score

        extraction = summarize_extraction(run, rulebook)
        result = AnalysisResult(
            basic_info=basic_info,
            education=education,
            skills=skills,
            experience=experience,
            achievements=achievements,
            specializations=specializations,
            base_score=base_score,
            bonus_score=bonus_score,
            total_score=total_score,
            suggestions=generate_suggestions(
                basic_info, education, skills, experience, achievements, extraction, rulebook
            ),
            job_recommendations=recommend_jobs(skills, experience, education, specializations, rulebook),
            score_level=score_level(total_score, rulebook),
            extraction=extraction,
            has_good_structure=has_good_structure(normalized),
        )
        logger.info(
            "resume_analyzed chars=%s facts=%s base=%s bonus=%s total=%s semantic=%s",
            len(normalized),
            extraction.total_facts,
            base_score,
            bonus_score,
            total_score,
            extraction.semantic_used,
        )
        return result


@lru_cache(maxsize=1)
def get_default_analyzer() -> ResumeAnalyzer:
    return ResumeAnalyzer()


def analyze(text: str | None, options: AnalysisOptions | None = None) -> AnalysisResult:
    """Analyze résumé text with the process-wide default analyzer (no entity classifier)."""
    return get_default_analyzer().analyze(text, options)
