from __future__ import annotations

import logging
from functools import lru_cache

from resume_scorer.core.config import settings
from resume_scorer.core.errors import InputTooShortError
from resume_scorer.engine import ResumeAnalyzer
from resume_scorer.extraction import build_entity_classifier
from resume_scorer.normalize.text import normalize_text
from resume_scorer.parsing import parse_document_bytes
from resume_scorer.report import render_report
from resume_scorer.schemas.analysis import AnalysisOptions, AnalysisResult

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_analyzer() -> ResumeAnalyzer:
    classifier = None
    if settings.semantic_classifier_enabled:
        classifier = build_entity_classifier(settings.spacy_model)
    logger.info("resume_analyzer_ready semantic_classifier=%s", classifier is not None)
    return ResumeAnalyzer(classifier, semantic_timeout_seconds=settings.semantic_timeout_seconds)


def ensure_min_length(text: str) -> str:
    normalized = normalize_text(text)
    if len(normalized) < settings.min_resume_chars:
        raise InputTooShortError(len(normalized), settings.min_resume_chars)
    return normalized


def run_text_analysis(text: str, options: AnalysisOptions | None = None) -> AnalysisResult:
    ensure_min_length(text)
    return get_analyzer().analyze(text, options)


def run_file_analysis(
    filename: str,
    content: bytes,
    options: AnalysisOptions | None = None,
) -> AnalysisResult:
    parsed = parse_document_bytes(filename, content)
    return run_text_analysis(parsed.text, options)


def run_text_report(text: str, options: AnalysisOptions | None = None) -> str:
    return render_report(run_text_analysis(text, options))
