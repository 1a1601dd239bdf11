from .analysis import (
    AnalysisOptions,
    AnalysisResult,
    CategoryScore,
    ExtractionSummary,
    JobRecommendation,
    ScoreLevel,
    Specialization,
)
from .facts import CATEGORY_ORDER, AggregatedFact, CandidateFact

__all__ = [
    "CATEGORY_ORDER",
    "CandidateFact",
    "AggregatedFact",
    "CategoryScore",
    "Specialization",
    "JobRecommendation",
    "ScoreLevel",
    "ExtractionSummary",
    "AnalysisOptions",
    "AnalysisResult",
]
