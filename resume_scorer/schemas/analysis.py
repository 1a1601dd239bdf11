from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ScoreCategory = Literal["basic_info", "education", "skills", "experience", "achievements"]
SpecializationCategory = Literal["skill", "experience", "achievement"]

_PAYLOAD_KEYS: dict[str, str] = {
    "basic_info": "basicInfo",
    "education": "education",
    "skills": "skills",
    "experience": "experience",
    "achievements": "achievements",
}


class CategoryScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: ScoreCategory
    raw_total: float = Field(ge=0.0)
    capped_total: int = Field(ge=0)
    max_score: int = Field(gt=0)
    itemized: dict[str, int] = Field(default_factory=dict)
    sub_caps: dict[str, int] = Field(default_factory=dict)
    raw_items: dict[str, float] = Field(default_factory=dict)
    overflow: dict[str, float] = Field(default_factory=dict)
    evidence: dict[str, Any] = Field(default_factory=dict)

    @property
    def extra_score(self) -> dict[str, int]:
        return {sub: int(round(value)) for sub, value in self.overflow.items()}

    @property
    def overscored(self) -> bool:
        return self.capped_total > self.max_score


class Specialization(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    category: SpecializationCategory
    level: int = Field(ge=0)
    bonus: int = Field(ge=0)
    description: str


class JobRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    match: int = Field(ge=0, le=100)
    reason: str
    is_specialization: bool = False


class ScoreLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    summary: str


class ExtractionSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_facts: int = Field(default=0, ge=0)
    high_confidence_facts: int = Field(default=0, ge=0)
    duplicates_removed: int = Field(default=0, ge=0)
    coverage_score: float = Field(default=0.0, ge=0.0, le=1.0)
    quality_score: float = Field(default=0.0, ge=0.0, le=1.0)
    overall_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    semantic_used: bool = False


class AnalysisOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    use_semantic_classifier: bool = True
    semantic_timeout_seconds: float | None = Field(default=None, gt=0.0, le=60.0)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    basic_info: CategoryScore
    education: CategoryScore
    skills: CategoryScore
    experience: CategoryScore
    achievements: CategoryScore
    specializations: list[Specialization] = Field(default_factory=list)
    base_score: int = Field(ge=0)
    bonus_score: int = Field(ge=0)
    total_score: int = Field(ge=0)
    suggestions: list[str] = Field(default_factory=list)
    job_recommendations: list[JobRecommendation] = Field(default_factory=list)
    score_level: ScoreLevel
    extraction: ExtractionSummary = Field(default_factory=ExtractionSummary)
    has_good_structure: bool = False

    def category_scores(self) -> list[CategoryScore]:
        return [self.basic_info, self.education, self.skills, self.experience, self.achievements]

    def to_payload(self) -> dict[str, Any]:
        """Render the camelCase payload consumed by the report UI."""
        return {
            "baseScore": self.base_score,
            "specializationBonus": self.bonus_score,
            "totalScore": self.total_score,
            "categoryScores": {
                _PAYLOAD_KEYS[score.category]: {
                    "total": score.capped_total,
                    "details": dict(score.itemized),
                    "extraScore": score.extra_score,
                }
                for score in self.category_scores()
            },
            "specializations": [
                {
                    "type": spec.type,
                    "category": spec.category,
                    "bonus": spec.bonus,
                    "description": spec.description,
                }
                for spec in self.specializations
            ],
            "suggestions": list(self.suggestions),
            "jobRecommendations": [
                {"category": job.category, "match": job.match, "reason": job.reason}
                for job in self.job_recommendations
            ],
            "scoreLevel": {"label": self.score_level.label, "summary": self.score_level.summary},
            "extraction": {
                "totalFacts": self.extraction.total_facts,
                "highConfidenceFacts": self.extraction.high_confidence_facts,
                "duplicatesRemoved": self.extraction.duplicates_removed,
                "coverageScore": self.extraction.coverage_score,
                "qualityScore": self.extraction.quality_score,
                "overallConfidence": self.extraction.overall_confidence,
                "semanticUsed": self.extraction.semantic_used,
            },
            "hasGoodStructure": self.has_good_structure,
        }
