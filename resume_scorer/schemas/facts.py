from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FactCategory = Literal["personal", "education", "skills", "experience", "achievements"]
ExtractionMethod = Literal["exact_pattern", "context_analysis", "semantic", "keyword_scan"]

CATEGORY_ORDER: tuple[FactCategory, ...] = (
    "personal",
    "education",
    "skills",
    "experience",
    "achievements",
)


class CandidateFact(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: FactCategory
    subcategory: str = Field(min_length=1)
    raw_text: str
    confidence: float = Field(ge=0.0, le=1.0)
    method: ExtractionMethod
    source_position: int | None = Field(default=None, ge=0)
    source_span: str = ""


class AggregatedFact(CandidateFact):
    """A fact that survived deduplication; ``duplicates`` counts the candidates it absorbed."""

    duplicates: int = Field(default=0, ge=0)
