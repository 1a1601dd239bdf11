from contextlib import asynccontextmanager
import logging

from resume_scorer.core.config.rules import get_default_rulebook
from resume_scorer.services.analysis_service import get_analyzer
from resume_scorer.taxonomy import get_default_school_ranks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    rulebook = get_default_rulebook()
    get_default_school_ranks()
    analyzer = get_analyzer()
    logger.info(
        "scoring_tables_warmed version=%s semantic_classifier=%s",
        rulebook.version,
        analyzer.classifier is not None,
    )
    yield
