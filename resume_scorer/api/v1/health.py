from fastapi import APIRouter

from resume_scorer.core.config.rules import get_default_rulebook

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "rules_version": get_default_rulebook().version}
