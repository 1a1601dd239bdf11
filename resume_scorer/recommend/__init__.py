from .jobs import recommend_jobs
from .suggestions import generate_suggestions

__all__ = ["recommend_jobs", "generate_suggestions"]
