from .achievements import score_achievements
from .basic_info import score_basic_info
from .common import round_half_up
from .education import score_education
from .experience import score_experience
from .skills import score_skills
from .specialization import detect_specializations

__all__ = [
    "score_basic_info",
    "score_education",
    "score_skills",
    "score_experience",
    "score_achievements",
    "detect_specializations",
    "round_half_up",
]
