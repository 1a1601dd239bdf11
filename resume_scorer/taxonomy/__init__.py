from functools import lru_cache

from .provider import SchoolMatch, SchoolRankProvider
from .school_ranks import LocalSchoolRanks, clean_school_name


@lru_cache(maxsize=1)
def get_default_school_ranks() -> SchoolRankProvider:
    return LocalSchoolRanks()


__all__ = [
    "SchoolMatch",
    "SchoolRankProvider",
    "LocalSchoolRanks",
    "clean_school_name",
    "get_default_school_ranks",
]
