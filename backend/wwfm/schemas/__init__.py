from wwfm.schemas.category import Category, CategoryInfo, CategoryOption
from wwfm.schemas.detection import (
    CandidateSolution,
    CategoryMatch,
    KeywordMatch,
    DetectionResult,
)
from wwfm.schemas.specificity import (
    SpecificityCheck,
    SpecificityRequest,
    InvalidSolution,
    ValidationStats,
    ValidationReport,
    ValidationRequest,
)

__all__ = [
    "Category", "CategoryInfo", "CategoryOption",
    "CandidateSolution", "CategoryMatch", "KeywordMatch", "DetectionResult",
    "SpecificityCheck", "SpecificityRequest", "InvalidSolution",
    "ValidationStats", "ValidationReport", "ValidationRequest",
]
