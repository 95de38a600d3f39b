from typing import Literal

from pydantic import BaseModel, Field

from wwfm.schemas.category import Category

MatchType = Literal["exact", "partial", "suggested"]
Confidence = Literal["high", "medium", "low"]


class CandidateSolution(BaseModel):
    id: str
    title: str
    category: Category
    category_display_name: str
    match_type: MatchType
    match_score: float | None = None


class CategoryMatch(BaseModel):
    category: Category
    confidence: Confidence
    display_name: str
    description: str


class KeywordMatch(BaseModel):
    keyword: str
    category: Category
    category_display_name: str
    match_score: float


class DetectionResult(BaseModel):
    solutions: list[CandidateSolution] = []
    categories: list[CategoryMatch] = []
    search_term: str = ""
    keyword_matches: list[KeywordMatch] = []
    # Set when a lookup failed; never serialized, so cached and API payloads omit it
    degraded: bool = Field(default=False, exclude=True)
