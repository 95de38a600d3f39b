"""
Category Detector

Maps user input to one or more solution categories with a confidence level,
using four tiers of decreasing precision:

1. Fuzzy keyword match   - best single category, high (exact) or medium (fuzzy)
2. Exact keyword match   - all matching categories, high
3. Pattern match         - all matching categories, medium
4. Partial match         - all matching categories, low (input of 3+ chars)

A tier only runs if no earlier tier found anything. Results are merged with
insert-if-absent semantics: the first tier to assign a category owns its
confidence.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from wwfm.schemas.category import Category
from wwfm.schemas.detection import CategoryMatch, Confidence
from wwfm.services.categories import CategoryRegistry, category_registry
from wwfm.services.search_backend import SearchBackend
from wwfm.services.solution_filter import normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryGuess:
    category: str
    confidence: Confidence


class CategoryTier:
    """One detection tier. Subclasses query the backend in attempt()."""

    name = "tier"
    min_length = 0

    def __init__(self, backend: SearchBackend):
        self.backend = backend

    def applies_to(self, term: str) -> bool:
        return len(term) >= self.min_length

    async def attempt(self, term: str) -> list[CategoryGuess]:
        raise NotImplementedError


class FuzzyKeywordTier(CategoryTier):
    name = "fuzzy_keyword"

    async def attempt(self, term: str) -> list[CategoryGuess]:
        best = await self.backend.match_category_fuzzy(term)
        if not best or not best.get("category"):
            return []
        confidence = "high" if best.get("match_type") == "exact" else "medium"
        return [CategoryGuess(best["category"], confidence)]


class ExactKeywordTier(CategoryTier):
    name = "exact_keyword"

    async def attempt(self, term: str) -> list[CategoryGuess]:
        hits = await self.backend.match_category_exact(term)
        return [CategoryGuess(hit["category"], "high") for hit in hits or [] if hit.get("category")]


class PatternTier(CategoryTier):
    name = "pattern"

    async def attempt(self, term: str) -> list[CategoryGuess]:
        hits = await self.backend.match_category_patterns(term)
        return [CategoryGuess(hit["category"], "medium") for hit in hits or [] if hit.get("category")]


class PartialTier(CategoryTier):
    name = "partial"
    min_length = 3

    async def attempt(self, term: str) -> list[CategoryGuess]:
        hits = await self.backend.match_category_partial(term)
        return [CategoryGuess(hit["category"], "low") for hit in hits or [] if hit.get("category")]


def default_tiers(backend: SearchBackend) -> list[CategoryTier]:
    return [
        FuzzyKeywordTier(backend),
        ExactKeywordTier(backend),
        PatternTier(backend),
        PartialTier(backend),
    ]


class CategoryDetector:
    """Runs the tiers in order and merges their guesses."""

    def __init__(
        self,
        backend: SearchBackend,
        registry: CategoryRegistry = category_registry,
        tiers: Optional[list[CategoryTier]] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.registry = registry
        self.tiers = tiers if tiers is not None else default_tiers(backend)
        self.logger = log or logger

    async def _attempt(self, tier: CategoryTier, term: str) -> list[CategoryGuess]:
        try:
            return await tier.attempt(term)
        except Exception as e:
            self.logger.error(f"Category tier '{tier.name}' failed for '{term}': {e}")
            return []

    async def detect(self, raw_input: str) -> list[CategoryMatch]:
        """
        Detect categories for the input.

        Returns:
            One CategoryMatch per category, in the order first assigned.
            Empty if nothing matched or every tier failed.
        """
        term = normalize_text(raw_input)
        if not term:
            return []

        matches: dict[Category, Confidence] = {}

        for tier in self.tiers:
            if matches:
                break
            if not tier.applies_to(term):
                continue

            for guess in await self._attempt(tier, term):
                category = self.registry.parse(guess.category)
                if category is None:
                    self.logger.warning(f"Tier '{tier.name}' returned unknown category: {guess.category}")
                    continue
                if category not in matches:
                    matches[category] = guess.confidence

            if matches:
                self.logger.debug(f"Categories for '{term}' from tier '{tier.name}': {list(matches)}")

        return [
            CategoryMatch(
                category=category,
                confidence=confidence,
                **self.registry.get_info(category).model_dump(),
            )
            for category, confidence in matches.items()
        ]
