"""
Solution Detection Service

Full pipeline for "a thing that helped":
- Searches stored solutions (fuzzy, filtered, exact/partial)
- Searches keywords that look like solution names (suggested)
- Detects categories through the tiered cascade
- Fetches keyword autocomplete suggestions

The four lookups are independent and run concurrently. Each one degrades to
an empty list on failure, so a result is always returned; such results are
flagged `degraded` so callers do not cache them. Nothing is cached
here; callers layer caching on top (see services/cache.py).
"""
import asyncio
import logging
from typing import Optional

from wwfm.schemas.detection import DetectionResult
from wwfm.services.categories import CategoryRegistry, category_registry
from wwfm.services.category_detector import CategoryDetector
from wwfm.services.filter_rules import FilterRules, DEFAULT_RULES
from wwfm.services.keyword_suggestions import KeywordSuggestionMatcher
from wwfm.services.ranking import merge_solutions, rank_solutions
from wwfm.services.search_backend import SearchBackend
from wwfm.services.solution_filter import normalize_text
from wwfm.services.solution_matcher import SolutionMatcher

logger = logging.getLogger(__name__)


class FailureRecordingBackend:
    """
    Forwards every call to the real backend and remembers which ones failed.

    Created per detection so concurrent requests never share the record.
    """

    def __init__(self, backend: SearchBackend):
        self._backend = backend
        self.failed: list[str] = []

    def __getattr__(self, operation: str):
        method = getattr(self._backend, operation)

        async def call(term: str):
            try:
                return await method(term)
            except Exception:
                self.failed.append(operation)
                raise

        return call


class DetectionService:
    """Stateless façade over the detection components. Safe to share between requests."""

    def __init__(
        self,
        backend: SearchBackend,
        rules: FilterRules = DEFAULT_RULES,
        registry: CategoryRegistry = category_registry,
        log: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.rules = rules
        self.registry = registry
        self.logger = log or logger

    def _lookup_or_empty(self, name: str, search_term: str, outcome):
        if isinstance(outcome, BaseException):
            self.logger.error(f"Error in {name} lookup for '{search_term}': {outcome}")
            return []
        return outcome

    async def detect_from_input(self, text: str) -> DetectionResult:
        """
        Classify free-text input.

        Args:
            text: Raw user input, e.g. "vitamin d" or "Headspace"

        Returns:
            DetectionResult with the original text as search_term. Empty input
            returns an empty result without querying the backend. If any
            lookup failed, the surviving lookups are still returned and the
            result is flagged as degraded.
        """
        search_term = normalize_text(text)
        if not search_term:
            return DetectionResult(search_term=text or "")

        backend = FailureRecordingBackend(self.backend)
        solutions = SolutionMatcher(backend, self.rules, self.registry, log=self.logger)
        categories = CategoryDetector(backend, self.registry, log=self.logger)
        keywords = KeywordSuggestionMatcher(backend, self.registry, log=self.logger)

        outcomes = await asyncio.gather(
            solutions.search_existing(text),
            solutions.search_keywords_as_solutions(text),
            categories.detect(text),
            keywords.search(text),
            return_exceptions=True,
        )
        names = ("existing solutions", "keyword solutions", "category", "keyword suggestion")
        existing, suggested, category_matches, keyword_matches = [
            self._lookup_or_empty(name, search_term, outcome)
            for name, outcome in zip(names, outcomes)
        ]
        degraded = bool(backend.failed) or any(isinstance(outcome, BaseException) for outcome in outcomes)

        ranked = rank_solutions(merge_solutions(existing, suggested), search_term)

        self.logger.info(
            f"Detected '{search_term}': {len(ranked)} solutions, "
            f"{len(category_matches)} categories, {len(keyword_matches)} keywords"
            + (" (degraded)" if degraded else "")
        )

        return DetectionResult(
            solutions=ranked,
            categories=category_matches,
            search_term=text,
            keyword_matches=keyword_matches,
            degraded=degraded,
        )
