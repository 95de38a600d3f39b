"""
Solution Matching Service

Finds already-known solutions for raw user input, and keyword rows that look
like solution names but are not stored as solutions yet.

Every hit goes through the solution filter so that category names
("Sleep Medications") and generic terms ("Therapy") never reach the user.
"""
import logging
from functools import cmp_to_key
from typing import Optional

from wwfm.schemas.detection import CandidateSolution
from wwfm.services.categories import CategoryRegistry, category_registry
from wwfm.services.filter_rules import FilterRules, DEFAULT_RULES
from wwfm.services.search_backend import SearchBackend
from wwfm.services.solution_filter import normalize_text, is_valid_solution, is_valid_suggestion

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 1.0
SUGGESTION_ID_PREFIX = "keyword-"


def _compare_matches(a: CandidateSolution, b: CandidateSolution) -> int:
    # Score first, but only when both sides have one
    if a.match_score is not None and b.match_score is not None and a.match_score != b.match_score:
        return -1 if a.match_score > b.match_score else 1
    # Then exact before partial
    if a.match_type == "exact" and b.match_type != "exact":
        return -1
    if a.match_type != "exact" and b.match_type == "exact":
        return 1
    # Shorter titles are usually the canonical name
    return len(a.title) - len(b.title)


def sort_matches(matches: list[CandidateSolution]) -> list[CandidateSolution]:
    return sorted(matches, key=cmp_to_key(_compare_matches))


class SolutionMatcher:
    """Existing-solution and keyword-as-solution lookups."""

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

    async def search_existing(self, raw_input: str) -> list[CandidateSolution]:
        """
        Search stored solutions matching the input.

        Returns:
            Filtered matches, best first. Empty if the backend fails.
        """
        search_term = normalize_text(raw_input)
        if not search_term:
            return []

        try:
            hits = await self.backend.search_solutions(search_term)
        except Exception as e:
            self.logger.error(f"Error searching solutions for '{search_term}': {e}")
            return []

        matches = []
        for hit in hits or []:
            title = hit.get("title") or ""
            if not is_valid_solution(title, search_term, self.rules):
                continue

            category = self.registry.parse(hit.get("category"))
            if category is None:
                self.logger.warning(f"Dropping solution '{title}' with unknown category: {hit.get('category')}")
                continue

            score = hit.get("match_score")
            matches.append(CandidateSolution(
                id=str(hit.get("id")),
                title=title,
                category=category,
                category_display_name=self.registry.get_display_name(category),
                match_type="exact" if score is not None and score >= EXACT_MATCH_SCORE else "partial",
                match_score=score,
            ))

        return sort_matches(matches)

    async def search_keywords_as_solutions(self, raw_input: str) -> list[CandidateSolution]:
        """
        Keyword rows flagged as likely solution names, as "suggested" candidates.

        The backend receives the raw input; filtering uses the normalized term.
        """
        search_term = normalize_text(raw_input)
        if not search_term:
            return []

        try:
            rows = await self.backend.search_keywords_as_solutions(raw_input)
        except Exception as e:
            self.logger.error(f"Error searching keywords as solutions for '{search_term}': {e}")
            return []

        suggestions = []
        for row in rows or []:
            name = row.get("solution_name") or ""
            if not is_valid_suggestion(name, search_term, self.rules):
                continue
            if not row.get("is_likely_solution"):
                continue

            category = self.registry.parse(row.get("category"))
            if category is None:
                self.logger.warning(f"Dropping keyword '{name}' with unknown category: {row.get('category')}")
                continue

            suggestions.append(CandidateSolution(
                id=f"{SUGGESTION_ID_PREFIX}{name}",
                title=name,
                category=category,
                category_display_name=self.registry.get_display_name(category),
                match_type="suggested",
            ))

        return suggestions
