"""Keyword autocomplete suggestions."""
import logging
from typing import Optional

from wwfm.schemas.detection import KeywordMatch
from wwfm.services.categories import CategoryRegistry, category_registry
from wwfm.services.search_backend import SearchBackend

logger = logging.getLogger(__name__)

# Only show decent matches
MIN_KEYWORD_SCORE = 0.5


class KeywordSuggestionMatcher:

    def __init__(
        self,
        backend: SearchBackend,
        registry: CategoryRegistry = category_registry,
        min_score: float = MIN_KEYWORD_SCORE,
        log: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.registry = registry
        self.min_score = min_score
        self.logger = log or logger

    async def search(self, raw_input: str) -> list[KeywordMatch]:
        """Autocomplete keywords scoring above min_score. Empty on backend failure."""
        if not raw_input or not raw_input.strip():
            return []

        try:
            rows = await self.backend.search_keyword_suggestions(raw_input)
        except Exception as e:
            self.logger.error(f"Error searching keyword suggestions for '{raw_input}': {e}")
            return []

        matches = []
        for row in rows or []:
            score = row.get("match_score") or 0.0
            if score <= self.min_score:
                continue

            category = self.registry.parse(row.get("category"))
            if category is None:
                self.logger.warning(f"Dropping keyword '{row.get('keyword')}' with unknown category: {row.get('category')}")
                continue

            matches.append(KeywordMatch(
                keyword=row.get("keyword") or "",
                category=category,
                category_display_name=self.registry.get_display_name(category),
                match_score=score,
            ))

        return matches
