"""Shared fixtures: an in-memory SearchBackend with scripted responses."""
import pytest

from wwfm.services.detection import DetectionService


class FakeSearchBackend:
    """
    Returns canned rows per contract and records every call.

    Set an attribute to an Exception instance to make that contract fail.
    """

    def __init__(
        self,
        solutions=None,
        fuzzy=None,
        exact=None,
        patterns=None,
        partial=None,
        keyword_solutions=None,
        suggestions=None,
    ):
        self.solutions = solutions or []
        self.fuzzy = fuzzy
        self.exact = exact or []
        self.patterns = patterns or []
        self.partial = partial or []
        self.keyword_solutions = keyword_solutions or []
        self.suggestions = suggestions or []
        self.calls: list[tuple[str, str]] = []

    def _respond(self, operation, term, value):
        self.calls.append((operation, term))
        if isinstance(value, Exception):
            raise value
        return value

    async def search_solutions(self, term):
        return self._respond("search_solutions", term, self.solutions)

    async def match_category_fuzzy(self, term):
        return self._respond("match_category_fuzzy", term, self.fuzzy)

    async def match_category_exact(self, term):
        return self._respond("match_category_exact", term, self.exact)

    async def match_category_patterns(self, term):
        return self._respond("match_category_patterns", term, self.patterns)

    async def match_category_partial(self, term):
        return self._respond("match_category_partial", term, self.partial)

    async def search_keywords_as_solutions(self, term):
        return self._respond("search_keywords_as_solutions", term, self.keyword_solutions)

    async def search_keyword_suggestions(self, term):
        return self._respond("search_keyword_suggestions", term, self.suggestions)

    def called(self, operation: str) -> bool:
        return any(name == operation for name, _ in self.calls)


def solution_row(id, title, category="supplements_vitamins", match_score=0.8):
    return {"id": id, "title": title, "category": category, "match_score": match_score}


@pytest.fixture
def fake_backend():
    return FakeSearchBackend()


@pytest.fixture
def make_service():
    def _make(**rows):
        backend = FakeSearchBackend(**rows)
        return DetectionService(backend), backend
    return _make
