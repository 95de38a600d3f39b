"""
Search Backend Contracts

The fuzzy matching itself lives in the database (Postgres functions behind
Supabase). Detection code only talks to it through this narrow interface, so
the transport (PostgREST over HTTP, or direct SQL) can be swapped freely.
"""
from typing import Optional, Protocol, TypedDict


class CollaboratorUnavailable(Exception):
    """A single backend query failed (network, database or payload error)."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Search backend call '{operation}' failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SolutionHit(TypedDict):
    id: str
    title: str
    category: str
    match_score: Optional[float]  # None when the function returns no score


class FuzzyCategoryHit(TypedDict):
    category: str
    match_type: str  # "exact" or "fuzzy"


class CategoryHit(TypedDict):
    category: str


class KeywordSolutionHit(TypedDict):
    solution_name: str
    category: str
    is_likely_solution: bool


class KeywordSuggestionHit(TypedDict):
    keyword: str
    category: str
    match_score: Optional[float]


class SearchBackend(Protocol):
    """One async method per remote query."""

    async def search_solutions(self, term: str) -> list[SolutionHit]:
        ...

    async def match_category_fuzzy(self, term: str) -> Optional[FuzzyCategoryHit]:
        ...

    async def match_category_exact(self, term: str) -> list[CategoryHit]:
        ...

    async def match_category_patterns(self, term: str) -> list[CategoryHit]:
        ...

    async def match_category_partial(self, term: str) -> list[CategoryHit]:
        ...

    async def search_keywords_as_solutions(self, term: str) -> list[KeywordSolutionHit]:
        ...

    async def search_keyword_suggestions(self, term: str) -> list[KeywordSuggestionHit]:
        ...


# Remote function name and argument name for each contract
RPC_FUNCTIONS = {
    "search_solutions": ("search_solutions_fuzzy", "search_term"),
    "match_category_fuzzy": ("check_keyword_match_fuzzy", "search_term"),
    "match_category_exact": ("check_keyword_match", "search_term"),
    "match_category_patterns": ("match_category_patterns", "input_text"),
    "match_category_partial": ("match_category_partial", "input_text"),
    "search_keywords_as_solutions": ("search_keywords_as_solutions", "search_term"),
    "search_keyword_suggestions": ("search_keywords_for_autocomplete", "search_term"),
}


def _score(value) -> Optional[float]:
    return float(value) if value is not None else None


def to_solution_hit(row: dict) -> SolutionHit:
    """The solutions table calls its category column solution_category."""
    return SolutionHit(
        id=str(row["id"]),
        title=row["title"],
        category=row.get("category") or row.get("solution_category"),
        match_score=_score(row.get("match_score")),
    )


class RpcSearchBackend:
    """
    Shared mapping from contracts to remote function rows.

    Subclasses implement _call(operation, term) returning the raw rows.
    """

    async def _call(self, operation: str, term: str) -> list[dict]:
        raise NotImplementedError

    async def _rows(self, operation: str, term: str) -> list[dict]:
        rows = await self._call(operation, term)
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise CollaboratorUnavailable(operation, f"unexpected payload {type(rows).__name__}")
        return rows

    async def search_solutions(self, term: str) -> list[SolutionHit]:
        rows = await self._rows("search_solutions", term)
        try:
            return [to_solution_hit(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise CollaboratorUnavailable("search_solutions", f"malformed row: {e}") from e

    async def match_category_fuzzy(self, term: str) -> Optional[FuzzyCategoryHit]:
        rows = await self._rows("match_category_fuzzy", term)
        if not rows:
            return None
        best = rows[0]
        return FuzzyCategoryHit(category=best.get("category"), match_type=best.get("match_type", "fuzzy"))

    async def match_category_exact(self, term: str) -> list[CategoryHit]:
        return [CategoryHit(category=row.get("category")) for row in await self._rows("match_category_exact", term)]

    async def match_category_patterns(self, term: str) -> list[CategoryHit]:
        return [CategoryHit(category=row.get("category")) for row in await self._rows("match_category_patterns", term)]

    async def match_category_partial(self, term: str) -> list[CategoryHit]:
        return [CategoryHit(category=row.get("category")) for row in await self._rows("match_category_partial", term)]

    async def search_keywords_as_solutions(self, term: str) -> list[KeywordSolutionHit]:
        rows = await self._rows("search_keywords_as_solutions", term)
        return [
            KeywordSolutionHit(
                solution_name=row.get("solution_name") or "",
                category=row.get("category"),
                is_likely_solution=bool(row.get("is_likely_solution")),
            )
            for row in rows
        ]

    async def search_keyword_suggestions(self, term: str) -> list[KeywordSuggestionHit]:
        rows = await self._rows("search_keyword_suggestions", term)
        return [
            KeywordSuggestionHit(
                keyword=row.get("keyword") or "",
                category=row.get("category"),
                match_score=_score(row.get("match_score")),
            )
            for row in rows
        ]
