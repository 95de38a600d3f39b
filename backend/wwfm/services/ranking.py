"""
Result Aggregation & Ranking

Merges stored-solution matches with keyword-derived suggestions and orders
them for display:
1. Title equals the query (case-insensitive)
2. Title starts with the query
3. Query starts a later word (after a space or hyphen)
4. Higher match score, when both have one
5. Alphabetical title
"""
from functools import cmp_to_key

from wwfm.schemas.detection import CandidateSolution


def merge_solutions(
    existing: list[CandidateSolution],
    suggested: list[CandidateSolution],
) -> list[CandidateSolution]:
    """Append suggestions whose title is not already present (case-insensitive)."""
    merged = list(existing)
    seen = {solution.title.lower() for solution in existing}

    for suggestion in suggested:
        key = suggestion.title.lower()
        if key in seen:
            continue
        seen.add(key)
        merged.append(suggestion)

    return merged


def _relevance_flags(title: str, query: str) -> tuple[bool, bool, bool]:
    return (
        title == query,
        title.startswith(query),
        f" {query}" in title or f"-{query}" in title,
    )


def _compare(a: CandidateSolution, b: CandidateSolution, query: str) -> int:
    a_title, b_title = a.title.lower(), b.title.lower()

    for a_flag, b_flag in zip(_relevance_flags(a_title, query), _relevance_flags(b_title, query)):
        if a_flag != b_flag:
            return -1 if a_flag else 1

    if a.match_score is not None and b.match_score is not None and a.match_score != b.match_score:
        return -1 if a.match_score > b.match_score else 1

    if a_title != b_title:
        return -1 if a_title < b_title else 1
    if a.title != b.title:
        return -1 if a.title < b.title else 1
    return 0


def rank_solutions(solutions: list[CandidateSolution], query: str) -> list[CandidateSolution]:
    """Sort candidates for display against the normalized query."""
    query = query.lower()
    return sorted(solutions, key=cmp_to_key(lambda a, b: _compare(a, b, query)))
