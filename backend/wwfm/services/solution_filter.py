"""
Solution Filter Service

Decides whether a candidate title (from the solution store or from keyword
suggestions) names a specific solution rather than a category.

Checks, in order:
1. Exact generic-term blocklist
2. Bare "vitamin" query: drop everything containing "vitamin"
3. Allowed exceptions ("Vitamin D", "B12", "Omega-3") pass immediately
4. Category-suffix patterns ("Sleep Medications", "Career Counseling")
5. Therapy names without a brand/number indicator
6. Single-word generics ("Yoga", "Therapy")
"""
import logging
import re

from wwfm.services.filter_rules import FilterRules, DEFAULT_RULES

logger = logging.getLogger(__name__)

CAMEL_CASE_BRAND = re.compile(r"^[A-Z][a-z]+[A-Z]")  # BetterHelp, TalkSpace
SPECIFIC_MARKERS = re.compile(r"[-0-9]")


def normalize_text(text: str | None) -> str:
    """Trim, lowercase and collapse whitespace."""
    if not text:
        return ""
    return " ".join(text.lower().split())


def _has_specific_indicators(title: str) -> bool:
    return bool(
        SPECIFIC_MARKERS.search(title)
        or CAMEL_CASE_BRAND.search(title)
        or "®" in title
        or "™" in title
    )


def _is_vitamin_special_case(lower_title: str, search_term: str, rules: FilterRules) -> bool:
    return normalize_text(search_term) in rules.vitamin_queries and "vitamin" in lower_title


def is_valid_solution(
    title: str,
    search_term: str = "",
    rules: FilterRules = DEFAULT_RULES,
    therapy_keywords: tuple[str, ...] | None = None,
) -> bool:
    """
    Check whether a title is an acceptable, specific solution name.

    Args:
        title: Candidate title as stored (case is significant for brand checks)
        search_term: The user's query; only used for the bare "vitamin" rule
        rules: Rule tables to apply
        therapy_keywords: Override for the therapy-word list (suggestions use a wider one)

    Returns:
        True if no rule rejects the title
    """
    if not title:
        return False

    lower_title = title.lower().strip()

    if lower_title in rules.generic_terms:
        logger.debug(f"Filtered out generic term: {title}")
        return False

    if _is_vitamin_special_case(lower_title, search_term, rules):
        logger.debug(f"Filtered out vitamin result for bare vitamin query: {title}")
        return False

    if any(pattern.search(title) for pattern in rules.allowed_exceptions):
        return True

    if any(pattern.search(title) for pattern in rules.category_patterns):
        logger.debug(f"Filtered out category-like name: {title}")
        return False

    keywords = therapy_keywords if therapy_keywords is not None else rules.therapy_keywords
    if any(keyword in lower_title for keyword in keywords):
        if not _has_specific_indicators(title):
            logger.debug(f"Filtered out generic therapy name: {title}")
            return False

    if " " not in title and "-" not in title:
        if lower_title in rules.single_word_generics:
            logger.debug(f"Filtered out single-word generic: {title}")
            return False

    return True


def is_valid_suggestion(
    name: str,
    search_term: str = "",
    rules: FilterRules = DEFAULT_RULES,
) -> bool:
    """
    Stricter variant for keyword-derived suggestions.

    Keywords are not curated solutions, so they also go through the
    suggestion-only blocklist and generic suffix patterns first.
    """
    if not name:
        return False

    lower_name = name.lower().strip()
    if lower_name in rules.suggestion_only_terms:
        logger.debug(f"Filtered out generic keyword: {name}")
        return False

    if any(pattern.search(name) for pattern in rules.suggestion_patterns):
        logger.debug(f"Filtered out keyword by pattern: {name}")
        return False

    return is_valid_solution(
        name,
        search_term,
        rules,
        therapy_keywords=rules.suggestion_therapy_keywords,
    )
