"""
Specificity Scorer

Gates proposed new solution names (from content generation or admin review)
before they are accepted. A name is valid only if it is specific, googleable
and passes the same filters as live search results.
"""
import re
from functools import lru_cache

from wwfm.schemas.specificity import (
    SpecificityCheck,
    InvalidSolution,
    ValidationStats,
    ValidationReport,
)
from wwfm.services.filter_rules import FilterRules, DEFAULT_RULES
from wwfm.services.solution_filter import is_valid_solution

MIN_NAME_LENGTH = 5
MAX_NAME_WORDS = 10

PROPER_NOUN = re.compile(r"[A-Z][a-z]+")
APP_WORD = re.compile(r"\b(app|App|APP)\b")
AUTHOR = re.compile(r"\bby\s+[A-Z]")
NUMERIC_PROTOCOL = re.compile(r"\d+\s*[-x]\s*\d+")        # 4-7-8, 5x5, 3 x 10
DURATION_PROTOCOL = re.compile(r"\d+\s*(minute|hour|day|week)s?")

# Curated examples used by scripts/validate_specificity.py. Several GOOD names
# still fail the current rules; run_validation_examples reports them.
GOOD_EXAMPLES = [
    "Headspace anxiety pack",
    "Calm app 7-day anxiety program",
    "BetterHelp online CBT therapy",
    "Talkspace couples counseling",
    "Couch to 5K running app",
    "StrongLifts 5x5 program",
    "You Need A Budget (YNAB) app",
    "The Five Minute Journal",
    "4-7-8 breathing technique",
    "Wim Hof Method breathing exercises",
    "Nature Made Vitamin D3 2000 IU",
    "NOW Foods Magnesium Glycinate 200mg",
    "The 7 Habits of Highly Effective People",
    "Atomic Habits by James Clear",
    "Crucial Conversations workshop",
    "Dale Carnegie public speaking course",
]

BAD_EXAMPLES = [
    "meditation",
    "therapy",
    "exercise",
    "mindfulness practice",
    "breathing exercises",
    "support groups",
    "journaling",
    "yoga",
    "counseling",
    "medication",
    "supplements",
    "self-care",
    "stress management",
    "relaxation techniques",
    "healthy diet",
]


@lru_cache()
def _blocked_forms(rules: FilterRules) -> frozenset[str]:
    # Built once per rule set
    terms = set(rules.specificity_blocked_terms) | set(rules.generic_terms)
    return frozenset(
        template.format(term=term)
        for term in terms
        for template in rules.specificity_templates
    )


def _is_sentence_case(name: str) -> bool:
    return name == name[:1].upper() + name[1:].lower()


def specificity_indicators(name: str) -> dict[str, bool]:
    """Concrete-naming signals found in a name."""
    has_numbers = bool(re.search(r"\d", name))
    has_proper_noun = bool(PROPER_NOUN.search(name)) and not _is_sentence_case(name)
    return {
        "numbers": has_numbers,
        "proper_noun": has_proper_noun,
        "brand_or_app": bool(APP_WORD.search(name)) or has_proper_noun,
        "author": bool(AUTHOR.search(name)),
        "protocol": bool(NUMERIC_PROTOCOL.search(name) or DURATION_PROTOCOL.search(name)),
    }


def check_specificity(name: str, rules: FilterRules = DEFAULT_RULES) -> SpecificityCheck:
    """
    Comprehensive check for solution specificity.

    Every failing rule is reported in failure_reasons, not just the first.
    """
    result = SpecificityCheck()
    lower_name = name.lower().strip()

    # Check 1: Is it just a blocked generic term?
    if lower_name in _blocked_forms(rules):
        result.is_specific = False
        result.failure_reasons.append(f'Too generic: "{lower_name}" needs specifics')

    # Check 2: Does it have specificity indicators?
    indicators = specificity_indicators(name)
    specificity_score = sum(indicators.values())

    if specificity_score == 0:
        result.is_specific = False
        result.is_googleable = False
        result.failure_reasons.append("No specificity indicators (numbers, brands, authors, etc.)")

    # Check 3: Would it be googleable?
    if not (indicators["proper_noun"] or indicators["numbers"] or indicators["author"]):
        result.is_googleable = False
        result.failure_reasons.append("Not googleable - needs proper nouns, numbers, or authors")

    # Check 4: Does it pass the live search filters?
    if not is_valid_solution(name, rules=rules):
        result.passes_filters = False
        result.failure_reasons.append("Blocked by platform quality filters")

    if len(name) < MIN_NAME_LENGTH:
        result.is_specific = False
        result.failure_reasons.append("Too short - needs more detail")

    if len(name.split(" ")) > MAX_NAME_WORDS:
        result.is_specific = False
        result.failure_reasons.append("Too long - should be a concise product/method name")

    return result


def validate_solutions(names: list[str], rules: FilterRules = DEFAULT_RULES) -> ValidationReport:
    """Batch validate proposed solution names."""
    valid: list[str] = []
    invalid: list[InvalidSolution] = []

    for name in names:
        check = check_specificity(name, rules)
        if check.is_valid:
            valid.append(name)
        else:
            invalid.append(InvalidSolution(name=name, reasons=check.failure_reasons))

    total = len(names)
    return ValidationReport(
        valid=valid,
        invalid=invalid,
        stats=ValidationStats(
            total=total,
            valid=len(valid),
            invalid=len(invalid),
            pass_rate=(len(valid) / total) * 100 if total else 0.0,
        ),
    )


def run_validation_examples() -> dict:
    """
    Score the validator against the curated GOOD/BAD example lists.

    Returns:
        Dict with per-list results and overall accuracy percentage
    """
    good_failures = []
    for example in GOOD_EXAMPLES:
        check = check_specificity(example)
        if not check.is_valid:
            good_failures.append({"name": example, "reasons": check.failure_reasons})

    bad_accepted = [example for example in BAD_EXAMPLES if check_specificity(example).is_valid]

    good_passed = len(GOOD_EXAMPLES) - len(good_failures)
    bad_rejected = len(BAD_EXAMPLES) - len(bad_accepted)
    total = len(GOOD_EXAMPLES) + len(BAD_EXAMPLES)

    return {
        "good_passed": good_passed,
        "good_total": len(GOOD_EXAMPLES),
        "good_failures": good_failures,
        "bad_rejected": bad_rejected,
        "bad_total": len(BAD_EXAMPLES),
        "bad_accepted": bad_accepted,
        "accuracy": (good_passed + bad_rejected) / total * 100,
    }
