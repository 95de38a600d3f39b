"""
Solution Filter Rules

Versioned rule tables used to reject generic or category-like names:
- Exact-match blocklist of generic terms (categories, therapy modalities)
- Category-suffix patterns ("Diabetes Medications", "Career Counseling")
- Allowed exceptions for short but specific names ("Vitamin D", "B12", "Omega-3")

The tables are code constants. Bump RULES_VERSION when changing them.
"""
import re
from dataclasses import dataclass

RULES_VERSION = "2025.09.1"

# Generic terms that must never be shown as solutions
GENERIC_TERMS = frozenset([
    # Generic therapy terms
    "therapy", "therapist", "counseling", "counselor", "treatment",
    "psychotherapy", "therapies", "therapeutic",

    # Therapy types that are categories, not solutions
    "cbt", "dbt", "emdr", "art therapy", "music therapy", "play therapy",
    "cbt therapy", "dbt therapy", "emdr therapy", "cognitive behavioral therapy",
    "dialectical behavior therapy", "eye movement desensitization and reprocessing",
    "family therapy", "group therapy", "individual therapy", "couples therapy",
    "marriage counseling", "grief counseling", "trauma therapy", "talk therapy",
    "dance therapy", "drama therapy", "nature therapy", "friendship therapy",
    "pet therapy", "equine therapy", "animal assisted therapy", "expressive therapy",
    "somatic therapy", "gestalt therapy", "psychodynamic therapy", "humanistic therapy",
    "integrative therapy", "solution focused therapy", "narrative therapy",
    "acceptance and commitment therapy", "act", "interpersonal therapy",
    "psychoanalytic therapy", "behavioral therapy", "cognitive therapy",

    # Other generic terms
    "medication", "medicine", "drug", "prescription",
    "supplement", "vitamin", "mineral", "herb", "herbal",
    "exercise", "workout", "fitness", "training", "activity",
    "program", "method", "technique", "practice", "approach",
])

# Extra terms only rejected for keyword-derived suggestions
SUGGESTION_ONLY_TERMS = frozenset([
    "session", "appointment", "consultation", "meeting",
])

# Terms a proposed solution name must not consist of (alone or templated)
SPECIFICITY_BLOCKED_TERMS = (
    # Therapy & counseling
    "therapy", "counseling", "counselor", "therapist", "psychotherapy",
    "talk therapy", "mental health support", "professional help",

    # Medical
    "medication", "medicine", "prescription", "drug", "pharmaceutical",
    "doctor", "physician", "psychiatrist", "medical professional",

    # Wellness
    "meditation", "mindfulness", "breathing", "relaxation", "yoga",
    "exercise", "workout", "fitness", "physical activity",

    # Supplements
    "supplement", "vitamin", "mineral", "nutrient", "natural remedy",
    "herb", "herbal", "holistic", "alternative medicine",

    # Support
    "support group", "community", "group therapy", "peer support",
    "online community", "forum", "social support",

    # Self-help
    "self-help", "self-care", "personal development", "self-improvement",
    "journaling", "reflection", "introspection", "awareness",

    # Diet
    "diet", "nutrition", "eating plan", "meal plan", "food",
    "healthy eating", "dietary changes", "nutritional support",
)

# Templated forms of a blocked term that are still generic ("try yoga")
SPECIFICITY_TEMPLATES = (
    "{term}",
    "try {term}",
    "practice {term}",
    "{term} practice",
    "{term} exercises",
    "{term} techniques",
)

# Short names that are specific enough on their own
ALLOWED_EXCEPTION_PATTERNS = (
    r"^vitamin\s+[a-z0-9]+$",  # Vitamin D, Vitamin B12
    r"^b[0-9]+$",              # B12, B6
    r"^omega[-\s]?[0-9]+$",    # Omega-3, Omega 3
)

# Category-like names, e.g. "Diabetes Medications", "Vitamin C Serum"
CATEGORY_PATTERNS = (
    r"\b(medications?|medicines?|drugs?)$",
    r"\b(medications?|medicines?|drugs?)\s*\(",
    r"\bmedicines?\b.*\(",
    r"\bmedications?\b.*\(",
    r"^\w+\s+medications?\b",
    r"\b(supplements?|vitamins?)$",
    r"\b(supplementation)$",
    r"\b(therap(y|ies)|treatments?)$",
    r"\b(counseling)$",
    r"^\w+\s+counseling\b",
    r"\b(exercises?|workouts?|programs?)$",
    r"\b(remedies|solutions?)$",
    r"^(general|generic|common|typical|standard)\b",
    r"\b(strategy|strategies|approach|approaches|method|methods)$",
    r"\b(protocol|protocols)$",
    r"\b(serum|serums)$",
    r"^(anti-|non-)",
    r"\((non-|anti-)[^)]+\)",
)

# Generic suffixes that keyword suggestions must not end with
SUGGESTION_PATTERNS = (
    r"^therapy$", r"\stherapy$",
    r"^counseling$", r"\scounseling$",
    r"^treatment$", r"\streatment$",
    r"^medication$", r"\smedications?$",
    r"^medicine$", r"\smedicines?$",
    r"^supplement$", r"\ssupplements?$",
    r"^vitamin$", r"\svitamins?$",
    r"^exercise$", r"\sexercises?$",
    r"^workout$", r"\sworkouts?$",
    r"\straining$",
    r"\sprograms?$",
    r"\smethods?$",
    r"\stechniques?$",
    r"\spractices?$",
    r"\sapproach(es)?$",
    r"^therapist$", r"\stherapists?$",
    r"^drug$", r"\sdrugs?$",
    r"^remedy$", r"\sremed(y|ies)$",
)

THERAPY_KEYWORDS = ("therapy", "therapist")
SUGGESTION_THERAPY_KEYWORDS = ("therapy", "therapist", "counseling", "counselor", "therapeutic")

SINGLE_WORD_GENERICS = frozenset([
    "therapy", "therapist", "counseling", "medication",
    "supplement", "vitamin", "exercise", "meditation",
    "yoga", "pilates", "mindfulness", "diet",
])

# Bare queries that must not surface anything containing "vitamin"
VITAMIN_QUERIES = frozenset(["vitamin", "vitamins"])


def _compile(patterns: tuple[str, ...]) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True)
class FilterRules:
    """Immutable bundle of rule tables, injected into the filter and scorer."""

    version: str
    generic_terms: frozenset
    suggestion_only_terms: frozenset
    specificity_blocked_terms: tuple[str, ...]
    specificity_templates: tuple[str, ...]
    allowed_exceptions: tuple[re.Pattern, ...]
    category_patterns: tuple[re.Pattern, ...]
    suggestion_patterns: tuple[re.Pattern, ...]
    therapy_keywords: tuple[str, ...]
    suggestion_therapy_keywords: tuple[str, ...]
    single_word_generics: frozenset
    vitamin_queries: frozenset


DEFAULT_RULES = FilterRules(
    version=RULES_VERSION,
    generic_terms=GENERIC_TERMS,
    suggestion_only_terms=SUGGESTION_ONLY_TERMS,
    specificity_blocked_terms=SPECIFICITY_BLOCKED_TERMS,
    specificity_templates=SPECIFICITY_TEMPLATES,
    allowed_exceptions=_compile(ALLOWED_EXCEPTION_PATTERNS),
    category_patterns=_compile(CATEGORY_PATTERNS),
    suggestion_patterns=_compile(SUGGESTION_PATTERNS),
    therapy_keywords=THERAPY_KEYWORDS,
    suggestion_therapy_keywords=SUGGESTION_THERAPY_KEYWORDS,
    single_word_generics=SINGLE_WORD_GENERICS,
    vitamin_queries=VITAMIN_QUERIES,
)
