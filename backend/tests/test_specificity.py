import dataclasses

import pytest

from wwfm.services.filter_rules import DEFAULT_RULES, GENERIC_TERMS, SPECIFICITY_BLOCKED_TERMS
from wwfm.services.specificity import (
    BAD_EXAMPLES,
    _blocked_forms,
    GOOD_EXAMPLES,
    check_specificity,
    run_validation_examples,
    specificity_indicators,
    validate_solutions,
)


@pytest.mark.parametrize("term", sorted(set(SPECIFICITY_BLOCKED_TERMS) | GENERIC_TERMS))
def test_blocked_terms_are_not_specific(term):
    assert check_specificity(term).is_specific is False


@pytest.mark.parametrize("name", ["try yoga", "practice meditation", "Mindfulness Practice", "breathing exercises"])
def test_templated_generic_forms_are_not_specific(name):
    check = check_specificity(name)
    assert check.is_specific is False
    assert any(reason.startswith("Too generic") for reason in check.failure_reasons)


# Curated good names that the current rules still reject, with the rule responsible
KNOWN_GOOD_REJECTIONS = {
    "Headspace anxiety pack": "No specificity indicators (numbers, brands, authors, etc.)",
    "Calm app 7-day anxiety program": "Blocked by platform quality filters",
    "BetterHelp online CBT therapy": "Blocked by platform quality filters",
    "Talkspace couples counseling": "No specificity indicators (numbers, brands, authors, etc.)",
    "StrongLifts 5x5 program": "Blocked by platform quality filters",
    "Wim Hof Method breathing exercises": "Blocked by platform quality filters",
}


@pytest.mark.parametrize("name", [name for name in GOOD_EXAMPLES if name not in KNOWN_GOOD_REJECTIONS])
def test_good_examples_pass(name):
    check = check_specificity(name)
    assert check.is_specific, check.failure_reasons
    assert check.is_googleable, check.failure_reasons
    assert check.passes_filters, check.failure_reasons
    assert check.failure_reasons == []


@pytest.mark.parametrize("name", ["Nature Made Vitamin D3 2000 IU", "Couch to 5K running app"])
def test_branded_and_numbered_names_pass(name):
    check = check_specificity(name)
    assert check.is_specific and check.is_googleable and check.passes_filters


@pytest.mark.parametrize("name", BAD_EXAMPLES)
def test_bad_examples_fail(name):
    assert not check_specificity(name).is_valid


def test_no_indicators_is_neither_specific_nor_googleable():
    check = check_specificity("stress management")
    assert check.is_specific is False
    assert check.is_googleable is False
    assert "No specificity indicators (numbers, brands, authors, etc.)" in check.failure_reasons


def test_app_word_alone_is_not_googleable():
    # Brand signal without a proper noun or number
    check = check_specificity("sleep tracking app")
    assert check.is_specific is True
    assert check.is_googleable is False


def test_sentence_case_is_not_a_proper_noun():
    assert specificity_indicators("Running shoes")["proper_noun"] is False
    assert specificity_indicators("Running Shoes")["proper_noun"] is True


def test_indicators():
    indicators = specificity_indicators("Atomic Habits by James Clear")
    assert indicators["author"] is True
    assert indicators["numbers"] is False
    assert specificity_indicators("StrongLifts 5x5")["protocol"] is True
    assert specificity_indicators("walk 30 minutes daily")["protocol"] is True


def test_too_short_and_too_long():
    assert "Too short - needs more detail" in check_specificity("B12").failure_reasons

    long_name = "The One Very Long Name For A Product That Keeps Going On Forever"
    check = check_specificity(long_name)
    assert check.is_specific is False
    assert "Too long - should be a concise product/method name" in check.failure_reasons


def test_failure_reasons_accumulate():
    check = check_specificity("yoga")
    assert len(check.failure_reasons) >= 4
    assert check.passes_filters is False


def test_filter_failure_reported():
    check = check_specificity("Diabetes Medications")
    assert check.passes_filters is False
    assert "Blocked by platform quality filters" in check.failure_reasons


def test_validate_solutions_splits_batch():
    report = validate_solutions(["Atomic Habits by James Clear", "therapy", "Couch to 5K running app", "yoga"])

    assert report.valid == ["Atomic Habits by James Clear", "Couch to 5K running app"]
    assert [item.name for item in report.invalid] == ["therapy", "yoga"]
    assert all(item.reasons for item in report.invalid)
    assert report.stats.total == 4
    assert report.stats.valid == 2
    assert report.stats.invalid == 2
    assert report.stats.pass_rate == 50.0


def test_validate_empty_batch():
    report = validate_solutions([])
    assert report.stats.total == 0
    assert report.stats.pass_rate == 0.0


@pytest.mark.parametrize("name, reason", sorted(KNOWN_GOOD_REJECTIONS.items()))
def test_known_good_rejections(name, reason):
    check = check_specificity(name)
    assert not check.is_valid
    assert reason in check.failure_reasons


def test_curated_examples_report_real_accuracy():
    results = run_validation_examples()

    assert results["good_total"] == 16
    assert {failure["name"] for failure in results["good_failures"]} == set(KNOWN_GOOD_REJECTIONS)
    assert results["good_passed"] == 10
    assert results["bad_accepted"] == []
    assert results["bad_rejected"] == results["bad_total"] == 15
    assert results["accuracy"] == pytest.approx(25 / 31 * 100)


def test_blocked_forms_built_once_per_rule_set():
    assert _blocked_forms(DEFAULT_RULES) is _blocked_forms(DEFAULT_RULES)
    assert "try yoga" in _blocked_forms(DEFAULT_RULES)


def test_custom_rules_get_their_own_blocked_forms():
    rules = dataclasses.replace(
        DEFAULT_RULES,
        specificity_blocked_terms=DEFAULT_RULES.specificity_blocked_terms + ("cold plunge",),
    )
    custom = check_specificity("try cold plunge", rules).failure_reasons
    default = check_specificity("try cold plunge").failure_reasons
    assert any(reason.startswith("Too generic") for reason in custom)
    assert not any(reason.startswith("Too generic") for reason in default)
