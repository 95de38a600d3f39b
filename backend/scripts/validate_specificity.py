"""
Validate Solution Specificity Script

Checks proposed solution names (e.g. AI-generated ones) against the
specificity rules before they are imported.

Run with:
    python -m scripts.validate_specificity                 # curated examples
    python -m scripts.validate_specificity names.txt       # one name per line
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wwfm.services.filter_rules import DEFAULT_RULES
from wwfm.services.specificity import validate_solutions, run_validation_examples


def run_examples():
    """Score the validator on the curated good/bad examples."""
    print(f"Testing specificity validator (rules {DEFAULT_RULES.version})")
    print("=" * 60)

    results = run_validation_examples()

    print(f"\nGood examples: {results['good_passed']}/{results['good_total']} passed")
    for failure in results["good_failures"]:
        print(f"  FAILED: '{failure['name']}'")
        print(f"    Reasons: {', '.join(failure['reasons'])}")

    print(f"Bad examples: {results['bad_rejected']}/{results['bad_total']} correctly rejected")
    for name in results["bad_accepted"]:
        print(f"  ACCEPTED: '{name}'")

    print("-" * 60)
    print(f"Overall accuracy: {results['accuracy']:.1f}%")
    # Fail only when a generic name slips through; good-list misses are printed above
    return not results["bad_accepted"]


def validate_file(path: Path):
    """Validate every non-empty line of a file."""
    names = [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
    print(f"Validating {len(names)} solution names from {path}")
    print("=" * 60)

    report = validate_solutions(names)

    for item in report.invalid:
        print(f"  INVALID: '{item.name}'")
        for reason in item.reasons:
            print(f"    - {reason}")

    print("-" * 60)
    print(f"\nStatistics:")
    print(f"  Total: {report.stats.total}")
    print(f"  Valid: {report.stats.valid}")
    print(f"  Invalid: {report.stats.invalid}")
    print(f"  Pass rate: {report.stats.pass_rate:.1f}%")
    return report.stats.invalid == 0


if __name__ == "__main__":
    if len(sys.argv) > 1:
        ok = validate_file(Path(sys.argv[1]))
    else:
        ok = run_examples()
    sys.exit(0 if ok else 1)
