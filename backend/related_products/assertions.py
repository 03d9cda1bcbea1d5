"""Turn a ValidationReport into assertion failures.

Failures are collected softly: every failing item and the section result each
contribute one message, and a single AssertionError lists them all.

Usage:
    report = validation_engine.evaluate(snapshot, rules)
    assert_report_passes(report)
"""

from related_products.validators.models import ValidationReport


def collect_failures(report: ValidationReport) -> list[str]:
    """One message per failing ItemResult, plus one for a failing section."""
    failures = []

    for result in report.item_results:
        if not result.passed:
            failures.append(f"item {result.index}: {'; '.join(result.reasons)}")

    section = report.section_result
    if not section.passed:
        failures.append(f"section: {'; '.join(section.reasons)}")

    return failures


def assert_report_passes(report: ValidationReport) -> None:
    """Raise AssertionError listing every failure if the report did not pass."""
    if report.overall_pass:
        return

    failures = collect_failures(report)
    lines = "\n".join(f"  - {failure}" for failure in failures)
    raise AssertionError(f"{report.verdict}\n{lines}")
