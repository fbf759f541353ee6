"""Markdown validation report.

Run directly to print the report for the reference strategies::

    python -m wear_tco.selftest.report
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from wear_tco.models.results import SuiteResult
from wear_tco.selftest.checks import run_comprehensive_validation

PASS = "✅"
FAIL = "❌"


def generate_validation_report(
    suites: Sequence[SuiteResult] | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Render suites (default: the reference run) as a Markdown document."""
    suites = run_comprehensive_validation() if suites is None else suites
    generated_at = generated_at or datetime.now(timezone.utc)

    total_passed = sum(s.passed for s in suites)
    total_checks = sum(s.total for s in suites)
    overall = total_passed == total_checks
    pct = (total_passed / total_checks * 100.0) if total_checks else 0.0

    lines = [
        "# Wear-Plate TCO - Validation Report",
        "",
        f"**Generated:** {generated_at.isoformat()}",
        f"**Overall Status:** {PASS + ' PASSED' if overall else FAIL + ' FAILED'}",
        f"**Tests Passed:** {total_passed}/{total_checks} ({pct:.1f}%)",
        "",
    ]

    for suite in suites:
        lines.append(f"## {PASS if suite.success else FAIL} {suite.name}")
        lines.append(f"**Passed:** {suite.passed}/{suite.total}")
        lines.append("")
        for check in suite.checks:
            line = f"- {PASS if check.passed else FAIL} {check.message}"
            if not check.passed and check.expected is not None and check.actual is not None:
                line += f" (Expected: {check.expected:g}, Actual: {check.actual:g})"
            lines.append(line)
        lines.append("")

    return "\n".join(lines)


if __name__ == "__main__":
    print(generate_validation_report())
