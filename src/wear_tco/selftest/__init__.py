"""Self-test harness — engine output vs. reference figures."""

from wear_tco.selftest.reference import (
    DEFAULT_TOLERANCES,
    ReferenceFigures,
    ReferenceTolerances,
    WORKBOOK_REFERENCES,
)
from wear_tco.selftest.checks import (
    check_cost,
    check_maintenance_schedule,
    check_wear_progression,
    check_wear_rates,
    run_comprehensive_validation,
    run_quick_validation,
    run_strategy_suite,
)
from wear_tco.selftest.report import generate_validation_report

__all__ = [
    "DEFAULT_TOLERANCES",
    "ReferenceFigures",
    "ReferenceTolerances",
    "WORKBOOK_REFERENCES",
    "check_cost",
    "check_maintenance_schedule",
    "check_wear_progression",
    "check_wear_rates",
    "run_comprehensive_validation",
    "run_quick_validation",
    "run_strategy_suite",
    "generate_validation_report",
]
