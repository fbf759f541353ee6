"""Result models — engine output contracts."""

from wear_tco.models.results import (
    CalculationMetrics,
    CheckResult,
    CostAccumulation,
    InterventionCost,
    QuickValidationSummary,
    StrategySummary,
    SuiteResult,
    ValidationSummary,
    Violation,
    WearAccumulation,
)

__all__ = [
    "CalculationMetrics",
    "CheckResult",
    "CostAccumulation",
    "InterventionCost",
    "QuickValidationSummary",
    "StrategySummary",
    "SuiteResult",
    "ValidationSummary",
    "Violation",
    "WearAccumulation",
]
