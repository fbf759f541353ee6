"""Configuration models — strategy inputs, limits and settings."""

from wear_tco.config.layers import ALL_LAYERS, Layer, PRECEDENCE, STAGES
from wear_tco.config.wear import WearRates
from wear_tco.config.intervention import MaintenanceIntervention, StageInstall
from wear_tco.config.costs import CostStructure, PlateCost
from wear_tco.config.strategy import Strategy
from wear_tco.config.limits import (
    DEFAULT_LIMITS,
    DEFAULT_SETTINGS,
    SimulationSettings,
    ValidationLimits,
)
from wear_tco.config.defaults import default_strategies, intervention_at

__all__ = [
    "ALL_LAYERS",
    "Layer",
    "PRECEDENCE",
    "STAGES",
    "WearRates",
    "StageInstall",
    "MaintenanceIntervention",
    "PlateCost",
    "CostStructure",
    "Strategy",
    "ValidationLimits",
    "SimulationSettings",
    "DEFAULT_LIMITS",
    "DEFAULT_SETTINGS",
    "default_strategies",
    "intervention_at",
]
