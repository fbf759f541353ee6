"""Wear-plate total-cost-of-ownership simulator."""

__version__ = "0.1.0"
