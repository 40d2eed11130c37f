"""
Strategy policy module.

Maps the classified trend onto buy-drop / sell-rise thresholds.
"""
from .policy import StrategyThresholds, ThresholdPolicy

__all__ = ["StrategyThresholds", "ThresholdPolicy"]
