"""
Greedy dispatch simulation over the collection timeline.
"""

from .core import simulate
from .sweep import compare_fleet_sizes, simulate_many

__all__ = ["simulate", "simulate_many", "compare_fleet_sizes"]
