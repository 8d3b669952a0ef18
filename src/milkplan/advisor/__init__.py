"""
Advisory fleet sizing from weekly demand.
"""

from .fleet_size import assess_fleet, suggest_fleet_size

__all__ = ["assess_fleet", "suggest_fleet_size"]
