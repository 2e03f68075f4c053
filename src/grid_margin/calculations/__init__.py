"""
Calculations module - Pure functions for grid margin calculations
All functions here are stateless and have no side effects
"""

from .prices import resolve_entry_price, calculate_grid_step
from .margins import (
    calculate_position_size,
    calculate_reserve_rate,
    calculate_reserved_margin,
    calculate_usable_margin,
    calculate_maintenance_margin,
)
from .liquidation import calculate_liquidation_prices
from .risk import validate_margin, collect_range_warnings

__all__ = [
    "resolve_entry_price",
    "calculate_grid_step",
    "calculate_position_size",
    "calculate_reserve_rate",
    "calculate_reserved_margin",
    "calculate_usable_margin",
    "calculate_maintenance_margin",
    "calculate_liquidation_prices",
    "validate_margin",
    "collect_range_warnings",
]
