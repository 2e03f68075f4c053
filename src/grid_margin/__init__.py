"""
Futures grid margin calculator

Position sizing, margin reservation and liquidation prices for grid
strategies on leveraged futures.
"""

from .core.engine import GridMarginEngine, calculate_futures_grid
from .core.exceptions import (
    GridCalculatorError,
    InsufficientBalanceError,
    ReserveExceedsInvestmentError,
)
from .core.types import (
    FormulaSettings,
    FormulaVersion,
    GridInputs,
    GridResults,
    LiquidationPrices,
    PositionSide,
)

__version__ = "1.0.0"

__all__ = [
    "GridMarginEngine",
    "calculate_futures_grid",
    "GridCalculatorError",
    "InsufficientBalanceError",
    "ReserveExceedsInvestmentError",
    "FormulaSettings",
    "FormulaVersion",
    "GridInputs",
    "GridResults",
    "LiquidationPrices",
    "PositionSide",
]
