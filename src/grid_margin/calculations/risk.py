"""
Risk check functions

Margin sufficiency validation (raises) and grid-range warnings (advisory).
"""
from typing import Optional, Tuple

from ..core.exceptions import InsufficientBalanceError, ReserveExceedsInvestmentError
from ..core.types import LiquidationPrices

LONG_IN_RANGE_WARNING = "Liquidation price (LONG) is within the grid range!"
SHORT_IN_RANGE_WARNING = "Liquidation price (SHORT) is within the grid range!"


def validate_margin(
    investment: float,
    reserved_margin: float,
    usable_margin: float,
    maintenance_margin: float,
    manual_reserved_margin: Optional[float] = None
) -> None:
    """
    校验保证金是否充足

    顺序：
    1. usable < 0，或手动预留超过投资额 -> ReserveExceedsInvestmentError
    2. usable <= maintenance（含相等） -> InsufficientBalanceError

    Raises:
        ReserveExceedsInvestmentError: 预留配置占用了超过投资额的资金
        InsufficientBalanceError: 可用保证金无法覆盖维持保证金
    """
    if usable_margin < 0 or (manual_reserved_margin and manual_reserved_margin > investment):
        raise ReserveExceedsInvestmentError(reserved_margin, investment, usable_margin)

    if usable_margin <= maintenance_margin:
        raise InsufficientBalanceError(usable_margin, maintenance_margin)


def collect_range_warnings(
    liquidation_prices: LiquidationPrices,
    lower_price: float,
    upper_price: float
) -> Tuple[str, ...]:
    """
    强平价落入网格区间时给出提示

    - long 强平价 >= 下边界：网格跌到下边界前就会被强平
    - short 强平价 <= 上边界：网格涨到上边界前就会被强平
    """
    warnings = []

    if liquidation_prices.long is not None and liquidation_prices.long >= lower_price:
        warnings.append(LONG_IN_RANGE_WARNING)

    if liquidation_prices.short is not None and liquidation_prices.short <= upper_price:
        warnings.append(SHORT_IN_RANGE_WARNING)

    return tuple(warnings)
