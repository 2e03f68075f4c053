"""
Price calculation functions

Pure functions for entry price resolution and grid spacing.
"""
import math
from typing import Optional

from ..core.types import EntryPriceMethod


def resolve_entry_price(
    lower_price: float,
    upper_price: float,
    entry_price: Optional[float] = None,
    method: EntryPriceMethod = EntryPriceMethod.GEOMETRIC
) -> float:
    """
    确定入场价

    提供了入场价则直接使用（0 视为未提供），否则由区间推导：
    - geometric: sqrt(lower * upper)
    - arithmetic: (lower + upper) / 2

    Examples:
        >>> resolve_entry_price(50000.0, 60000.0, method=EntryPriceMethod.ARITHMETIC)
        55000.0

        >>> resolve_entry_price(100.0, 400.0)
        200.0
    """
    if entry_price:
        return entry_price

    if EntryPriceMethod(method) == EntryPriceMethod.ARITHMETIC:
        return (lower_price + upper_price) / 2

    return math.sqrt(lower_price * upper_price)


def calculate_grid_step(lower_price: float, upper_price: float, grid_count: int) -> float:
    """
    网格间距 = (upper - lower) / grid_count

    不做取整，显示精度由调用方处理

    Examples:
        >>> calculate_grid_step(50000.0, 60000.0, 50)
        200.0
    """
    return (upper_price - lower_price) / grid_count
