"""
Margin calculation functions

Pure functions for position sizing, reserve rate and margin accounting.
"""
from typing import Optional

from ..core.types import ManualReserveMode

# 预留比例参数
RESERVE_RATE_BASE = 0.08
RESERVE_RATE_GRID_DIVISOR = 600
RESERVE_RATE_LEVERAGE_DIVISOR = 25
RESERVE_RATE_RANGE_WEIGHT = 0.5
RESERVE_RATE_MIN = 0.10
RESERVE_RATE_MAX = 0.35


def calculate_position_size(investment: float, leverage: float) -> float:
    """
    仓位规模 = investment * leverage

    预留保证金不减少仓位规模：整笔投资都按杠杆计算名义仓位
    """
    return investment * leverage


def calculate_reserve_rate(
    lower_price: float,
    upper_price: float,
    grid_count: int,
    leverage: float,
    entry_price: float
) -> float:
    """
    动态预留比例

    rate = 0.08 + grid_count/600 + leverage/25 + ((upper - lower) / entry) * 0.5
    结果限制在 [0.10, 0.35]

    网格越多、杠杆越高、价格区间越宽，网格再平衡前遭遇不利波动的概率越大，
    因此预留更多缓冲。

    Examples:
        >>> calculate_reserve_rate(99.0, 101.0, 2, 1.0, 100.0)
        0.1333...  # 0.08 + 0.0033 + 0.04 + 0.01

        >>> calculate_reserve_rate(50000.0, 60000.0, 50, 10.0, 55000.0)
        0.35
    """
    rate = (
        RESERVE_RATE_BASE
        + grid_count / RESERVE_RATE_GRID_DIVISOR
        + leverage / RESERVE_RATE_LEVERAGE_DIVISOR
        + ((upper_price - lower_price) / entry_price) * RESERVE_RATE_RANGE_WEIGHT
    )
    return max(RESERVE_RATE_MIN, min(RESERVE_RATE_MAX, rate))


def calculate_reserved_margin(
    investment: float,
    reserve_rate: float,
    auto_reserve: bool,
    manual_reserved_margin: Optional[float] = None,
    available_balance: Optional[float] = None,
    mode: ManualReserveMode = ManualReserveMode.BALANCE_AWARE
) -> float:
    """
    计算预留保证金

    - 自动预留: investment * rate（从投资额中扣除）
    - 手动预留: 优先使用 manual_reserved_margin（0 视为未提供）
        - balance_aware: 未提供时按可用余额推荐 min(balance * rate, balance)，无余额则为 0
        - deduct_from_investment: 未提供时为 0

    Examples:
        >>> calculate_reserved_margin(1000.0, 0.2, auto_reserve=True)
        200.0

        >>> calculate_reserved_margin(1000.0, 0.2, auto_reserve=False, available_balance=5000.0)
        1000.0
    """
    if auto_reserve:
        return investment * reserve_rate

    if manual_reserved_margin:
        return manual_reserved_margin

    if ManualReserveMode(mode) == ManualReserveMode.BALANCE_AWARE and available_balance:
        return min(available_balance * reserve_rate, available_balance)

    return 0.0


def calculate_usable_margin(
    investment: float,
    reserved_margin: float,
    auto_reserve: bool,
    mode: ManualReserveMode = ManualReserveMode.BALANCE_AWARE
) -> float:
    """
    计算可用保证金

    - 自动预留: investment - reserved
    - 手动预留 balance_aware: investment（预留来自账户余额，不占用投资额）
    - 手动预留 deduct_from_investment: investment - reserved
    """
    if not auto_reserve and ManualReserveMode(mode) == ManualReserveMode.BALANCE_AWARE:
        return investment
    return investment - reserved_margin


def calculate_maintenance_margin(position_size: float, maintenance_margin_rate: float) -> float:
    """维持保证金 = position_size * mmr"""
    return position_size * maintenance_margin_rate
