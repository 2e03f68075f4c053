"""
Liquidation price functions

Pure functions for long/short liquidation prices under both formula families.
"""
from ..core.types import LiquidationFormula, LiquidationPrices, PositionSide


def ratio_liquidation_long(entry_price: float, leverage: float, maintenance_margin_rate: float) -> float:
    """
    多头强平价（杠杆比例公式）

    P_liq_long = entry * (1 - 1/leverage + mmr)，下限为 0

    Examples:
        >>> ratio_liquidation_long(100.0, 10.0, 0.005)
        90.5
    """
    price = entry_price * (1 - (1 / leverage) + maintenance_margin_rate)
    return max(0.0, price)


def ratio_liquidation_short(entry_price: float, leverage: float, maintenance_margin_rate: float) -> float:
    """
    空头强平价（杠杆比例公式）

    P_liq_short = entry * (1 + 1/leverage - mmr)
    """
    return entry_price * (1 + (1 / leverage) - maintenance_margin_rate)


def usable_margin_liquidation_long(
    entry_price: float,
    usable_margin: float,
    position_size: float,
    maintenance_margin_rate: float
) -> float:
    """
    多头强平价（可用保证金公式）

    P_liq_long = entry * (1 - usable/position) / (1 - mmr)，下限为 0
    """
    price = (entry_price * (1 - (usable_margin / position_size))) / (1 - maintenance_margin_rate)
    return max(0.0, price)


def usable_margin_liquidation_short(
    entry_price: float,
    usable_margin: float,
    position_size: float,
    maintenance_margin_rate: float
) -> float:
    """
    空头强平价（可用保证金公式）

    P_liq_short = entry * (1 + usable/position) / (1 + mmr)
    """
    return (entry_price * (1 + (usable_margin / position_size))) / (1 + maintenance_margin_rate)


def calculate_liquidation_prices(
    position_side: PositionSide,
    entry_price: float,
    leverage: float,
    maintenance_margin_rate: float,
    usable_margin: float,
    position_size: float,
    formula: LiquidationFormula = LiquidationFormula.RATIO
) -> LiquidationPrices:
    """
    按持仓方向计算强平价

    策略：
    - LONG: 只填充 long
    - SHORT: 只填充 short
    - NEUTRAL: 投资额、预留和仓位各分一半，多空两侧分别计算

    Args:
        position_side: 持仓方向
        entry_price: 入场价
        leverage: 杠杆
        maintenance_margin_rate: 维持保证金率
        usable_margin: 可用保证金（整个策略）
        position_size: 仓位规模（整个策略）
        formula: 强平价公式族

    Returns:
        LiquidationPrices
    """
    side = PositionSide(position_side)

    if side == PositionSide.NEUTRAL:
        # 对冲网格：每侧使用一半资金
        usable_margin = usable_margin / 2
        position_size = position_size / 2

    def _long() -> float:
        if formula == LiquidationFormula.USABLE_MARGIN:
            return usable_margin_liquidation_long(
                entry_price, usable_margin, position_size, maintenance_margin_rate
            )
        return ratio_liquidation_long(entry_price, leverage, maintenance_margin_rate)

    def _short() -> float:
        if formula == LiquidationFormula.USABLE_MARGIN:
            return usable_margin_liquidation_short(
                entry_price, usable_margin, position_size, maintenance_margin_rate
            )
        return ratio_liquidation_short(entry_price, leverage, maintenance_margin_rate)

    if side == PositionSide.LONG:
        return LiquidationPrices(long=_long())
    if side == PositionSide.SHORT:
        return LiquidationPrices(short=_short())
    return LiquidationPrices(long=_long(), short=_short())
