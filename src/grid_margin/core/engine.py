#!/usr/bin/env python3
"""
网格保证金引擎

把 calculations 中的纯函数按固定顺序串起来：
入场价 -> 网格间距 -> 仓位 -> 预留比例 -> 预留/可用/维持保证金 -> 强平价 -> 校验 -> 提示

compute() 是纯函数：不做 I/O、不记日志、不修改输入，可被任意并发调用
"""

import logging
from typing import Optional

from ..calculations import (
    resolve_entry_price,
    calculate_grid_step,
    calculate_position_size,
    calculate_reserve_rate,
    calculate_reserved_margin,
    calculate_usable_margin,
    calculate_maintenance_margin,
    calculate_liquidation_prices,
    validate_margin,
    collect_range_warnings,
)
from .types import FormulaSettings, FormulaVersion, GridInputs, GridResults

logger = logging.getLogger(__name__)


class GridMarginEngine:
    """
    合约网格保证金计算引擎

    职责:
    - 计算网格间距、杠杆仓位、动态预留比例
    - 计算预留/可用/维持保证金和强平价
    - 保证金不足时抛出异常（不返回部分结果）
    - 强平价落入网格区间时附加提示
    """

    def __init__(self, settings: Optional[FormulaSettings] = None):
        self.settings = settings or FormulaSettings()
        logger.debug(
            "Grid margin engine ready: entry=%s, liquidation=%s, manual_reserve=%s",
            self.settings.entry_price_method.value,
            self.settings.liquidation_formula.value,
            self.settings.manual_reserve_mode.value,
        )

    @classmethod
    def for_version(cls, version: FormulaVersion) -> "GridMarginEngine":
        return cls(FormulaSettings.for_version(version))

    def compute(self, inputs: GridInputs) -> GridResults:
        """
        计算网格策略的保证金和强平价

        Args:
            inputs: 已校验的数值输入

        Returns:
            GridResults

        Raises:
            ReserveExceedsInvestmentError: 预留保证金超过投资额
            InsufficientBalanceError: 可用保证金 <= 维持保证金
        """
        settings = self.settings

        entry_price = resolve_entry_price(
            inputs.lower_price,
            inputs.upper_price,
            inputs.entry_price,
            settings.entry_price_method
        )
        grid_step = calculate_grid_step(inputs.lower_price, inputs.upper_price, inputs.grid_count)
        position_size = calculate_position_size(inputs.investment, inputs.leverage)

        reserve_rate = calculate_reserve_rate(
            inputs.lower_price,
            inputs.upper_price,
            inputs.grid_count,
            inputs.leverage,
            entry_price
        )
        reserved_margin = calculate_reserved_margin(
            inputs.investment,
            reserve_rate,
            inputs.auto_reserve_margin,
            inputs.manual_reserved_margin,
            inputs.available_balance,
            settings.manual_reserve_mode
        )
        usable_margin = calculate_usable_margin(
            inputs.investment,
            reserved_margin,
            inputs.auto_reserve_margin,
            settings.manual_reserve_mode
        )
        maintenance_margin = calculate_maintenance_margin(position_size, inputs.maintenance_margin_rate)

        # 手动预留的显式值才参与"超过投资额"校验，按余额推荐的值不参与
        manual_reserved_margin = None if inputs.auto_reserve_margin else inputs.manual_reserved_margin
        validate_margin(
            inputs.investment,
            reserved_margin,
            usable_margin,
            maintenance_margin,
            manual_reserved_margin
        )

        liquidation_prices = calculate_liquidation_prices(
            inputs.position_side,
            entry_price,
            inputs.leverage,
            inputs.maintenance_margin_rate,
            usable_margin,
            position_size,
            settings.liquidation_formula
        )
        warnings = collect_range_warnings(liquidation_prices, inputs.lower_price, inputs.upper_price)

        return GridResults(
            grid_step=grid_step,
            position_size=position_size,
            maintenance_margin=maintenance_margin,
            liquidation_prices=liquidation_prices,
            reserved_margin=reserved_margin,
            usable_margin=usable_margin,
            reserve_rate=reserve_rate,
            entry_price=entry_price,
            warnings=warnings,
        )


def calculate_futures_grid(
    inputs: GridInputs,
    settings: Optional[FormulaSettings] = None
) -> GridResults:
    """便捷函数：使用默认（或指定）公式组合计算一次"""
    return GridMarginEngine(settings).compute(inputs)
