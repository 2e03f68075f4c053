"""
核心类型定义

集中定义所有 core 模块使用的数据类型和枚举
遵循原则：
- 只导入标准库
- 纯数据类型，不包含业务逻辑
- 避免循环导入
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional, Tuple


# ========== 枚举 ==========

class PositionSide(str, Enum):
    """持仓方向"""
    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"  # 双向对冲


class EntryPriceMethod(str, Enum):
    """未提供入场价时的默认推导方式"""
    GEOMETRIC = "geometric"    # sqrt(lower * upper)
    ARITHMETIC = "arithmetic"  # (lower + upper) / 2


class LiquidationFormula(str, Enum):
    """强平价公式族"""
    RATIO = "ratio"                  # entry * (1 -/+ 1/leverage +/- mmr)
    USABLE_MARGIN = "usable_margin"  # entry * (1 -/+ usable/position) / (1 -/+ mmr)


class ManualReserveMode(str, Enum):
    """手动预留模式下的保证金记账方式"""
    BALANCE_AWARE = "balance_aware"                    # 预留来自账户余额，可用 = 投资额
    DEDUCT_FROM_INVESTMENT = "deduct_from_investment"  # 预留从投资额中扣除


class FormulaVersion(str, Enum):
    """公式版本"""
    V2 = "v2"
    LEGACY = "legacy"


# ========== 公式配置 ==========

@dataclass(frozen=True)
class FormulaSettings:
    """
    公式组合

    v2 为权威版本；legacy 保留旧版计算器的数值行为（算术均值 + 可用保证金强平公式）
    """
    entry_price_method: EntryPriceMethod = EntryPriceMethod.GEOMETRIC
    liquidation_formula: LiquidationFormula = LiquidationFormula.RATIO
    manual_reserve_mode: ManualReserveMode = ManualReserveMode.BALANCE_AWARE

    def __post_init__(self):
        # 允许传入字符串值
        object.__setattr__(self, "entry_price_method", EntryPriceMethod(self.entry_price_method))
        object.__setattr__(self, "liquidation_formula", LiquidationFormula(self.liquidation_formula))
        object.__setattr__(self, "manual_reserve_mode", ManualReserveMode(self.manual_reserve_mode))

    @classmethod
    def for_version(cls, version: FormulaVersion) -> "FormulaSettings":
        """根据版本获取公式组合"""
        version = FormulaVersion(version)
        if version == FormulaVersion.LEGACY:
            return cls(
                entry_price_method=EntryPriceMethod.ARITHMETIC,
                liquidation_formula=LiquidationFormula.USABLE_MARGIN,
                manual_reserve_mode=ManualReserveMode.DEDUCT_FROM_INVESTMENT,
            )
        return cls()


# ========== 输入 / 输出 ==========

@dataclass(frozen=True)
class GridInputs:
    """
    网格计算输入

    所有可选字段在构造时即有默认值；lower_price < upper_price 由调用方保证
    """
    lower_price: float
    upper_price: float
    grid_count: int
    investment: float  # 初始保证金
    leverage: float
    maintenance_margin_rate: float
    position_side: PositionSide = PositionSide.LONG
    auto_reserve_margin: bool = True
    manual_reserved_margin: Optional[float] = None
    entry_price: Optional[float] = None
    available_balance: Optional[float] = None  # 手动预留时用于推荐预留额

    def __post_init__(self):
        object.__setattr__(self, "position_side", PositionSide(self.position_side))


@dataclass(frozen=True)
class LiquidationPrices:
    """强平价（按持仓方向填充）"""
    long: Optional[float] = None
    short: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        prices = {}
        if self.long is not None:
            prices["long"] = self.long
        if self.short is not None:
            prices["short"] = self.short
        return prices


@dataclass(frozen=True)
class GridResults:
    """
    网格计算结果

    由 GridMarginEngine.compute() 返回，warnings 只是提示，不阻止创建策略
    """
    grid_step: float
    position_size: float
    maintenance_margin: float
    liquidation_prices: LiquidationPrices
    reserved_margin: float
    usable_margin: float
    reserve_rate: float
    entry_price: float
    warnings: Tuple[str, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        """转换为仪表盘持久化使用的字典（camelCase）"""
        return {
            "gridStep": self.grid_step,
            "positionSize": self.position_size,
            "maintenanceMargin": self.maintenance_margin,
            "liquidationPrices": self.liquidation_prices.to_dict(),
            "reservedMargin": self.reserved_margin,
            "usableMargin": self.usable_margin,
            "reserveRate": self.reserve_rate,
            "entryPrice": self.entry_price,
            "warnings": list(self.warnings),
        }
