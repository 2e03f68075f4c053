#!/usr/bin/env python3
"""
基于 Pydantic 的配置管理系统
- 自动类型验证和转换
- 自动从环境变量读取（前缀 GRID_）
- 清晰的错误信息
"""

import logging
from typing import Dict, Any, Optional
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import InvalidConfigError
from ..core.types import (
    EntryPriceMethod,
    FormulaSettings,
    FormulaVersion,
    LiquidationFormula,
    ManualReserveMode,
)

logger = logging.getLogger(__name__)


class CalculatorConfig(BaseSettings):
    """
    网格计算器完整配置

    自动从环境变量和 .env 文件读取配置
    环境变量优先级高于配置文件
    """

    # 公式版本
    formula_version: FormulaVersion = FormulaVersion.V2

    # 单项覆盖（为空则跟随版本）
    entry_price_method: Optional[EntryPriceMethod] = None
    liquidation_formula: Optional[LiquidationFormula] = None
    manual_reserve_mode: Optional[ManualReserveMode] = None

    # 调用方未提供维持保证金率时使用
    default_maintenance_margin_rate: float = Field(default=0.004, gt=0, lt=1)

    # 日志
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    # Pydantic 配置
    model_config = SettingsConfigDict(
        env_prefix='GRID_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',  # 忽略额外的环境变量
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {v}")
        return level

    def get_formula_settings(self) -> FormulaSettings:
        """版本默认值 + 单项覆盖"""
        base = FormulaSettings.for_version(self.formula_version)
        return FormulaSettings(
            entry_price_method=self.entry_price_method or base.entry_price_method,
            liquidation_formula=self.liquidation_formula or base.liquidation_formula,
            manual_reserve_mode=self.manual_reserve_mode or base.manual_reserve_mode,
        )

    def to_dict(self) -> Dict[str, Any]:
        settings = self.get_formula_settings()
        return {
            "formula_version": self.formula_version.value,
            "entry_price_method": settings.entry_price_method.value,
            "liquidation_formula": settings.liquidation_formula.value,
            "manual_reserve_mode": settings.manual_reserve_mode.value,
            "default_maintenance_margin_rate": self.default_maintenance_margin_rate,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "log_json": self.log_json,
        }

    def get_summary(self) -> str:
        """获取配置摘要"""
        settings = self.get_formula_settings()
        lines = [
            "=" * 60,
            "Grid Calculator Configuration",
            "=" * 60,
            f"Formula Version: {self.formula_version.value}",
            f"Entry Price: {settings.entry_price_method.value}",
            f"Liquidation Formula: {settings.liquidation_formula.value}",
            f"Manual Reserve: {settings.manual_reserve_mode.value}",
            f"Default MMR: {self.default_maintenance_margin_rate}",
            f"Log Level: {self.log_level}",
            "=" * 60,
        ]
        return "\n".join(lines)


def load_config(env_file: Optional[Path] = None, **overrides) -> CalculatorConfig:
    """
    加载配置

    Args:
        env_file: .env 文件路径（可选）
        **overrides: 直接覆盖的字段

    Returns:
        验证后的配置对象

    Raises:
        InvalidConfigError: 配置值无效
    """
    try:
        if env_file:
            return CalculatorConfig(_env_file=str(env_file), **overrides)
        return CalculatorConfig(**overrides)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or "config"
        logger.error(f"Invalid configuration: {field}: {error.get('msg')}")
        raise InvalidConfigError(field, error.get("input"), error.get("msg", "")) from e
