#!/usr/bin/env python3
"""
网格保证金计算异常定义

校验失败属于不安全的资金配置，而不是程序错误
"""

from typing import Optional, Dict, Any


class GridCalculatorError(Exception):
    """计算器基础异常"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class MarginValidationError(GridCalculatorError):
    """保证金校验失败 - 不返回部分结果"""
    pass


class InsufficientBalanceError(MarginValidationError):
    """可用保证金不足以覆盖维持保证金"""

    def __init__(self, usable_margin: float, maintenance_margin: float):
        super().__init__(
            "No enough balance",
            {"usable_margin": usable_margin, "maintenance_margin": maintenance_margin}
        )
        self.usable_margin = usable_margin
        self.maintenance_margin = maintenance_margin


class ReserveExceedsInvestmentError(MarginValidationError):
    """预留保证金超过投资额"""

    def __init__(self, reserved_margin: float, investment: float, usable_margin: float):
        super().__init__(
            "Reserved margin exceeds investment",
            {
                "reserved_margin": reserved_margin,
                "investment": investment,
                "usable_margin": usable_margin,
            }
        )
        self.reserved_margin = reserved_margin
        self.investment = investment
        self.usable_margin = usable_margin


class ConfigError(GridCalculatorError):
    """配置错误 - 严重，不可恢复"""
    pass


class InvalidConfigError(ConfigError):
    """配置值无效"""

    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(
            f"Invalid config: {field}",
            {"field": field, "value": value, "expected": expected}
        )


class InvalidRequestError(GridCalculatorError):
    """调用方提交的原始输入无效"""

    def __init__(self, errors: list):
        super().__init__("Invalid grid request", {"errors": errors})
        self.errors = errors
