#!/usr/bin/env python3
"""
网格请求模型

把调用方（表单、CLI、订单系统）提交的原始值校验并转换为 GridInputs。
约束与创建网格表单一致。
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.exceptions import InvalidRequestError
from ..core.types import GridInputs, PositionSide

logger = logging.getLogger(__name__)

MIN_GRID_COUNT = 2
MAX_GRID_COUNT = 300
MIN_LEVERAGE = 1
MAX_LEVERAGE = 125


class GridRequest(BaseModel):
    """合约网格请求（字段名和 camelCase 别名均可）"""

    model_config = ConfigDict(populate_by_name=True, frozen=True, allow_inf_nan=False)

    lower_price: float = Field(gt=0, alias="lowerPrice")
    upper_price: float = Field(gt=0, alias="upperPrice")
    grid_count: int = Field(ge=MIN_GRID_COUNT, le=MAX_GRID_COUNT, alias="gridCount")
    investment: float = Field(gt=0)
    leverage: float = Field(default=1, ge=MIN_LEVERAGE, le=MAX_LEVERAGE)
    maintenance_margin_rate: float = Field(default=0.004, gt=0, lt=1, alias="maintenanceMarginRate")
    position_side: PositionSide = Field(default=PositionSide.LONG, alias="positionSide")
    auto_reserve_margin: bool = Field(default=True, alias="autoReserveMargin")
    manual_reserved_margin: Optional[float] = Field(default=None, ge=0, alias="manualReservedMargin")
    entry_price: Optional[float] = Field(default=None, gt=0, alias="entryPrice")
    available_balance: Optional[float] = Field(default=None, ge=0, alias="availableBalance")

    @model_validator(mode='after')
    def validate_price_range(self):
        if self.lower_price >= self.upper_price:
            raise ValueError("Lower price must be less than upper price")
        return self

    def to_inputs(self) -> GridInputs:
        return GridInputs(
            lower_price=self.lower_price,
            upper_price=self.upper_price,
            grid_count=self.grid_count,
            investment=self.investment,
            leverage=self.leverage,
            maintenance_margin_rate=self.maintenance_margin_rate,
            position_side=self.position_side,
            auto_reserve_margin=self.auto_reserve_margin,
            manual_reserved_margin=self.manual_reserved_margin,
            entry_price=self.entry_price,
            available_balance=self.available_balance,
        )


def parse_request(data: Dict[str, Any], default_maintenance_margin_rate: Optional[float] = None) -> GridInputs:
    """
    校验原始输入并转换为 GridInputs

    Args:
        data: 原始字段（snake_case 或 camelCase）
        default_maintenance_margin_rate: 未提供维持保证金率时使用

    Raises:
        InvalidRequestError: 输入无效
    """
    values = {k: v for k, v in data.items() if v is not None}
    if default_maintenance_margin_rate is not None and not (
        "maintenance_margin_rate" in values or "maintenanceMarginRate" in values
    ):
        values["maintenance_margin_rate"] = default_maintenance_margin_rate

    try:
        request = GridRequest.model_validate(values)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        logger.warning(f"Rejected grid request: {errors}")
        raise InvalidRequestError(errors) from e

    return request.to_inputs()
