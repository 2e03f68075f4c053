#!/usr/bin/env python3
"""
测试 GridMarginEngine

重点测试：
1. 标准多/空/对冲场景
2. 手动预留在两套公式版本下的行为
3. 校验边界（<= 维持保证金、预留超过投资额）
4. 强平价落入网格区间的提示
"""

import math
from dataclasses import replace

import pytest
from grid_margin.core.engine import GridMarginEngine, calculate_futures_grid
from grid_margin.core.exceptions import InsufficientBalanceError, ReserveExceedsInvestmentError
from grid_margin.core.types import (
    FormulaSettings,
    FormulaVersion,
    GridInputs,
    LiquidationFormula,
    PositionSide,
)

LONG_WARNING = "Liquidation price (LONG) is within the grid range!"
SHORT_WARNING = "Liquidation price (SHORT) is within the grid range!"


@pytest.fixture
def standard_inputs():
    """标准测试输入（BTC 50k-60k，50 格，10x）"""
    return GridInputs(
        lower_price=50000.0,
        upper_price=60000.0,
        grid_count=50,
        investment=1000.0,
        leverage=10.0,
        maintenance_margin_rate=0.004,
        auto_reserve_margin=True,
        position_side=PositionSide.LONG,
    )


@pytest.fixture
def engine():
    return GridMarginEngine()


@pytest.fixture
def legacy_engine():
    return GridMarginEngine.for_version(FormulaVersion.LEGACY)


class TestStandardScenarios:
    """测试标准场景（v2 公式）"""

    def test_standard_long(self, engine, standard_inputs):
        results = engine.compute(standard_inputs)

        assert results.position_size == 10000.0
        assert results.grid_step == 200.0
        assert 0.10 <= results.reserve_rate <= 0.35
        assert results.reserve_rate == 0.35
        assert results.reserved_margin == pytest.approx(350.0)
        assert results.usable_margin == pytest.approx(650.0)
        assert results.maintenance_margin == pytest.approx(40.0)
        assert results.entry_price == pytest.approx(math.sqrt(3e9))
        assert results.liquidation_prices.long == pytest.approx(math.sqrt(3e9) * 0.904)
        assert results.liquidation_prices.short is None
        assert results.warnings == ()

    def test_standard_short(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, position_side=PositionSide.SHORT))

        assert results.liquidation_prices.long is None
        assert results.liquidation_prices.short == pytest.approx(math.sqrt(3e9) * 1.096)
        assert results.warnings == ()

    def test_neutral_brackets_entry(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, position_side=PositionSide.NEUTRAL))

        prices = results.liquidation_prices
        assert prices.long < results.entry_price < prices.short
        assert results.position_size == 10000.0

    @pytest.mark.parametrize("version", list(FormulaVersion))
    @pytest.mark.parametrize("leverage", [1.0, 3.0, 10.0, 20.0])
    def test_neutral_brackets_entry_all_versions(self, standard_inputs, version, leverage):
        inputs = replace(standard_inputs, position_side=PositionSide.NEUTRAL, leverage=leverage)
        results = GridMarginEngine.for_version(version).compute(inputs)
        assert results.liquidation_prices.long < results.entry_price < results.liquidation_prices.short

    def test_explicit_entry_price(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, entry_price=52000.0))
        assert results.entry_price == 52000.0
        assert results.liquidation_prices.long == pytest.approx(52000.0 * 0.904)


class TestInvariants:
    """测试不变量"""

    @pytest.mark.parametrize("leverage", [1.0, 2.0, 5.0, 10.0, 25.0])
    @pytest.mark.parametrize("grid_count", [2, 50, 300])
    def test_auto_reserve_invariants(self, engine, standard_inputs, leverage, grid_count):
        inputs = replace(standard_inputs, leverage=leverage, grid_count=grid_count)
        results = engine.compute(inputs)

        assert 0.10 <= results.reserve_rate <= 0.35
        assert results.position_size == inputs.investment * inputs.leverage
        assert results.usable_margin == inputs.investment - results.reserved_margin

    def test_idempotent(self, engine, standard_inputs):
        first = engine.compute(standard_inputs)
        second = engine.compute(standard_inputs)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_inputs_not_mutated(self, engine, standard_inputs):
        before = replace(standard_inputs)
        engine.compute(standard_inputs)
        assert standard_inputs == before

    def test_results_warnings_immutable(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, leverage=50.0))
        assert isinstance(results.warnings, tuple)
        with pytest.raises(AttributeError):
            results.warnings.append("extra")

    def test_convenience_function_matches_engine(self, engine, standard_inputs):
        assert calculate_futures_grid(standard_inputs) == engine.compute(standard_inputs)


class TestManualReserve:
    """测试手动预留：v2 balance_aware vs legacy deduct_from_investment"""

    def test_manual_999_v2_succeeds(self, engine, standard_inputs):
        """测试：v2 预留来自余额，可用保证金仍为整笔投资"""
        inputs = replace(standard_inputs, auto_reserve_margin=False, manual_reserved_margin=999.0)
        results = engine.compute(inputs)

        assert results.reserved_margin == 999.0
        assert results.usable_margin == 1000.0
        assert results.position_size == 10000.0

    def test_manual_999_legacy_insufficient(self, legacy_engine, standard_inputs):
        """测试：legacy 从投资额扣除，剩余 1 < 维持保证金 40"""
        inputs = replace(standard_inputs, auto_reserve_margin=False, manual_reserved_margin=999.0)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            legacy_engine.compute(inputs)
        assert exc_info.value.usable_margin == pytest.approx(1.0)

    @pytest.mark.parametrize("version", list(FormulaVersion))
    def test_manual_above_investment_fails(self, standard_inputs, version):
        inputs = replace(standard_inputs, auto_reserve_margin=False, manual_reserved_margin=1500.0)
        with pytest.raises(ReserveExceedsInvestmentError):
            GridMarginEngine.for_version(version).compute(inputs)

    def test_balance_suggestion(self, engine, standard_inputs):
        inputs = replace(standard_inputs, auto_reserve_margin=False, available_balance=5000.0)
        results = engine.compute(inputs)

        assert results.reserved_margin == pytest.approx(5000.0 * 0.35)
        assert results.usable_margin == 1000.0

    def test_no_manual_no_balance(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, auto_reserve_margin=False))
        assert results.reserved_margin == 0.0
        assert results.usable_margin == 1000.0

    def test_legacy_ignores_balance(self, legacy_engine, standard_inputs):
        inputs = replace(standard_inputs, auto_reserve_margin=False, available_balance=5000.0)
        results = legacy_engine.compute(inputs)
        assert results.reserved_margin == 0.0
        assert results.usable_margin == 1000.0


class TestValidation:
    """测试校验失败"""

    def test_usable_equals_maintenance_fails(self, engine, standard_inputs):
        """测试：8000 * 0.125 == 1000 == usable"""
        inputs = replace(
            standard_inputs,
            leverage=8.0,
            maintenance_margin_rate=0.125,
            auto_reserve_margin=False,
        )
        with pytest.raises(InsufficientBalanceError) as exc_info:
            engine.compute(inputs)
        assert exc_info.value.usable_margin == exc_info.value.maintenance_margin == 1000.0

    def test_usable_equals_maintenance_fails_legacy(self, legacy_engine, standard_inputs):
        """测试：legacy 下 1000 - 500 == 8000 * 0.0625"""
        inputs = replace(
            standard_inputs,
            leverage=8.0,
            maintenance_margin_rate=0.0625,
            auto_reserve_margin=False,
            manual_reserved_margin=500.0,
        )
        with pytest.raises(InsufficientBalanceError):
            legacy_engine.compute(inputs)

    def test_extreme_leverage_insufficient(self, engine, standard_inputs):
        inputs = replace(standard_inputs, leverage=125.0, maintenance_margin_rate=0.01)
        with pytest.raises(InsufficientBalanceError):
            engine.compute(inputs)


class TestWarnings:
    """测试网格区间提示"""

    def test_high_leverage_long_warning(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, leverage=50.0))

        assert results.liquidation_prices.long >= standard_inputs.lower_price
        assert LONG_WARNING in results.warnings
        assert results.has_warnings

    def test_short_warning(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, leverage=20.0, position_side=PositionSide.SHORT))
        assert results.warnings == (SHORT_WARNING,)

    def test_neutral_both_warnings(self, engine, standard_inputs):
        results = engine.compute(replace(standard_inputs, leverage=50.0, position_side=PositionSide.NEUTRAL))
        assert results.warnings == (LONG_WARNING, SHORT_WARNING)

    def test_legacy_standard_long_warns(self, legacy_engine, standard_inputs):
        """测试：legacy 公式下同样输入的多头强平价落入区间"""
        results = legacy_engine.compute(standard_inputs)

        assert results.entry_price == 55000.0
        assert results.liquidation_prices.long == pytest.approx(55000.0 * 0.935 / 0.996)
        assert results.warnings == (LONG_WARNING,)


class TestFormulaOverrides:
    """测试单项公式覆盖"""

    def test_usable_margin_formula_with_geometric_entry(self, standard_inputs):
        settings = FormulaSettings(liquidation_formula=LiquidationFormula.USABLE_MARGIN)
        results = GridMarginEngine(settings).compute(standard_inputs)

        entry = math.sqrt(3e9)
        assert results.liquidation_prices.long == pytest.approx(entry * (1 - 650.0 / 10000.0) / 0.996)

    def test_to_dict_shape(self, engine, standard_inputs):
        data = engine.compute(replace(standard_inputs, position_side=PositionSide.NEUTRAL)).to_dict()

        assert set(data) == {
            "gridStep", "positionSize", "maintenanceMargin", "liquidationPrices",
            "reservedMargin", "usableMargin", "reserveRate", "entryPrice", "warnings",
        }
        assert set(data["liquidationPrices"]) == {"long", "short"}
