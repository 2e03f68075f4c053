#!/usr/bin/env python3
"""
网格计算引擎基准测试

表单每次输入都会重新计算，对比两套公式版本的单次计算耗时
"""

import time

from grid_margin import GridInputs, GridMarginEngine, FormulaVersion, PositionSide

# 测试参数
NUM_ITERATIONS = 100_000


def benchmark_engine(version: FormulaVersion, name: str) -> float:
    """
    基准测试单次 compute() 耗时

    Args:
        version: 公式版本
        name: 显示名称

    Returns:
        平均耗时（微秒）
    """
    engine = GridMarginEngine.for_version(version)
    inputs = GridInputs(
        lower_price=50000.0,
        upper_price=60000.0,
        grid_count=50,
        investment=1000.0,
        leverage=10.0,
        maintenance_margin_rate=0.004,
        position_side=PositionSide.NEUTRAL,
    )

    start = time.perf_counter()
    for _ in range(NUM_ITERATIONS):
        engine.compute(inputs)
    end = time.perf_counter()

    avg_us = (end - start) / NUM_ITERATIONS * 1_000_000

    print(f"\n{name}:")
    print(f"  平均: {avg_us:.2f} µs")
    print(f"  吞吐: {1_000_000 / avg_us:,.0f} 次/秒")

    return avg_us


def main():
    print("=" * 60)
    print("网格计算引擎基准测试")
    print("=" * 60)
    print(f"迭代次数: {NUM_ITERATIONS}")

    v2_avg = benchmark_engine(FormulaVersion.V2, "v2（几何均值 + 杠杆比例强平）")
    legacy_avg = benchmark_engine(FormulaVersion.LEGACY, "legacy（算术均值 + 可用保证金强平）")

    print("\n" + "=" * 60)
    print(f"v2: {v2_avg:.2f} µs, legacy: {legacy_avg:.2f} µs")
    print("=" * 60)


if __name__ == "__main__":
    main()
