#!/usr/bin/env python3
"""
网格计算器命令行入口
根据命令行参数计算一次合约网格的保证金和强平价
"""

import argparse
import json
import sys
from typing import List, Optional

from .core.engine import GridMarginEngine
from .core.exceptions import GridCalculatorError, InvalidRequestError
from .core.types import FormulaVersion, GridResults, PositionSide
from .utils.config import load_config
from .utils.logger import setup_structlog, get_logger
from .utils.request import parse_request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-calc",
        description="Futures grid margin and liquidation calculator",
    )
    parser.add_argument("--lower", type=float, required=True, help="Grid lower price")
    parser.add_argument("--upper", type=float, required=True, help="Grid upper price")
    parser.add_argument("--grids", type=int, required=True, help="Number of grid levels")
    parser.add_argument("--investment", type=float, required=True, help="Capital allocated to the grid")
    parser.add_argument("--leverage", type=float, default=1.0)
    parser.add_argument("--mmr", type=float, default=None, help="Maintenance margin rate (e.g. 0.004)")
    parser.add_argument("--side", choices=[s.value for s in PositionSide], default=PositionSide.LONG.value)
    parser.add_argument("--manual-reserve", type=float, default=None,
                        help="Manual reserved margin (disables auto reserve)")
    parser.add_argument("--no-auto-reserve", action="store_true",
                        help="Disable auto reserve without a manual amount")
    parser.add_argument("--available-balance", type=float, default=None)
    parser.add_argument("--entry-price", type=float, default=None)
    parser.add_argument("--formula-version", choices=[v.value for v in FormulaVersion], default=None)
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    return parser


def format_results(results: GridResults) -> str:
    """人类可读的结果摘要"""
    lines = [
        "=" * 60,
        "Futures Grid Calculation",
        "=" * 60,
        f"Entry Price:        {results.entry_price:,.4f}",
        f"Grid Step:          {results.grid_step:,.4f}",
        f"Position Size:      {results.position_size:,.2f}",
        f"Reserve Rate:       {results.reserve_rate:.2%}",
        f"Reserved Margin:    {results.reserved_margin:,.2f}",
        f"Usable Margin:      {results.usable_margin:,.2f}",
        f"Maintenance Margin: {results.maintenance_margin:,.2f}",
    ]
    if results.liquidation_prices.long is not None:
        lines.append(f"Liquidation (LONG): {results.liquidation_prices.long:,.4f}")
    if results.liquidation_prices.short is not None:
        lines.append(f"Liquidation (SHORT): {results.liquidation_prices.short:,.4f}")
    for warning in results.warnings:
        lines.append(f"WARNING: {warning}")
    lines.append("=" * 60)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.formula_version:
        overrides["formula_version"] = args.formula_version

    try:
        config = load_config(**overrides)
    except GridCalculatorError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_structlog(log_level=config.log_level, log_file=config.log_file, use_json=config.log_json)
    logger = get_logger(__name__)

    raw = {
        "lower_price": args.lower,
        "upper_price": args.upper,
        "grid_count": args.grids,
        "investment": args.investment,
        "leverage": args.leverage,
        "maintenance_margin_rate": args.mmr,
        "position_side": args.side,
        "auto_reserve_margin": not (args.no_auto_reserve or args.manual_reserve is not None),
        "manual_reserved_margin": args.manual_reserve,
        "entry_price": args.entry_price,
        "available_balance": args.available_balance,
    }

    try:
        inputs = parse_request(raw, config.default_maintenance_margin_rate)
    except InvalidRequestError as e:
        logger.error("invalid_request", errors=e.errors)
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    engine = GridMarginEngine(config.get_formula_settings())

    try:
        results = engine.compute(inputs)
    except GridCalculatorError as e:
        logger.error("grid_rejected", error=e.message, **e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    logger.info(
        "grid_computed",
        side=inputs.position_side.value,
        position_size=results.position_size,
        reserve_rate=results.reserve_rate,
        usable_margin=results.usable_margin,
        liquidation=results.liquidation_prices.to_dict(),
    )
    for warning in results.warnings:
        logger.warning("grid_warning", warning=warning)

    if args.json:
        print(json.dumps(results.to_dict(), indent=2))
    else:
        print(format_results(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
