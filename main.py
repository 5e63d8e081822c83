"""统一命令行入口。

通过子命令驱动不同任务：

- `backtest`：按配置文件（可用 --csv 覆盖数据源）对一条价格序列运行全部策略。
- `demo`：在内置参考序列（或合成随机游走）上运行默认三套策略。
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from analysis.reporting import format_summary_line, render_summary
from engine.backtest_engine import BacktestEngine
from market_data.sample import reference_candles, synthetic_candles
from shared.config.config_loader import load_config
from shared.config.schema import AppConfig, DataConfig
from shared.utils.logging import set_level

_LOGGER_NAMES = ("backtest-engine", "strategy", "market-data")


@dataclass
class CliArgs:
    """命令行参数结构。

    config: 配置文件路径
    task: 要运行的任务类型 (backtest/demo)
    """
    config: str
    task: str
    csv: str | None = None
    threshold: float | None = None
    parallel: bool = False
    synthetic: int | None = None
    seed: int = 42
    as_json: bool = False
    log_level: str = "WARNING"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="indicator-backtest", description="指标策略回测")

    def _add_common(p: argparse.ArgumentParser, *, suppress: bool) -> None:
        default = argparse.SUPPRESS if suppress else None
        p.add_argument(
            "--config",
            default=argparse.SUPPRESS if suppress else "config/config.yml",
            help="配置文件路径 (默认: config/config.yml)",
        )
        p.add_argument("--log-level", default=argparse.SUPPRESS if suppress else "WARNING")
        p.add_argument("--json", dest="as_json", action="store_true", default=default, help="以 JSON 输出 summary")

    # 允许 `main.py --config ... backtest`（全局）与 `main.py backtest --config ...`（子命令）
    _add_common(parser, suppress=False)
    sub = parser.add_subparsers(dest="task")

    p_backtest = sub.add_parser("backtest", help="按配置运行一次回测")
    _add_common(p_backtest, suppress=True)
    p_backtest.add_argument("--csv", default=None, help="价格 CSV（覆盖 data.path）")
    p_backtest.add_argument("--threshold", type=float, default=None, help="盈利阈值，如 0.01 = 1%%")
    p_backtest.add_argument("--parallel", action="store_true", help="每个策略一个线程")

    p_demo = sub.add_parser("demo", help="在示例数据上运行默认策略")
    _add_common(p_demo, suppress=True)
    p_demo.add_argument("--threshold", type=float, default=0.01)
    p_demo.add_argument("--synthetic", type=int, default=None, help="改用 N 根合成 K 线")
    p_demo.add_argument("--seed", type=int, default=42)

    return parser


def parse_args(argv: list[str] | None = None) -> CliArgs:
    ns = build_parser().parse_args(argv)
    return CliArgs(
        config=str(getattr(ns, "config", "config/config.yml")),
        task=ns.task or "demo",
        csv=getattr(ns, "csv", None),
        threshold=getattr(ns, "threshold", None),
        parallel=bool(getattr(ns, "parallel", False)),
        synthetic=getattr(ns, "synthetic", None),
        seed=int(getattr(ns, "seed", 42)),
        as_json=bool(getattr(ns, "as_json", False)),
        log_level=str(getattr(ns, "log_level", "WARNING")),
    )


def _run_backtest(args: CliArgs) -> BacktestEngine:
    cfg = load_config(args.config)
    updates: dict[str, Any] = {}
    if args.csv:
        updates["data"] = DataConfig(path=args.csv)
    if args.parallel:
        updates["parallel"] = True
    if updates:
        cfg = cfg.model_copy(update=updates)
    return BacktestEngine(cfg, threshold=args.threshold)


def _run_demo(args: CliArgs) -> BacktestEngine:
    if args.synthetic:
        candles = synthetic_candles(args.synthetic, seed=args.seed)
        cfg = AppConfig(symbol="SYNTH")
    else:
        candles = reference_candles()
        cfg = AppConfig()
    return BacktestEngine(cfg, candles=candles, threshold=args.threshold)


def main(argv: list[str] | None = None) -> dict[str, Any]:
    """程序主入口，返回回测 summary。"""
    args = parse_args(argv)
    set_level(args.log_level, *_LOGGER_NAMES)

    if args.task == "backtest":
        engine = _run_backtest(args)
    elif args.task == "demo":
        engine = _run_demo(args)
    else:
        raise ValueError(f"Unknown task: {args.task}")

    result = engine.run()
    if args.as_json:
        print(json.dumps(result.summary, ensure_ascii=False, indent=2))
        return result.summary

    console = Console()
    render_summary(result.summary, console=console)
    for trade_result in (result.artifacts or {}).get("results", {}).values():
        console.print(format_summary_line(trade_result))
    return result.summary


def cli() -> None:
    """console script 入口：丢弃 summary 返回值，成功时退出码为 0。"""
    main()


if __name__ == "__main__":
    cli()
