"""回测结果的控制台报告。"""

from __future__ import annotations

from typing import Any, Mapping

from rich import box
from rich.console import Console
from rich.table import Table

from market_data.models import TradeResult

STRATEGY_TITLES = {
    "rsi": "RSI",
    "macd": "MACD",
    "bollinger": "Bollinger Bands",
}


def strategy_title(name: str) -> str:
    return STRATEGY_TITLES.get(name, name.upper())


def format_summary_line(result: TradeResult) -> str:
    """单行摘要，如 `RSI Strategy: Trades = 1, Success = 100%`。"""
    return (
        f"{strategy_title(result.strategy)} Strategy: "
        f"Trades = {result.total_trades}, Success = {result.success_rate:g}%"
    )


def build_results_table(summary: Mapping[str, Any]) -> Table:
    """根据 BacktestEngine summary 构建 rich 表格；失败的策略单独标红。"""
    title = f"回测结果 {summary.get('symbol', '')} ({summary.get('bars', 0)} bars, threshold={summary.get('threshold')})"
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Strategy", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("Success %", justify="right")
    table.add_column("Avg Return %", justify="right")
    table.add_column("Open", justify="center")
    table.add_column("Note")

    for name, entry in (summary.get("strategies") or {}).items():
        if "error" in entry:
            table.add_row(
                strategy_title(name),
                "-",
                "-",
                "-",
                "-",
                f"[red]{entry.get('error_type', 'Error')}: {entry['error']}[/red]",
            )
            continue
        table.add_row(
            strategy_title(name),
            str(entry["total_trades"]),
            f"{entry['success_rate']:.2f}",
            f"{entry['avg_return']:.4f}",
            "yes" if entry.get("open_position") else "",
            "",
        )
    return table


def render_summary(summary: Mapping[str, Any], console: Console | None = None) -> None:
    console = console or Console()
    console.print(build_results_table(summary))
