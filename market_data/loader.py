"""历史数据加载。

从 CSV 读取 K 线到 DataFrame，并转换为 Candle 列表。回测核心只需要 `close` 列，
其余 OHLCV / 时间列存在就保留，缺失也不报错。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pandas as pd

from shared.models.models import Candle
from shared.models.series import close_value
from shared.utils.logging import setup_logger

_LOGGER = setup_logger("market-data")

_TS_COLS = ("start_ts", "end_ts", "ts")
_ORDER_COLS = ("end_ts", "ts", "start_ts")


def _ensure_datetime(df: pd.DataFrame, col: str) -> None:
    if col in df.columns and not pd.api.types.is_datetime64_any_dtype(df[col]):
        try:
            df[col] = pd.to_datetime(df[col], utc=True)
        except (ValueError, TypeError):
            # 兼容混合 ISO8601 格式（是否带毫秒可能不一致）
            df[col] = pd.to_datetime(df[col], utc=True, format="mixed")


def load_price_frame(path: str | Path) -> pd.DataFrame:
    """读取 CSV 为按时间升序排列的价格表。

    Raises
    ------
    FileNotFoundError
        文件不存在。
    ValueError
        缺少 `close` 列。
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Price file not found: {csv_path}")

    df = pd.read_csv(csv_path)
    if "close" not in df.columns:
        raise ValueError(f"Price file {csv_path} has no 'close' column")

    for col in _TS_COLS:
        _ensure_datetime(df, col)
    for col in _ORDER_COLS:
        if col in df.columns:
            # 稳定排序：时间相同的行保持文件顺序
            df = df.sort_values(col, kind="mergesort")
            break
    df = df.reset_index(drop=True)
    _LOGGER.info("加载 %s：%d 根 K 线", csv_path, len(df))
    return df


def _opt_float(row: dict[str, Any], key: str) -> float | None:
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    return float(val)


def _opt_str(row: dict[str, Any], key: str) -> str | None:
    val = row.get(key)
    if isinstance(val, str) and val:
        return val
    return None


def _opt_ts(row: dict[str, Any], key: str):
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    if isinstance(val, pd.Timestamp):
        return val.to_pydatetime()
    return val


def candles_from_frame(df: pd.DataFrame, symbol: str = "") -> List[Candle]:
    """DataFrame -> Candle 列表（按行顺序）。"""
    if "close" not in df.columns:
        raise ValueError("price frame has no 'close' column")
    candles: list[Candle] = []
    for row in df.to_dict(orient="records"):
        candles.append(
            Candle(
                close=float(row["close"]),
                symbol=_opt_str(row, "symbol") or symbol,
                open=_opt_float(row, "open"),
                high=_opt_float(row, "high"),
                low=_opt_float(row, "low"),
                volume=_opt_float(row, "volume"),
                start_ts=_opt_ts(row, "start_ts"),
                end_ts=_opt_ts(row, "end_ts") or _opt_ts(row, "ts"),
            )
        )
    return candles


def candles_to_frame(candles: list[Candle]) -> pd.DataFrame:
    """Candle 列表 -> DataFrame（因子计算使用）。

    非 Candle 元素（数值、含 "close" 键的映射等）视为只有 close 的 K 线。
    """
    rows = []
    for i, c in enumerate(candles):
        if not isinstance(c, Candle):
            c = Candle(close=close_value(c, i))
        rows.append(
            {
                "ts": c.end_ts,
                "symbol": c.symbol,
                "open": c.open,
                "high": c.high,
                "low": c.low,
                "close": c.close,
                "volume": c.volume,
            }
        )
    return pd.DataFrame(rows, columns=["ts", "symbol", "open", "high", "low", "close", "volume"])
