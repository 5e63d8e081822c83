"""行情数据模块（market_data）。

该包聚合：
- 历史数据加载（CSV -> DataFrame -> Candle）
- 示例/合成数据（demo 与测试使用）
- 收盘价序列归一化的稳定导出入口
"""

from market_data.loader import candles_from_frame, candles_to_frame, load_price_frame
from market_data.sample import REFERENCE_CLOSES, reference_candles, synthetic_candles
from shared.models.series import closes_from

__all__ = [
    "load_price_frame",
    "candles_from_frame",
    "candles_to_frame",
    "closes_from",
    "REFERENCE_CLOSES",
    "reference_candles",
    "synthetic_candles",
]
