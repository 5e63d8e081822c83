import sys
from pathlib import Path

import pytest

# 确保项目根目录在 sys.path，便于测试内直接以顶层包名导入
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


@pytest.fixture
def v_shape_closes() -> list[float]:
    """先单边下跌 16 根（100 -> 85），再单边上涨到 98：一个完整的超卖 -> 超买周期。"""
    down = [100.0 - i for i in range(16)]
    up = [85.0 + i for i in range(1, 14)]
    return down + up


@pytest.fixture
def bollinger_dip_closes() -> list[float]:
    """20 根平盘后跌破下轨（90），随后回到 100 并在 bar 25 冲破上轨（110）。"""
    return [100.0] * 20 + [90.0] + [100.0] * 4 + [110.0]
