"""执行引擎基类（模板模式）。

目标：
- 把“数据准备”与“策略评估/记录”解耦；
- 让 CLI、测试与 notebook 在同一套 `run() -> EngineResult` 接口上调用。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EngineResult:
    """引擎运行结果（统一出口）。

    summary 只含可 JSON 序列化的内容；artifacts 放对象（TradeResult、DataFrame 等）。
    """

    summary: dict[str, Any]
    artifacts: dict[str, Any] | None = None


class BaseEngine(ABC):
    """引擎抽象基类。"""

    @abstractmethod
    def run(self) -> EngineResult:
        raise NotImplementedError
