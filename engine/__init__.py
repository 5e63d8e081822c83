"""回测引擎层（engine）。

`BacktestEngine` 负责编排：准备一条价格序列，按配置逐个（或每个策略一个线程）
调用策略引擎，并把结果汇总为 `EngineResult(summary, artifacts)`。
单个策略的输入错误只记录在该策略的 summary 条目中，不中断整次运行。
"""
