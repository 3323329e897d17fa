#!filepath: srsglass/pipeline/step.py
from __future__ import annotations

from abc import ABC, abstractmethod

from srsglass.pipeline.context import TimesheetContext
from srsglass.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep(ABC):
    """
    Pipeline Step 基类

    职责：
      1. 从 ctx 读取上游输出，写入自己的输出字段
      2. 提供 Step 级时间语义边界（parent scope）

    - Step 本身不进入 timeline，leaf timer 在 Step 内部
    - Step 行为不依赖 inst 是否存在
    - 出错直接抛出：Pipeline 不做部分恢复
    """

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation = inst if inst is not None else NoOpInstrumentation()

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def timed(self):
        return self.inst.timer(self.step_name, record=False)

    @abstractmethod
    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        ...

    @staticmethod
    def require(ctx: TimesheetContext, attr: str):
        value = getattr(ctx, attr)
        if value is None:
            raise RuntimeError(f"pipeline misconfigured: ctx.{attr} not produced by an upstream step")
        return value
