#!filepath: srsglass/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager, nullcontext
from collections import OrderedDict
from time import perf_counter
from typing import Dict

from srsglass.observability.metrics import MetricRecorder
from srsglass.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting + Parent scope）。

    1. Timeline 只记录叶子节点（record=True），同名 leaf 累加
    2. Step 级 timer 仅作为时间边界（record=False）
    3. 报告在 pipeline 结束时一次性输出，热路径不打日志
    """

    enabled: bool = True

    def __post_init__(self):
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    # ---------------------------------------------------------
    def timer(self, name: str, *, record: bool = True):
        if not self.enabled:
            return nullcontext()
        return self._timed(name, record)

    @contextmanager
    def _timed(self, name: str, record: bool):
        start = perf_counter()
        try:
            yield
        finally:
            if record:
                elapsed = perf_counter() - start
                self.timeline[name] = self.timeline.get(name, 0.0) + elapsed

    # ---------------------------------------------------------
    def generate_timeline_report(self, label: str):
        TimelineReporter(self.timeline, label, self.metrics).print()


class NoOpInstrumentation(Instrumentation):
    """Instrumentation disabled 时使用：timer 不计时，metrics 不记录，报告为空。"""

    def __init__(self):
        super().__init__(enabled=False)

    def generate_timeline_report(self, label: str):
        pass
