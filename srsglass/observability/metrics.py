#!filepath: srsglass/observability/metrics.py
from dataclasses import dataclass, field
from typing import Dict, Optional

from srsglass import logs


@dataclass
class MetricRecorder:
    """
    运行计数（regions / total_nations ...）

    - record() 只存值，汇总在 timeline 报告末尾一次性输出
    - rate() 结合 leaf timer 给出吞吐（如 decode 的 regions/s）
    """

    enabled: bool = True
    metrics: Dict[str, int] = field(default_factory=dict)

    def record(self, name: str, value: int) -> None:
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def rate(self, name: str, seconds: Optional[float]) -> Optional[float]:
        value = self.metrics.get(name)
        if value is None or not seconds:
            return None
        return value / seconds
