#!filepath: srsglass/observability/timeline_reporter.py
from typing import Dict, Optional

from srsglass.observability.metrics import MetricRecorder
from srsglass import logs

# 吞吐 = metric / leaf timer
RATES = (
    ("regions", "decode_dump"),
    ("regions", "schedule_passes"),
)


class TimelineReporter:
    """
    Timesheet 运行报告：
    - leaf timer → 耗时秒数
    - metrics → 计数，以及 regions/s 吞吐
    """

    def __init__(
        self,
        timeline: Dict[str, float],
        label: str,
        metrics: Optional[MetricRecorder] = None,
    ):
        self.timeline = timeline
        self.label = label
        self.metrics = metrics

    def print(self):
        logs.info(f"[Timeline] ===== Timesheet timeline for {self.label} =====")

        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {name:<30} {sec:>8.3f}s")
        logs.info(f"[Timeline] {'Total':<30} {sum(self.timeline.values()):>8.3f}s")

        if self.metrics is not None:
            for name, value in self.metrics.metrics.items():
                logs.info(f"[Timeline] {name:<30} {value:>9}")
            for metric, leaf in RATES:
                rate = self.metrics.rate(metric, self.timeline.get(leaf))
                if rate is not None:
                    logs.info(f"[Timeline] {metric + '/s (' + leaf + ')':<30} {rate:>9.0f}")

        logs.info("[Timeline] ===========================================")
