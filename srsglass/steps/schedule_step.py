# srsglass/steps/schedule_step.py
from __future__ import annotations

from srsglass.engines.types import UpdateSchedule
from srsglass.engines.update_schedule_engine import UpdateScheduleEngine
from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.step import PipelineStep


class ScheduleStep(PipelineStep):
    """
    ScheduleStep

    input  : ctx.regions, ctx.major, ctx.minor
    output : ctx.schedule（两个 pass 都成功才写入）
    """

    def __init__(self, *, engine: UpdateScheduleEngine | None = None, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine or UpdateScheduleEngine()

    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        regions = self.require(ctx, "regions")

        with self.timed():
            with self.inst.timer("schedule_passes"):
                major, minor = self.engine.schedule(
                    regions, ctx.major, ctx.minor, parallel=ctx.parallel
                )

        ctx.schedule = UpdateSchedule(
            regions=regions,
            major=major,
            minor=minor,
            dump_date=ctx.dump.dump_date if ctx.dump is not None else None,
        )
        self.inst.metrics.record("total_nations", major.total_nations)
        return ctx
