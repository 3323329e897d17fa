# srsglass/steps/write_step.py
from __future__ import annotations

from srsglass.dataloader.timesheet_writer import TimesheetWriter
from srsglass.engines.dump_source_engine import DumpSourceEngine
from srsglass.engines.timesheet_engine import TimesheetEngine
from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.step import PipelineStep


class WriteTimesheetStep(PipelineStep):
    """
    WriteTimesheetStep (Sink Step)

    input  : ctx.schedule
    output : ctx.rows, ctx.output_file

    输出路径：ctx.out_path，未指定时为 out_dir / filename_template.format(date=dump_date)
    """

    def __init__(
        self,
        *,
        engine: TimesheetEngine | None = None,
        writer: TimesheetWriter | None = None,
        inst=None,
    ) -> None:
        super().__init__(inst=inst)
        self.engine = engine or TimesheetEngine()
        self.writer = writer or TimesheetWriter()

    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        schedule = self.require(ctx, "schedule")

        out_path = ctx.out_path
        if out_path is None:
            name = DumpSourceEngine.output_filename(ctx.filename_template, schedule.dump_date)
            out_path = ctx.out_dir / name

        with self.timed():
            with self.inst.timer("build_rows"):
                rows = self.engine.build_rows(schedule)
            with self.inst.timer("write_timesheet"):
                ctx.output_file = self.writer.write(rows, out_path)

        ctx.rows = rows
        return ctx
