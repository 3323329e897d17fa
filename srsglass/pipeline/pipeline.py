#!filepath: srsglass/pipeline/pipeline.py
from __future__ import annotations

from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.step import PipelineStep
from srsglass.observability.instrumentation import Instrumentation
from srsglass import logs


class TimesheetPipeline:
    """
    TimesheetPipeline = 调度器

    Acquire → Decode → Schedule → Write，严格单向。

    - Pipeline 只负责顺序和上下文传递
    - 任何 Step 抛错即整体中止：Write 只会在两个 pass 都算完之后执行，
      不会出现半个 timesheet
    """

    def __init__(self, steps: list[PipelineStep], inst: Instrumentation):
        self.steps = steps
        self.inst = inst

    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        logs.info("[Pipeline] ====== START ======")

        for step in self.steps:
            ctx = step.run(ctx)

        label = ctx.dump.dump_date if ctx.dump is not None else "timesheet"
        self.inst.generate_timeline_report(label)

        logs.info(f"[Pipeline] ====== DONE → {ctx.output_file} ======")
        return ctx
