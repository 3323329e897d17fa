# srsglass/steps/acquire_step.py
from __future__ import annotations

from srsglass.dataloader.dump_downloader import DumpDownloader
from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.step import PipelineStep


class AcquireDumpStep(PipelineStep):
    """
    AcquireDumpStep (Source Step)

    output : ctx.dump (local regions.xml.gz + dump date)

    Error policy:
      - network / IO failures surface as AcquisitionError
    """

    def __init__(self, *, downloader: DumpDownloader, inst=None) -> None:
        super().__init__(inst=inst)
        self.downloader = downloader

    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        with self.timed():
            with self.inst.timer("acquire_dump"):
                ctx.dump = self.downloader.resolve(ctx.dump_path, ctx.use_existing)
        return ctx
