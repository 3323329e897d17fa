# srsglass/steps/decode_step.py
from __future__ import annotations

from srsglass.engines.dump_parser_engine import DumpParserEngine
from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.step import PipelineStep


class DecodeDumpStep(PipelineStep):
    """
    DecodeDumpStep

    input  : ctx.dump
    output : ctx.regions（完整缓冲，供 major / minor 两次 pass 复用）

    解码流只能消费一次，所以这里一次性物化为 tuple；
    任一 REGION 格式错误 → FormatError，ctx.regions 保持为 None。
    """

    def __init__(self, *, engine: DumpParserEngine | None = None, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine or DumpParserEngine()

    def run(self, ctx: TimesheetContext) -> TimesheetContext:
        dump = self.require(ctx, "dump")

        with self.timed():
            with self.inst.timer("decode_dump"):
                regions = tuple(self.engine.parse_file(dump.path))

        ctx.regions = regions
        self.inst.metrics.record("regions", len(regions))
        return ctx
