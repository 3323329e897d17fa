#!filepath: srsglass/workflows/timesheet.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from srsglass.config.app_config import AppConfig
from srsglass.observability.instrumentation import Instrumentation
from srsglass.pipeline.context import TimesheetContext
from srsglass.pipeline.pipeline import TimesheetPipeline

from srsglass.dataloader.dump_downloader import DumpDownloader
from srsglass.steps.acquire_step import AcquireDumpStep

from srsglass.engines.dump_parser_engine import DumpParserEngine
from srsglass.steps.decode_step import DecodeDumpStep

from srsglass.engines.update_schedule_engine import UpdateScheduleEngine
from srsglass.steps.schedule_step import ScheduleStep

from srsglass.engines.timesheet_engine import TimesheetEngine
from srsglass.dataloader.timesheet_writer import TimesheetWriter
from srsglass.steps.write_step import WriteTimesheetStep


def build_timesheet_pipeline(
    cfg: AppConfig,
    *,
    user_nation: str,
    inst: Optional[Instrumentation] = None,
    downloader: Optional[DumpDownloader] = None,
) -> TimesheetPipeline:
    """
    Timesheet Pipeline

    Semantic Order:
        AcquireDump     (HTTP / local regions.xml.gz)
        → DecodeDump    (gzip XML → RegionRecord, buffered)
        → Schedule      (major + minor offsets)
        → WriteTimesheet(xlsx / parquet / csv)
    """
    inst = inst or Instrumentation(enabled=True)
    downloader = downloader or DumpDownloader(cfg.dump, user_nation)

    steps = [
        AcquireDumpStep(downloader=downloader, inst=inst),
        DecodeDumpStep(engine=DumpParserEngine(), inst=inst),
        ScheduleStep(engine=UpdateScheduleEngine(), inst=inst),
        WriteTimesheetStep(engine=TimesheetEngine(), writer=TimesheetWriter(), inst=inst),
    ]
    return TimesheetPipeline(steps=steps, inst=inst)


def build_context(
    cfg: AppConfig,
    *,
    dump_path: Optional[str | Path] = None,
    use_existing: Optional[bool] = None,
    out_path: Optional[str | Path] = None,
    parallel: bool = False,
) -> TimesheetContext:
    return TimesheetContext(
        major=cfg.update.major(),
        minor=cfg.update.minor(),
        dump_path=Path(dump_path or cfg.dump.path),
        use_existing=cfg.dump.use_existing if use_existing is None else use_existing,
        out_path=Path(out_path) if out_path else None,
        out_dir=Path(cfg.output.dir),
        filename_template=cfg.output.filename_template,
        parallel=parallel,
    )


def run_timesheet(
    cfg: AppConfig,
    *,
    user_nation: str,
    dump_path: Optional[str | Path] = None,
    use_existing: Optional[bool] = None,
    out_path: Optional[str | Path] = None,
    parallel: bool = False,
) -> TimesheetContext:
    pipeline = build_timesheet_pipeline(cfg, user_nation=user_nation)
    ctx = build_context(
        cfg,
        dump_path=dump_path,
        use_existing=use_existing,
        out_path=out_path,
        parallel=parallel,
    )
    return pipeline.run(ctx)
