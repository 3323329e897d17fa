#!filepath: srsglass/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from srsglass.dataloader.dump_downloader import DumpHandle
from srsglass.engines.types import PassConfig, RegionRecord, UpdateSchedule


@dataclass
class TimesheetContext:
    """
    TimesheetContext = Pipeline 运行期唯一上下文

    - Pipeline / CLI 负责构造输入部分
    - 每个 Step 只写自己负责的输出字段
    - 不放业务逻辑
    """

    # -------------------------
    # inputs
    # -------------------------
    major: PassConfig
    minor: PassConfig
    dump_path: Path
    use_existing: bool = False
    out_path: Optional[Path] = None
    out_dir: Path = Path(".")
    filename_template: str = "spyglass{date}.xlsx"
    parallel: bool = False

    # -------------------------
    # step outputs
    # -------------------------
    dump: Optional[DumpHandle] = None
    regions: Optional[Tuple[RegionRecord, ...]] = None
    schedule: Optional[UpdateSchedule] = None
    rows: Optional[List[Dict[str, Any]]] = None
    output_file: Optional[Path] = None
