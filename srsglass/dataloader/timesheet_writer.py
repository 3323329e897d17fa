#!filepath: srsglass/dataloader/timesheet_writer.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pyarrow as pa
import pyarrow.csv as pacsv
import pyarrow.parquet as pq
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from srsglass.engines.timesheet_engine import COLUMNS
from srsglass.utils.errors import UserInputError
from srsglass.utils.filesystem import FileSystem
from srsglass import logs


SCHEMA = pa.schema(
    [
        ("Region", pa.string()),
        ("Link", pa.string()),
        ("Population", pa.int64()),
        ("Total Nations", pa.int64()),
        ("Minor", pa.string()),
        ("Major", pa.string()),
        ("Del. Votes", pa.int64()),
        ("Del. Endos", pa.int64()),
        ("WFE", pa.string()),
    ]
)


class TimesheetWriter:
    """
    Schedule Sink（I/O 层）

    - 按输出后缀选择格式：.xlsx / .parquet / .csv
    - 全部先写 <out>.tmp 再 rename：中断时不会留下半个 timesheet
    """

    SUFFIXES = (".xlsx", ".parquet", ".csv")

    def write(self, rows: List[Dict[str, Any]], out_path: str | Path) -> Path:
        out_path = Path(out_path)
        suffix = out_path.suffix.lower()

        if suffix not in self.SUFFIXES:
            raise UserInputError(
                f"unsupported timesheet format {suffix!r}, expected one of {self.SUFFIXES}"
            )

        with FileSystem.atomic_open(out_path) as f:
            if suffix == ".xlsx":
                self._write_xlsx(rows, f)
            else:
                table = self.to_table(rows)
                if suffix == ".parquet":
                    pq.write_table(table, f)
                else:
                    pacsv.write_csv(table, f)

        logs.info(f"[Timesheet] wrote {len(rows)} rows → {out_path}")
        return out_path

    # --------------------------------------------------
    @staticmethod
    def to_table(rows: List[Dict[str, Any]]) -> pa.Table:
        return pa.Table.from_pylist(rows, schema=SCHEMA)

    @staticmethod
    def _write_xlsx(rows: List[Dict[str, Any]], f) -> None:
        wb = Workbook()
        ws = wb.active
        ws.title = "Timesheet"
        ws.append(COLUMNS)

        link_col = COLUMNS.index("Link") + 1
        for row_index, row in enumerate(rows, start=2):
            ws.append([_cell_value(row[c]) for c in COLUMNS])
            ws.cell(row=row_index, column=link_col).hyperlink = row["Link"]

            # factbook 文本以 "=" 开头时 openpyxl 会当成公式
            wfe = ws.cell(row=row_index, column=len(COLUMNS))
            if isinstance(wfe.value, str) and wfe.value.startswith("="):
                wfe.data_type = "s"

        wb.save(f)


def _cell_value(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value
