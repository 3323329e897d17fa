#!filepath: srsglass/engines/timesheet_engine.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from srsglass.engines.types import UpdateSchedule, ScheduleEntry
from srsglass.utils.errors import ValidationError

REGION_URL = "https://www.nationstates.net/region={}"

# Excel 单元格最大字符数
EXCEL_CELL_LIMIT = 32767

COLUMNS = [
    "Region",
    "Link",
    "Population",
    "Total Nations",
    "Minor",
    "Major",
    "Del. Votes",
    "Del. Endos",
    "WFE",
]


def region_link(name: str) -> str:
    return REGION_URL.format(name.lower().replace(" ", "_"))


def format_offset(offset: Decimal, precision_digits: int = 0) -> str:
    """
    Decimal 秒 → H:MM:SS[.fff]

    offset 已经在 scheduler 中截断，这里只负责格式化。
    全程整数运算，任意 precision 都不会经过 Decimal context 的舍入。
    """
    scale = 10 ** precision_digits
    total_seconds, fraction = divmod(offset_to_ticks(offset, precision_digits), scale)

    hours = total_seconds // 3600
    minutes = (total_seconds // 60) % 60
    seconds = total_seconds % 60

    text = f"{hours}:{minutes:02d}:{seconds:02d}"
    if precision_digits > 0:
        text += f".{fraction:0{precision_digits}d}"
    return text


def offset_to_ticks(offset: Decimal, precision_digits: int) -> int:
    """Non-negative offset → whole 10^-precision_digits ticks, truncated."""
    _, digits, exponent = offset.as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")
    shift = exponent + precision_digits
    if shift >= 0:
        return coefficient * 10 ** shift
    return coefficient // 10 ** -shift


class TimesheetEngine:
    """
    TimesheetEngine（纯逻辑）

    输入：
      - UpdateSchedule（major + minor）

    输出：
      - List[dict]，列 = COLUMNS，一行一个 region，顺序 = update 顺序

    设计原则：
      - 不做 IO（写文件由 TimesheetWriter 负责）
      - 不丢 region：缺少的展示字段留空
    """

    def build_rows(self, schedule: UpdateSchedule) -> List[Dict[str, Any]]:
        major = schedule.major.entries
        minor = schedule.minor.entries

        if len(major) != len(minor):
            raise ValidationError(
                f"major/minor schedules differ in length: {len(major)} != {len(minor)}"
            )

        minor_precision = schedule.minor.config.precision_digits
        major_precision = schedule.major.config.precision_digits

        rows = []
        for major_entry, minor_entry in zip(major, minor):
            if major_entry.region.order_index != minor_entry.region.order_index:
                raise ValidationError(
                    "major/minor schedules are not aligned",
                    region_index=major_entry.region.order_index,
                    region_name=major_entry.region.name,
                )
            rows.append(
                self._row(major_entry, minor_entry, major_precision, minor_precision)
            )
        return rows

    # --------------------------------------------------
    @staticmethod
    def _row(
        major: ScheduleEntry,
        minor: ScheduleEntry,
        major_precision: int,
        minor_precision: int,
    ) -> Dict[str, Any]:
        region = major.region

        votes = region.delegate_votes
        endos = None if votes is None else max(votes - 1, 0)

        factbook = region.factbook
        if factbook is not None:
            factbook = factbook[:EXCEL_CELL_LIMIT]

        return {
            "Region": region.name,
            "Link": region_link(region.name),
            "Population": region.nation_count,
            "Total Nations": major.nations_before,
            "Minor": format_offset(minor.start_offset, minor_precision),
            "Major": format_offset(major.start_offset, major_precision),
            "Del. Votes": votes,
            "Del. Endos": endos,
            "WFE": factbook,
        }
