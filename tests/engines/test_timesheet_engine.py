from __future__ import annotations

from decimal import Decimal

import pytest

from srsglass.engines.timesheet_engine import (
    COLUMNS,
    EXCEL_CELL_LIMIT,
    TimesheetEngine,
    format_offset,
    region_link,
)
from srsglass.engines.types import PassConfig, RegionRecord, UpdateSchedule
from srsglass.engines.update_schedule_engine import UpdateScheduleEngine
from srsglass.utils.errors import ValidationError
from tests.dump_factory import make_regions


def build_schedule(regions, major=5350, minor=3550, precision=0) -> UpdateSchedule:
    major_s, minor_s = UpdateScheduleEngine().schedule(
        regions,
        PassConfig("major", major, precision),
        PassConfig("minor", minor, precision),
    )
    return UpdateSchedule(regions=tuple(regions), major=major_s, minor=minor_s, dump_date="2024-01-01")


# ============================================================
# format_offset
# ============================================================
@pytest.mark.parametrize(
    "offset,precision,expected",
    [
        (Decimal("0"), 0, "0:00:00"),
        (Decimal("59"), 0, "0:00:59"),
        (Decimal("3600"), 0, "1:00:00"),
        (Decimal("5349"), 0, "1:29:09"),
        (Decimal("1783.333"), 3, "0:29:43.333"),
        (Decimal("61.05"), 2, "0:01:01.05"),
        (Decimal("7.000"), 3, "0:00:07.000"),
    ],
)
def test_format_offset(offset, precision, expected):
    assert format_offset(offset, precision) == expected


def test_region_link():
    assert region_link("The North Pacific") == "https://www.nationstates.net/region=the_north_pacific"


# ============================================================
# build_rows
# ============================================================
def test_rows_follow_update_order_and_columns():
    regions = make_regions(10, 20, 70, names=["A", "B", "C"])
    rows = TimesheetEngine().build_rows(build_schedule(regions, major=100, minor=50))

    assert [r["Region"] for r in rows] == ["A", "B", "C"]
    assert all(list(r.keys()) == COLUMNS for r in rows)

    assert [r["Total Nations"] for r in rows] == [0, 10, 30]
    assert [r["Major"] for r in rows] == ["0:00:00", "0:00:10", "0:00:30"]
    assert [r["Minor"] for r in rows] == ["0:00:00", "0:00:05", "0:00:15"]


def test_delegate_columns_and_factbook_truncation():
    regions = (
        RegionRecord("A", 0, 5, delegate_votes=11, factbook="x" * (EXCEL_CELL_LIMIT + 10)),
        RegionRecord("B", 1, 5, delegate_votes=0),
        RegionRecord("C", 2, 5),
    )
    rows = TimesheetEngine().build_rows(build_schedule(regions))

    assert rows[0]["Del. Votes"] == 11
    assert rows[0]["Del. Endos"] == 10
    assert len(rows[0]["WFE"]) == EXCEL_CELL_LIMIT

    assert rows[1]["Del. Endos"] == 0

    # 缺少展示字段的 region 也必须保留
    assert rows[2]["Region"] == "C"
    assert rows[2]["Del. Votes"] is None
    assert rows[2]["WFE"] is None


def test_misaligned_schedules_raise():
    a = build_schedule(make_regions(1, 2))
    b = build_schedule(make_regions(1, 2, 3))

    broken = UpdateSchedule(regions=a.regions, major=a.major, minor=b.minor)

    with pytest.raises(ValidationError):
        TimesheetEngine().build_rows(broken)


def test_format_offset_high_precision_is_not_rounded():
    offset = Decimal("1783." + "9" * 35)
    assert format_offset(offset, 35) == "0:29:43." + "9" * 35


def test_format_offset_pads_or_cuts_to_precision():
    assert format_offset(Decimal("61"), 3) == "0:01:01.000"
    assert format_offset(Decimal("61.98765"), 2) == "0:01:01.98"
