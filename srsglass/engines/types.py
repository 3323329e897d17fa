#!filepath: srsglass/engines/types.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from srsglass.utils.errors import ValidationError


@dataclass(frozen=True, slots=True)
class RegionRecord:
    """
    RegionRecord（不可变）

    - order_index  : dump 中的声明顺序 = update 顺序
    - nation_count : 分配权重
    其余字段仅供 timesheet 展示，缺失时为 None。
    """

    name: str
    order_index: int
    nation_count: int

    delegate_votes: Optional[int] = None
    delegate_exec: Optional[bool] = None
    factbook: Optional[str] = None
    last_major: Optional[int] = None
    last_minor: Optional[int] = None
    embassies: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PassConfig:
    """
    One update pass (major / minor).

    length_seconds   : positive whole seconds
    precision_digits : fractional digits kept after truncation (0 = whole seconds)
    """

    name: str
    length_seconds: int
    precision_digits: int = 0

    def __post_init__(self):
        if isinstance(self.length_seconds, bool) or not isinstance(self.length_seconds, int):
            raise ValidationError(
                f"[{self.name}] length_seconds must be an int, got {self.length_seconds!r}"
            )
        if self.length_seconds <= 0:
            raise ValidationError(
                f"[{self.name}] length_seconds must be positive, got {self.length_seconds}"
            )
        if isinstance(self.precision_digits, bool) or not isinstance(self.precision_digits, int):
            raise ValidationError(
                f"[{self.name}] precision_digits must be an int, got {self.precision_digits!r}"
            )
        if self.precision_digits < 0:
            raise ValidationError(
                f"[{self.name}] precision_digits must be >= 0, got {self.precision_digits}"
            )


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    region: RegionRecord
    start_offset: Decimal
    end_offset: Decimal
    nations_before: int


@dataclass(frozen=True, slots=True)
class PassSchedule:
    """
    一次 pass 的完整结果（全有或全无）。

    degenerate = total_nations == 0：所有 offset 为 0，这是定义好的输出而非错误。
    """

    config: PassConfig
    entries: Tuple[ScheduleEntry, ...]
    total_nations: int

    @property
    def degenerate(self) -> bool:
        return self.total_nations == 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass(frozen=True, slots=True)
class UpdateSchedule:
    """Buffered regions plus both pass schedules, ready for a sink."""

    regions: Tuple[RegionRecord, ...]
    major: PassSchedule
    minor: PassSchedule
    dump_date: Optional[str] = None
