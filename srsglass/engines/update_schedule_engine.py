#!filepath: srsglass/engines/update_schedule_engine.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Iterable, Sequence, Tuple

from srsglass.engines.types import (
    PassConfig,
    PassSchedule,
    RegionRecord,
    ScheduleEntry,
)
from srsglass.utils.errors import ValidationError
from srsglass import logs


class UpdateScheduleEngine:
    """
    UpdateScheduleEngine（冻结版）

    输入：
      - 有序 RegionRecord 序列（dump 声明顺序）
      - PassConfig（major / minor 各一次，互不共享状态）

    输出：
      - PassSchedule：每个 region 的 [start_offset, end_offset]

    Allocation:
      start = length * running / total      (running = nations before region)
      end   = length * (running + n) / total

    Truncation (frozen):
      offsets are truncated toward zero to 10^-precision seconds, using
      exact integer arithmetic:
          ticks  = length * running * 10**precision // total
          offset = ticks * 10**-precision
      floor is monotonic, so starts never decrease, adjacent entries share
      the same boundary value, and the last end is exactly `length`.

    Degenerate:
      total == 0 (no regions or all empty) -> every offset is 0.

    设计原则：
      - 纯计算，不做 IO
      - 全有或全无：先完整校验，再生成 entries
    """

    # --------------------------------------------------
    def schedule_pass(
        self,
        regions: Iterable[RegionRecord],
        config: PassConfig,
    ) -> PassSchedule:
        buffered = self._buffer(regions)
        total = self.validate(buffered)

        entries = tuple(self._allocate(buffered, config, total))

        if total == 0:
            logs.warning(
                f"[Scheduler] {config.name}: total nations is 0, "
                f"all {len(entries)} offsets resolve to 0"
            )
        else:
            logs.info(
                f"[Scheduler] {config.name}: {len(entries)} regions, "
                f"total_nations={total}, length={config.length_seconds}s, "
                f"precision={config.precision_digits}"
            )

        return PassSchedule(config=config, entries=entries, total_nations=total)

    # --------------------------------------------------
    def schedule(
        self,
        regions: Iterable[RegionRecord],
        major: PassConfig,
        minor: PassConfig,
        *,
        parallel: bool = False,
    ) -> Tuple[PassSchedule, PassSchedule]:
        """
        两次 pass 共用同一份缓冲后的 region 序列（decode 只能消费一次）。
        """
        buffered = self._buffer(regions)

        if not parallel:
            return (
                self.schedule_pass(buffered, major),
                self.schedule_pass(buffered, minor),
            )

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="schedule") as pool:
            major_future = pool.submit(self.schedule_pass, buffered, major)
            minor_future = pool.submit(self.schedule_pass, buffered, minor)
            return major_future.result(), minor_future.result()

    # --------------------------------------------------
    @staticmethod
    def validate(regions: Sequence[RegionRecord]) -> int:
        """
        校验顺序与非负性，返回 total_nations。

        - order_index 必须从 0 开始连续递增（无缺口、无重复、无乱序）
        - nation_count 必须 >= 0
        """
        total = 0
        expected = 0

        for region in regions:
            if region.order_index != expected:
                raise ValidationError(
                    f"out-of-order region: expected order_index {expected}, "
                    f"got {region.order_index}",
                    region_index=region.order_index,
                    region_name=region.name,
                )
            if region.nation_count < 0:
                raise ValidationError(
                    f"negative nation_count {region.nation_count}",
                    region_index=region.order_index,
                    region_name=region.name,
                )
            total += region.nation_count
            expected += 1

        return total

    # --------------------------------------------------
    @staticmethod
    def _buffer(regions: Iterable[RegionRecord]) -> Tuple[RegionRecord, ...]:
        if isinstance(regions, tuple):
            return regions
        return tuple(regions)

    @staticmethod
    def _allocate(
        regions: Sequence[RegionRecord],
        config: PassConfig,
        total: int,
    ):
        def offset(running: int) -> Decimal:
            return truncate_offset(
                config.length_seconds, running, total, config.precision_digits
            )

        running = 0
        start = offset(running)

        for region in regions:
            nations_before = running
            running += region.nation_count
            end = offset(running)

            yield ScheduleEntry(
                region=region,
                start_offset=start,
                end_offset=end,
                nations_before=nations_before,
            )
            start = end


def truncate_offset(length_seconds: int, running: int, total: int, precision_digits: int = 0) -> Decimal:
    """length * running / total, truncated toward zero to 10^-precision_digits seconds."""
    if total == 0:
        return ticks_to_offset(0, precision_digits)
    ticks = length_seconds * 10 ** precision_digits * running // total
    return ticks_to_offset(ticks, precision_digits)


def ticks_to_offset(ticks: int, precision_digits: int) -> Decimal:
    """
    ticks * 10^-precision_digits as an exact Decimal.

    Built from the digit tuple: Decimal arithmetic (scaleb, *, -) rounds to the
    context precision (28 digits by default), which would round large offsets.
    """
    digits = tuple(int(d) for d in str(ticks))
    return Decimal((0, digits, -precision_digits))
