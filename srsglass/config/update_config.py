# srsglass/config/update_config.py
from __future__ import annotations

from pydantic import BaseModel, Field

from srsglass.engines.types import PassConfig


class UpdateConfig(BaseModel):
    """
    UpdateConfig

    语义：
      - major_length / minor_length : 两次 update 的总时长（秒，正整数）
      - precision                  : 时间戳保留的小数位（0 = 整秒）
    """

    major_length: int = Field(default=5350, gt=0)
    minor_length: int = Field(default=3550, gt=0)
    precision: int = Field(default=0, ge=0)

    def major(self) -> PassConfig:
        return PassConfig(
            name="major",
            length_seconds=self.major_length,
            precision_digits=self.precision,
        )

    def minor(self) -> PassConfig:
        return PassConfig(
            name="minor",
            length_seconds=self.minor_length,
            precision_digits=self.precision,
        )
