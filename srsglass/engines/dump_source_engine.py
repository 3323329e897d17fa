from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from srsglass.__version__ import __version__
from srsglass.utils.errors import UserInputError


class DumpSourceEngine:
    """
    Engine 层（纯逻辑）：
    - 不做任何 I/O
    - 不依赖 requests / Path / OS
    - 只负责：User-Agent、dump 日期、输出文件名规则
    """

    PROJECT = "srsglass"
    AUTHOR = "Esfalsa"

    # --------------------------------------------------
    @staticmethod
    def require_nation(user_nation: Optional[str]) -> str:
        nation = (user_nation or "").strip()
        if not nation:
            raise UserInputError(
                "a user nation is required to identify requests to NationStates "
                "(--nation or SRSGLASS_NATION)"
            )
        return nation

    def user_agent(self, user_nation: str) -> str:
        nation = self.require_nation(user_nation)
        return f"{self.PROJECT}/{__version__} (by:{self.AUTHOR}, usedBy:{nation})"

    # --------------------------------------------------
    @staticmethod
    def dump_date_from_header(last_modified: Optional[str]) -> Optional[str]:
        """
        HTTP Last-Modified → YYYY-MM-DD（UTC）；无法解析时返回 None。
        """
        if not last_modified:
            return None
        try:
            dt = parsedate_to_datetime(last_modified)
        except (TypeError, ValueError):
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).strftime("%Y-%m-%d")

    @staticmethod
    def dump_date_from_mtime(mtime: float) -> str:
        return datetime.fromtimestamp(mtime, tz=timezone.utc).strftime("%Y-%m-%d")

    # --------------------------------------------------
    @staticmethod
    def output_filename(template: str, dump_date: Optional[str]) -> str:
        date = dump_date or datetime.now(timezone.utc).strftime("%Y-%m-%d")
        return template.format(date=date)
