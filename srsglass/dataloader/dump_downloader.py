#!filepath: srsglass/dataloader/dump_downloader.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from srsglass.config.dump_config import DumpConfig
from srsglass.engines.dump_source_engine import DumpSourceEngine
from srsglass.utils.errors import AcquisitionError
from srsglass.utils.filesystem import FileSystem
from srsglass.utils.retry import Retry
from srsglass import logs

CHUNK_SIZE = 1 << 16


@dataclass(frozen=True)
class DumpHandle:
    path: Path
    dump_date: str
    downloaded: bool


class DumpDownloader:
    """
    regions.xml.gz 获取器（Snapshot Source）
    ---------------------------------------------------
    ✓ HTTP 流式下载 + 安全写入（tmp → rename）
    ✓ 连接错误 / 超时自动重试
    ✓ 可复用本地已有 dump
    ✓ 所有失败统一抛 AcquisitionError
    ---------------------------------------------------
    """

    def __init__(
        self,
        cfg: DumpConfig,
        user_nation: str,
        engine: Optional[DumpSourceEngine] = None,
    ):
        self.cfg = cfg
        self.engine = engine or DumpSourceEngine()
        self.user_agent = self.engine.user_agent(user_nation)

    # ---------------------------------------------------------
    def resolve(self, path: str | Path | None = None, use_existing: Optional[bool] = None) -> DumpHandle:
        """
        use_existing 且本地文件存在 → 直接使用；否则下载。
        """
        path = Path(path or self.cfg.path)
        if use_existing is None:
            use_existing = self.cfg.use_existing

        if use_existing and path.exists():
            logs.info(f"[Download] using existing dump {path}")
            return self.open_local(path)

        if use_existing:
            logs.warning(f"[Download] {path} not found, downloading instead")
        return self.download(path)

    # ---------------------------------------------------------
    def open_local(self, path: str | Path) -> DumpHandle:
        path = Path(path)
        try:
            mtime = os.stat(path).st_mtime
        except OSError as e:
            raise AcquisitionError(f"cannot read local dump {path}: {e}") from e

        return DumpHandle(
            path=path,
            dump_date=self.engine.dump_date_from_mtime(mtime),
            downloaded=False,
        )

    # ---------------------------------------------------------
    def download(self, path: str | Path) -> DumpHandle:
        path = Path(path)
        logs.info(f"[Download] {self.cfg.url} → {path}")

        try:
            last_modified = Retry.run(
                self._fetch,
                path,
                exceptions=(requests.ConnectionError, requests.Timeout),
                max_attempts=self.cfg.max_attempts,
                delay=1.0,
                backoff=2.0,
            )
        except requests.RequestException as e:
            raise AcquisitionError(f"cannot download dump from {self.cfg.url}: {e}") from e
        except OSError as e:
            raise AcquisitionError(f"cannot write dump to {path}: {e}") from e

        dump_date = self.engine.dump_date_from_header(last_modified)
        if dump_date is None:
            dump_date = self.engine.dump_date_from_mtime(os.stat(path).st_mtime)

        size = FileSystem.format_size(path.stat().st_size)
        logs.info(f"[Download] done → {path} ({size}, dump date {dump_date})")

        return DumpHandle(path=path, dump_date=dump_date, downloaded=True)

    # ---------------------------------------------------------
    @logs.catch(msg="dump fetch failed")
    def _fetch(self, path: Path) -> Optional[str]:
        headers = {"User-Agent": self.user_agent}

        with requests.get(
            self.cfg.url,
            headers=headers,
            timeout=self.cfg.timeout,
            stream=True,
        ) as resp:
            resp.raise_for_status()

            with FileSystem.atomic_open(path) as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)

            return resp.headers.get("Last-Modified")
