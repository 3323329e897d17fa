# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from srsglass import logs
from tests.dump_factory import dump_bytes


@pytest.fixture(autouse=True)
def disable_file_logger(monkeypatch):
    # 不创建 logs/ 目录，也不写文件
    logger.remove()
    logger.add(lambda msg: None)
    monkeypatch.setattr(logs, "_configured", True)
    yield


@pytest.fixture
def write_dump(tmp_path: Path):
    """
    Factory fixture: write a gzip dump under tmp_path.

        path = write_dump(region_xml("A", 10), region_xml("B", 20))
    """

    def _write(*regions: str, name: str = "regions.xml.gz") -> Path:
        p = tmp_path / name
        p.write_bytes(dump_bytes(*regions))
        return p

    return _write
