#!filepath: srsglass/utils/filesystem.py
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from srsglass import logs


class FileSystem:
    """
    统一文件系统工具
    - 自动创建目录
    - 安全写入文件（临时文件 → rename）
    - 删除文件/目录
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        创建目录（如果不存在）
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] mkdir: {p}")
        return p

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """
        将字节转换为可读格式（KB / MB）
        """
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

    @staticmethod
    def tmp_path(path: str | Path) -> Path:
        path = Path(path)
        return path.with_name(path.name + ".tmp")

    @staticmethod
    @contextmanager
    def atomic_open(path: str | Path) -> Iterator[BinaryIO]:
        """
        原子写入（避免部分写入导致文件损坏）
            1) yield <path>.tmp 的二进制句柄
            2) 正常退出 → rename 到 <path>；异常 → 删除 tmp
        """
        path = Path(path)
        FileSystem.ensure_dir(path.parent)
        tmp_path = FileSystem.tmp_path(path)

        try:
            with open(tmp_path, "wb") as f:
                yield f
        except BaseException:
            FileSystem.remove(tmp_path)
            raise

        tmp_path.replace(path)
        logs.debug(f"[FS] atomic write done: {path}")

    @staticmethod
    def remove(path: str | Path) -> None:
        """
        安全删除文件/目录
        """
        p = Path(path)

        if not p.exists():
            return

        if p.is_dir():
            shutil.rmtree(p)
            logs.debug(f"[FS] rmdir: {p}")
        else:
            p.unlink()
            logs.debug(f"[FS] unlink: {p}")
