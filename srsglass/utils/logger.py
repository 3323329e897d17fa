#!filepath: srsglass/utils/logger.py
import os
import json
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable

# Logger 初始化只执行一次（CLI 可通过 logs.reconfigure 覆盖）
_LOGGER_CONFIGURED = False


class Logging:
    """
    日志模块（loguru 封装）
    ---------------------------------------
    - 按日期切割
    - 日志保留周期
    - 函数级日志装饰器 catch()
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self._configured = False

    def _configure(self) -> None:
        """
        配置全局 logger（懒加载：第一次写日志时执行）
        """
        global _LOGGER_CONFIGURED

        os.makedirs(self.log_dir, exist_ok=True)
        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )

        self._configured = True
        _LOGGER_CONFIGURED = True
        logger.info("\n-----------Logger initialized successfully.-----------")

    def reconfigure(
        self,
        log_dir: str,
        rotation: str,
        retention: str,
        level: str,
    ) -> None:
        """Apply a LogConfig loaded from base.yml."""
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = level
        self._configure()

    def _ensure(self) -> None:
        if not self._configured and not _LOGGER_CONFIGURED:
            self._configure()

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_outputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    self.info(
                        f"[CALL] {func.__name__} args={args}, kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    self.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_outputs:
                    self.info(f"[RETURN] {func.__name__} result={result}")

                if log_time:
                    cost = perf_counter() - start
                    self.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


# 默认全局 logs
logs = Logging()
