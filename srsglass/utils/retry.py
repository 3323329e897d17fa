#!filepath: srsglass/utils/retry.py
import time
import random
from typing import Callable, Tuple, Type

from srsglass import logs


class Retry:
    """
    重试工具（只有 Snapshot Source 使用，decode / schedule 从不重试）
    ---------------------------------------------------
    - 指数退避：delay * backoff^(attempt-1)
    - jitter：±20%，避免多个客户端同时重连
    - 最后一次失败原样抛出，由调用方包装成 AcquisitionError
    ---------------------------------------------------
    """

    @staticmethod
    def wait_seconds(attempt: int, delay: float, backoff: float, jitter: bool = True) -> float:
        wait = delay * backoff ** (attempt - 1)
        if jitter:
            wait *= random.uniform(0.8, 1.2)
        return wait

    @staticmethod
    def run(
        func: Callable,
        *args,
        exceptions: Tuple[Type[Exception], ...] = (Exception,),
        max_attempts: int = 3,
        delay: float = 1.0,
        backoff: float = 2.0,
        jitter: bool = True,
        **kwargs,
    ):
        name = getattr(func, "__name__", repr(func))

        for attempt in range(1, max_attempts + 1):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                if attempt == max_attempts:
                    logs.error(f"[Retry] {name} gave up after {attempt} attempts: {e}")
                    raise

                wait = Retry.wait_seconds(attempt, delay, backoff, jitter)
                logs.warning(
                    f"[Retry] {name} attempt {attempt}/{max_attempts} failed "
                    f"({type(e).__name__}: {e}), next try in {wait:.2f}s"
                )
                time.sleep(wait)
