#!filepath: srsglass/__init__.py

from .__version__ import __version__
from .utils.logger import Logging, logs
from .utils.retry import Retry
from .utils.filesystem import FileSystem
from .utils.errors import (
    SrsglassError,
    UserInputError,
    AcquisitionError,
    FormatError,
    ValidationError,
)
from .config.app_config import AppConfig

# alias 简化调用
retry = Retry
fs = FileSystem

__all__ = [
    "__version__",
    "logs", "Logging",
    "retry",
    "fs",
    "AppConfig",
    "SrsglassError", "UserInputError", "AcquisitionError", "FormatError", "ValidationError",
]
