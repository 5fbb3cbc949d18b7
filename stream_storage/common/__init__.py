"""Common 层模块。

最基础层，提供：
- 异常基类
- 日志系统
"""

from .exceptions import StreamStorageError
from .logging import log_performance, logger, setup_logging

__all__ = [
    # 异常
    "StreamStorageError",
    # 日志
    "logger",
    "setup_logging",
    "log_performance",
]
