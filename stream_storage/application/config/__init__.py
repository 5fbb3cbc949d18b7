"""配置模块。

使用 pydantic-settings 管理存储与日志配置。
"""

from .settings import (
    LocalStorageSettings,
    LogSettings,
    OssStorageSettings,
    StorageSettings,
)

__all__ = [
    "LocalStorageSettings",
    "LogSettings",
    "OssStorageSettings",
    "StorageSettings",
]
