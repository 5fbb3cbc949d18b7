"""基础设施层模块。

外部依赖的实现：对象存储提供者、工厂与管理器。
"""

from .storage import (
    AliyunOssStorageProvider,
    LocalStreamStorageProvider,
    StorageManager,
    StorageProviderFactory,
)

__all__ = [
    "AliyunOssStorageProvider",
    "LocalStreamStorageProvider",
    "StorageManager",
    "StorageProviderFactory",
]
