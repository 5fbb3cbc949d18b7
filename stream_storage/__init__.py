"""Stream Storage - 统一的对象存储提供者抽象。

模块结构：
- common: 最基础层（异常基类、日志系统）
- core: 核心层（对象元数据、元数据映射、异常、提供者协议）
- infrastructure: 基础设施层（阿里云 OSS / 本地文件系统提供者、工厂、管理器）
- application: 应用层（配置管理）
"""

from . import application, common, core, infrastructure
from .core import (
    IStreamStorageProvider,
    ObjectMetadata,
    ObjectWrapper,
    StorageError,
    StorageInvalidArgumentError,
    StorageIOError,
    StorageNotFoundError,
)
from .infrastructure import (
    AliyunOssStorageProvider,
    LocalStreamStorageProvider,
    StorageManager,
    StorageProviderFactory,
)
from .application.bootstrap import setup_storage

__version__ = "0.1.0"
__all__ = [
    "application",
    "common",
    "core",
    "infrastructure",
    "AliyunOssStorageProvider",
    "IStreamStorageProvider",
    "LocalStreamStorageProvider",
    "ObjectMetadata",
    "ObjectWrapper",
    "StorageError",
    "StorageIOError",
    "StorageInvalidArgumentError",
    "StorageManager",
    "StorageNotFoundError",
    "StorageProviderFactory",
    "setup_storage",
]
