"""对象存储系统模块。

支持的存储提供者：
- aliyun.oss: 阿里云对象存储
- local: 本地文件系统

使用工厂模式，可以轻松切换存储后端。
"""

from .factory import StorageProviderFactory
from .local import LocalProviderConfig, LocalStreamStorageProvider
from .manager import StorageManager
from .oss import AliyunOssStorageProvider, OssBackendClient, OssProviderConfig

# 注册内置提供者
StorageProviderFactory.register("aliyun.oss", AliyunOssStorageProvider)
StorageProviderFactory.register("local", LocalStreamStorageProvider)

__all__ = [
    "AliyunOssStorageProvider",
    "LocalProviderConfig",
    "LocalStreamStorageProvider",
    "OssBackendClient",
    "OssProviderConfig",
    "StorageManager",
    "StorageProviderFactory",
]
