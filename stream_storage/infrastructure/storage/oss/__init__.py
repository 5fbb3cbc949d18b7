"""阿里云 OSS 存储后端。"""

from .client import OssBackendClient
from .config import DEFAULT_OPT_COUNT_QUOTA_PER_DAY, OssProviderConfig
from .provider import AliyunOssStorageProvider

__all__ = [
    "DEFAULT_OPT_COUNT_QUOTA_PER_DAY",
    "AliyunOssStorageProvider",
    "OssBackendClient",
    "OssProviderConfig",
]
