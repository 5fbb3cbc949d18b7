"""存储配置。

使用 pydantic-settings 从环境变量和 .env 文件加载配置，
再转换为提供者 configure() 所接收的扁平字符串映射。
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogSettings(BaseSettings):
    """日志配置。

    环境变量前缀: LOG_
    示例: LOG_LEVEL, LOG_DIR
    """

    level: str = Field(
        default="INFO",
        description="日志级别"
    )
    dir: str | None = Field(
        default=None,
        description="日志目录（默认 ./log）"
    )
    enable_console: bool = Field(
        default=True,
        description="是否输出到控制台"
    )
    enable_file: bool = Field(
        default=False,
        description="是否输出到文件"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class OssStorageSettings(BaseSettings):
    """阿里云 OSS 配置。

    环境变量前缀: STORAGE_OSS_
    示例: STORAGE_OSS_ENDPOINT, STORAGE_OSS_BUCKET_NAME
    """

    endpoint: str = Field(
        default="",
        description="端点URL"
    )
    region: str = Field(
        default="",
        description="区域"
    )
    access_key_id: str = Field(
        default="",
        description="访问密钥ID"
    )
    access_key_secret: str = Field(
        default="",
        description="访问密钥"
    )
    bucket_name: str = Field(
        default="",
        description="桶名"
    )
    opt_count_quota_per_day: str = Field(
        default="",
        description="每日操作次数配额（为空或非法时取默认值 10000）"
    )
    cache_control: str = Field(
        default="",
        description="写入对象时统一设置的 Cache-Control"
    )

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_OSS_",
        case_sensitive=False,
    )

    def to_provider_config(self) -> dict[str, str]:
        """转换为提供者的扁平配置映射。"""
        return {
            "endpoint": self.endpoint,
            "region": self.region,
            "accessKeyId": self.access_key_id,
            "accessKeySecret": self.access_key_secret,
            "bucketName": self.bucket_name,
            "optCountQuotaPerDay": self.opt_count_quota_per_day,
            "objectMetadata_CacheControl": self.cache_control,
        }


class LocalStorageSettings(BaseSettings):
    """本地存储配置。

    环境变量前缀: STORAGE_LOCAL_
    示例: STORAGE_LOCAL_BASE_PATH, STORAGE_LOCAL_BUCKET_NAME
    """

    base_path: str = Field(
        default="./storage",
        description="基础路径"
    )
    bucket_name: str = Field(
        default="default",
        description="桶名（子目录）"
    )
    cache_control: str = Field(
        default="",
        description="写入对象时统一设置的 Cache-Control"
    )

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_LOCAL_",
        case_sensitive=False,
    )

    def to_provider_config(self) -> dict[str, str]:
        """转换为提供者的扁平配置映射。"""
        return {
            "basePath": self.base_path,
            "bucketName": self.bucket_name,
            "objectMetadata_CacheControl": self.cache_control,
        }


class StorageSettings(BaseSettings):
    """存储配置。

    环境变量前缀: STORAGE_
    示例: STORAGE_PROVIDER=aliyun.oss
    """

    provider: str = Field(
        default="local",
        description="存储提供者（aliyun.oss/local）"
    )
    oss: OssStorageSettings = Field(default_factory=OssStorageSettings)
    local: LocalStorageSettings = Field(default_factory=LocalStorageSettings)

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def to_provider_config(self) -> dict[str, str]:
        """返回当前提供者的扁平配置映射。"""
        if self.provider == "aliyun.oss":
            return self.oss.to_provider_config()
        if self.provider == "local":
            return self.local.to_provider_config()
        return {}


__all__ = [
    "LocalStorageSettings",
    "LogSettings",
    "OssStorageSettings",
    "StorageSettings",
]
