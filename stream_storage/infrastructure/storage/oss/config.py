"""阿里云 OSS 提供者配置。

从扁平的字符串映射解析，键名与外部配置保持一致（accessKeyId 等）。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stream_storage.core.provider import parse_int

DEFAULT_OPT_COUNT_QUOTA_PER_DAY = 10000


class OssProviderConfig(BaseModel):
    """OSS 提供者配置（Pydantic）。

    未知键忽略；optCountQuotaPerDay 缺失或无法解析时回退为 10000。
    """

    model_config = ConfigDict(extra="ignore")

    endpoint: str = Field(default="", description="端点URL")
    region: str = Field(default="", description="区域（如 cn-hangzhou）")
    access_key_id: str = Field(default="", alias="accessKeyId", description="访问密钥ID")
    access_key_secret: str = Field(default="", alias="accessKeySecret", description="访问密钥")
    bucket_name: str = Field(default="", alias="bucketName", description="桶名")
    opt_count_quota_per_day: int = Field(
        default=DEFAULT_OPT_COUNT_QUOTA_PER_DAY,
        alias="optCountQuotaPerDay",
        description="每日操作次数配额（仅保存，不强制执行）",
    )
    cache_control: str = Field(
        default="",
        alias="objectMetadata_CacheControl",
        description="写入对象时统一设置的 Cache-Control",
    )

    @field_validator(
        "endpoint",
        "region",
        "access_key_id",
        "access_key_secret",
        "bucket_name",
        "cache_control",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("opt_count_quota_per_day", mode="before")
    @classmethod
    def _parse_quota(cls, value: Any) -> int:
        return parse_int(value, DEFAULT_OPT_COUNT_QUOTA_PER_DAY)

    @classmethod
    def from_mapping(cls, config: Mapping[str, str] | None) -> OssProviderConfig:
        """从扁平配置映射构建。"""
        return cls.model_validate(dict(config or {}))


__all__ = [
    "DEFAULT_OPT_COUNT_QUOTA_PER_DAY",
    "OssProviderConfig",
]
