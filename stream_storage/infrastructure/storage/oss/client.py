"""阿里云 OSS 后端客户端。

基于 alibabacloud-oss-v2 SDK 实现 IStorageBackend 协议。
SDK 的异常不在此处理，由提供者统一转换。
"""

from __future__ import annotations

from typing import Any, BinaryIO

import alibabacloud_oss_v2 as oss

from stream_storage.common.logging import log_performance, logger
from stream_storage.core.metadata import BackendObjectMetadata

from .config import OssProviderConfig

# 单次传输超过该耗时（秒）记录性能警告
SLOW_TRANSFER_THRESHOLD = 3.0


def _to_backend_metadata(result: Any) -> BackendObjectMetadata:
    """把 GetObject/HeadObject 结果转换为后端原生元数据。"""
    content_length = getattr(result, "content_length", None)
    return BackendObjectMetadata(
        content_type=getattr(result, "content_type", None) or "",
        content_length=-1 if content_length is None else content_length,
        content_disposition=getattr(result, "content_disposition", None),
        cache_control=getattr(result, "cache_control", None),
        user_metadata=dict(getattr(result, "metadata", None) or {}),
    )


class OssBackendClient:
    """阿里云 OSS 客户端封装。

    使用示例:
        client = OssBackendClient(OssProviderConfig.from_mapping({
            "region": "cn-hangzhou",
            "accessKeyId": "...",
            "accessKeySecret": "...",
        }))
        client.object_exists("my-bucket", "a/b.txt")
    """

    def __init__(self, config: OssProviderConfig) -> None:
        cfg = oss.config.load_default()
        cfg.credentials_provider = oss.credentials.StaticCredentialsProvider(
            config.access_key_id,
            config.access_key_secret,
        )
        if config.region:
            cfg.region = config.region
        if config.endpoint:
            cfg.endpoint = config.endpoint

        self._client = oss.Client(cfg)
        logger.debug(
            f"OSS客户端创建成功 - 区域: {config.region or '默认'}, 端点: {config.endpoint or '默认'}"
        )

    def object_exists(self, bucket_name: str, object_name: str) -> bool:
        return self._client.is_object_exist(bucket=bucket_name, key=object_name)

    def bucket_exists(self, bucket_name: str) -> bool:
        return self._client.is_bucket_exist(bucket=bucket_name)

    def create_bucket(self, bucket_name: str) -> None:
        self._client.put_bucket(oss.PutBucketRequest(bucket=bucket_name))

    @log_performance(threshold=SLOW_TRANSFER_THRESHOLD)
    def get_object(self, bucket_name: str, object_name: str) -> tuple[BinaryIO, BackendObjectMetadata]:
        result = self._client.get_object(oss.GetObjectRequest(bucket=bucket_name, key=object_name))
        return result.body, _to_backend_metadata(result)

    def get_object_metadata(self, bucket_name: str, object_name: str) -> BackendObjectMetadata:
        result = self._client.head_object(oss.HeadObjectRequest(bucket=bucket_name, key=object_name))
        return _to_backend_metadata(result)

    @log_performance(threshold=SLOW_TRANSFER_THRESHOLD)
    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        content: BinaryIO,
        metadata: BackendObjectMetadata,
    ) -> None:
        self._client.put_object(
            oss.PutObjectRequest(
                bucket=bucket_name,
                key=object_name,
                body=content,
                content_type=metadata.content_type or None,
                content_disposition=metadata.content_disposition,
                cache_control=metadata.cache_control,
                metadata=metadata.user_metadata or None,
            )
        )

    def modify_object_metadata(
        self, bucket_name: str, object_name: str, metadata: BackendObjectMetadata
    ) -> None:
        """修改对象元数据。

        OSS 没有单独的修改元数据接口，这里用 metadata_directive="REPLACE" 的同键拷贝实现。
        REPLACE 会整体替换对象头，BackendObjectMetadata 不携带的头
        （Content-Encoding、Expires 等）在每次修改后都会丢失。
        """
        self._client.copy_object(
            oss.CopyObjectRequest(
                bucket=bucket_name,
                key=object_name,
                source_bucket=bucket_name,
                source_key=object_name,
                metadata_directive="REPLACE",
                content_type=metadata.content_type or None,
                content_disposition=metadata.content_disposition,
                cache_control=metadata.cache_control,
                metadata=metadata.user_metadata or None,
            )
        )

    def delete_object(self, bucket_name: str, object_name: str) -> None:
        self._client.delete_object(oss.DeleteObjectRequest(bucket=bucket_name, key=object_name))


__all__ = [
    "OssBackendClient",
]
