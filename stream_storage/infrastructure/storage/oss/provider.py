"""阿里云 OSS 存储提供者。"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import threading
from typing import BinaryIO

from stream_storage.common.logging import logger
from stream_storage.core.backend import IStorageBackend
from stream_storage.core.exceptions import (
    StorageInvalidArgumentError,
    StorageNotFoundError,
    translate_backend_errors,
)
from stream_storage.core.mapper import map_backend_to_metadata, map_metadata_to_backend
from stream_storage.core.metadata import BackendObjectMetadata, ObjectMetadata, ObjectWrapper
from stream_storage.core.mime import get_file_extension, lookup_mime_type
from stream_storage.core.provider import normalize_object_name

from .client import OssBackendClient
from .config import OssProviderConfig

BackendFactory = Callable[[OssProviderConfig], IStorageBackend]


class AliyunOssStorageProvider:
    """阿里云 OSS 存储提供者。

    后端客户端在第一次使用时按当前配置创建，此后由所有调用共享，
    重新 configure() 会丢弃旧客户端。并发调用的线程安全性与 SDK 客户端一致。

    使用示例:
        provider = AliyunOssStorageProvider()
        provider.configure({
            "endpoint": "oss-cn-hangzhou.aliyuncs.com",
            "region": "cn-hangzhou",
            "accessKeyId": "...",
            "accessKeySecret": "...",
            "bucketName": "my-bucket",
        })
        provider.put_object("docs/readme.txt", open("readme.txt", "rb"), override_if_exists=True)
        with provider.get_object("docs/readme.txt") as obj:
            data = obj.content.read()
    """

    def __init__(self, backend_factory: BackendFactory | None = None) -> None:
        """初始化提供者。

        Args:
            backend_factory: 根据配置创建后端客户端的工厂（默认 OssBackendClient）
        """
        self._backend_factory: BackendFactory = backend_factory or OssBackendClient
        self._config = OssProviderConfig()
        self._backend: IStorageBackend | None = None
        self._lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return "aliyun.oss"

    @property
    def config(self) -> OssProviderConfig:
        return self._config

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    @property
    def opt_count_quota_per_day(self) -> int:
        """每日操作次数配额（只保存，不强制执行）。"""
        return self._config.opt_count_quota_per_day

    @property
    def backend(self) -> IStorageBackend:
        """获取共享的后端客户端，首次访问时创建。"""
        if self._backend is None:
            with self._lock:
                if self._backend is None:
                    self._backend = self._backend_factory(self._config)
        return self._backend

    def configure(self, config: Mapping[str, str]) -> None:
        new_config = OssProviderConfig.from_mapping(config)
        with self._lock:
            self._config = new_config
            self._backend = None
        logger.info(
            f"OSS存储提供者配置完成 - 端点: {new_config.endpoint or '默认'}, 桶: {new_config.bucket_name}"
        )

    def get_object(self, object_name: str) -> ObjectWrapper:
        object_name = normalize_object_name(object_name)
        with translate_backend_errors("获取对象失败"):
            backend = self.backend
            if backend.object_exists(self.bucket_name, object_name):
                content, native = backend.get_object(self.bucket_name, object_name)
                metadata = map_backend_to_metadata(native, ObjectMetadata())
                return ObjectWrapper(object_name, content, metadata)
        raise StorageNotFoundError(object_name)

    def get_object_metadata(self, object_name: str) -> ObjectMetadata:
        object_name = normalize_object_name(object_name)
        with translate_backend_errors("获取对象元数据失败"):
            backend = self.backend
            if backend.object_exists(self.bucket_name, object_name):
                native = backend.get_object_metadata(self.bucket_name, object_name)
                return map_backend_to_metadata(native, ObjectMetadata())
        raise StorageNotFoundError(object_name)

    def set_object_metadata(self, object_name: str, object_metadata: ObjectMetadata) -> None:
        object_name = normalize_object_name(object_name)
        if object_metadata is None:
            raise StorageInvalidArgumentError("object_metadata")

        with translate_backend_errors("设置对象元数据失败"):
            backend = self.backend
            if not backend.object_exists(self.bucket_name, object_name):
                return
            native = backend.get_object_metadata(self.bucket_name, object_name)
            native = map_metadata_to_backend(object_metadata, native)
            self._apply_cache_control(native)
            backend.modify_object_metadata(self.bucket_name, object_name, native)
            logger.debug(f"对象元数据已更新: {self.bucket_name}/{object_name}")

    def put_object(
        self,
        object_name: str,
        content: BinaryIO,
        override_if_exists: bool,
        object_metadata: ObjectMetadata | None = None,
    ) -> None:
        object_name = normalize_object_name(object_name)
        if content is None:
            raise StorageInvalidArgumentError("content")

        with translate_backend_errors("写入对象失败"):
            backend = self.backend
            if not backend.bucket_exists(self.bucket_name):
                backend.create_bucket(self.bucket_name)
                logger.debug(f"存储桶已创建: {self.bucket_name}")

            if override_if_exists or not backend.object_exists(self.bucket_name, object_name):
                native = self._build_backend_metadata(object_name, object_metadata)
                backend.put_object(self.bucket_name, object_name, content, native)
                logger.debug(f"对象写入成功: {self.bucket_name}/{object_name}")

    def delete_object(self, object_name: str) -> None:
        object_name = normalize_object_name(object_name)
        with translate_backend_errors("删除对象失败"):
            backend = self.backend
            if backend.object_exists(self.bucket_name, object_name):
                backend.delete_object(self.bucket_name, object_name)
                logger.debug(f"对象删除成功: {self.bucket_name}/{object_name}")

    def object_exists(self, object_name: str) -> bool:
        object_name = normalize_object_name(object_name)
        with translate_backend_errors("检查对象是否存在失败"):
            return self.backend.object_exists(self.bucket_name, object_name)

    def _build_backend_metadata(
        self, object_name: str, object_metadata: ObjectMetadata | None
    ) -> BackendObjectMetadata:
        """构建写入用的后端元数据，内容类型为空时按扩展名推断。"""
        native = BackendObjectMetadata()
        if object_metadata is not None:
            map_metadata_to_backend(object_metadata, native)
        if not native.content_type:
            native.content_type = lookup_mime_type(get_file_extension(object_name))
        self._apply_cache_control(native)
        return native

    def _apply_cache_control(self, native: BackendObjectMetadata) -> None:
        if self._config.cache_control:
            native.cache_control = self._config.cache_control

    def __repr__(self) -> str:
        return f"<AliyunOssStorageProvider bucket={self.bucket_name!r}>"


__all__ = [
    "AliyunOssStorageProvider",
]
