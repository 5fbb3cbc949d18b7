"""本地文件系统存储提供者。

目录结构：
    <basePath>/<bucketName>/<objectName>                     对象内容
    <basePath>/.metadata/<bucketName>/<objectName>.json      对象元数据
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict
import json
import os
import shutil
import tempfile
from typing import Any, BinaryIO

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from stream_storage.common.logging import logger
from stream_storage.core.exceptions import (
    StorageInvalidArgumentError,
    StorageNotFoundError,
    translate_backend_errors,
)
from stream_storage.core.mapper import map_backend_to_metadata, map_metadata_to_backend
from stream_storage.core.metadata import BackendObjectMetadata, ObjectMetadata, ObjectWrapper
from stream_storage.core.mime import get_file_extension, lookup_mime_type
from stream_storage.core.provider import PATH_SEPARATOR, normalize_object_name

METADATA_DIR = ".metadata"


class LocalProviderConfig(BaseModel):
    """本地存储配置（Pydantic）。"""

    model_config = ConfigDict(extra="ignore")

    base_path: str = Field(default="./storage", alias="basePath", description="基础路径")
    bucket_name: str = Field(default="default", alias="bucketName", description="桶名（子目录）")
    cache_control: str = Field(
        default="",
        alias="objectMetadata_CacheControl",
        description="写入对象时统一设置的 Cache-Control",
    )

    @field_validator("base_path", "bucket_name", mode="before")
    @classmethod
    def _default_if_empty(cls, value: Any, info: ValidationInfo) -> str:
        if value is None or str(value) == "":
            return cls.model_fields[info.field_name].default
        return str(value)

    @field_validator("cache_control", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return "" if value is None else str(value)


class LocalStreamStorageProvider:
    """本地文件系统存储提供者。

    与 OSS 提供者语义一致：写入不覆盖时静默跳过，删除不存在的对象为空操作，
    元数据合并写入。

    使用示例:
        provider = LocalStreamStorageProvider()
        provider.configure({"basePath": "/data/storage", "bucketName": "assets"})
        provider.put_object("img/logo.png", open("logo.png", "rb"), override_if_exists=False)
    """

    def __init__(self) -> None:
        self._config = LocalProviderConfig()

    @property
    def provider_name(self) -> str:
        return "local"

    @property
    def config(self) -> LocalProviderConfig:
        return self._config

    @property
    def bucket_path(self) -> str:
        return os.path.join(self._config.base_path, self._config.bucket_name)

    def configure(self, config: Mapping[str, str]) -> None:
        self._config = LocalProviderConfig.model_validate(dict(config or {}))
        logger.info(f"本地存储提供者配置完成: {self.bucket_path}")

    def get_object(self, object_name: str) -> ObjectWrapper:
        object_name, path = self._resolve(object_name)
        with translate_backend_errors("获取对象失败"):
            if os.path.isfile(path):
                metadata = map_backend_to_metadata(self._read_metadata(object_name, path), ObjectMetadata())
                return ObjectWrapper(object_name, open(path, "rb"), metadata)
        raise StorageNotFoundError(object_name)

    def get_object_metadata(self, object_name: str) -> ObjectMetadata:
        object_name, path = self._resolve(object_name)
        with translate_backend_errors("获取对象元数据失败"):
            if os.path.isfile(path):
                return map_backend_to_metadata(self._read_metadata(object_name, path), ObjectMetadata())
        raise StorageNotFoundError(object_name)

    def set_object_metadata(self, object_name: str, object_metadata: ObjectMetadata) -> None:
        object_name, path = self._resolve(object_name)
        if object_metadata is None:
            raise StorageInvalidArgumentError("object_metadata")

        with translate_backend_errors("设置对象元数据失败"):
            if not os.path.isfile(path):
                return
            native = map_metadata_to_backend(object_metadata, self._read_metadata(object_name, path))
            if self._config.cache_control:
                native.cache_control = self._config.cache_control
            self._write_metadata(object_name, native)

    def put_object(
        self,
        object_name: str,
        content: BinaryIO,
        override_if_exists: bool,
        object_metadata: ObjectMetadata | None = None,
    ) -> None:
        object_name, path = self._resolve(object_name)
        if content is None:
            raise StorageInvalidArgumentError("content")

        with translate_backend_errors("写入对象失败"):
            if not os.path.isdir(self.bucket_path):
                os.makedirs(self.bucket_path, exist_ok=True)
                logger.debug(f"存储目录已创建: {self.bucket_path}")

            if override_if_exists or not os.path.isfile(path):
                native = BackendObjectMetadata()
                if object_metadata is not None:
                    map_metadata_to_backend(object_metadata, native)
                if not native.content_type:
                    native.content_type = lookup_mime_type(get_file_extension(object_name))
                if self._config.cache_control:
                    native.cache_control = self._config.cache_control

                self._write_content(path, content)
                self._write_metadata(object_name, native)
                logger.debug(f"文件写入成功: {path}")

    def delete_object(self, object_name: str) -> None:
        object_name, path = self._resolve(object_name)
        with translate_backend_errors("删除对象失败"):
            if os.path.isfile(path):
                os.remove(path)
                meta_path = self._metadata_path(object_name)
                if os.path.isfile(meta_path):
                    os.remove(meta_path)
                logger.debug(f"文件删除成功: {path}")

    def object_exists(self, object_name: str) -> bool:
        _, path = self._resolve(object_name)
        with translate_backend_errors("检查对象是否存在失败"):
            return os.path.isfile(path)

    def _resolve(self, object_name: str) -> tuple[str, str]:
        """归一化对象名并计算文件路径，拒绝跳出桶目录的对象名。"""
        object_name = normalize_object_name(object_name)
        root = os.path.abspath(self.bucket_path)
        path = os.path.abspath(os.path.join(root, *object_name.split(PATH_SEPARATOR)))
        if os.path.commonpath([root, path]) != root or path == root:
            raise StorageInvalidArgumentError("object_name", f"对象名越出存储目录: {object_name}")
        return object_name, path

    def _write_content(self, path: str, content: BinaryIO) -> None:
        """先写入同目录下的临时文件，复制完成后再替换目标文件。

        复制中途失败时目标文件保持原样，临时文件被删除。
        """
        directory = os.path.dirname(path)
        os.makedirs(directory, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(dir=directory, prefix=".", suffix=".tmp", delete=False)
        try:
            with tmp:
                shutil.copyfileobj(content, tmp)
            os.replace(tmp.name, path)
        except BaseException:
            if os.path.exists(tmp.name):
                os.remove(tmp.name)
            raise

    def _metadata_path(self, object_name: str) -> str:
        return os.path.join(
            self._config.base_path,
            METADATA_DIR,
            self._config.bucket_name,
            *object_name.split(PATH_SEPARATOR),
        ) + ".json"

    def _read_metadata(self, object_name: str, path: str) -> BackendObjectMetadata:
        meta_path = self._metadata_path(object_name)
        native = BackendObjectMetadata()
        if os.path.isfile(meta_path):
            with open(meta_path, encoding="utf-8") as f:
                native = BackendObjectMetadata(**json.load(f))
        native.content_length = os.path.getsize(path)
        return native

    def _write_metadata(self, object_name: str, native: BackendObjectMetadata) -> None:
        meta_path = self._metadata_path(object_name)
        os.makedirs(os.path.dirname(meta_path), exist_ok=True)
        data = asdict(native)
        data.pop("content_length")
        with open(meta_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<LocalStreamStorageProvider path={self.bucket_path!r}>"


__all__ = [
    "LocalProviderConfig",
    "LocalStreamStorageProvider",
]
