"""核心层模块。

提供与具体后端无关的存储抽象：
- 对象元数据与对象包装
- 元数据映射（合并语义）
- 异常定义
- 提供者协议与后端协作方协议
"""

from .backend import IStorageBackend
from .exceptions import (
    StorageError,
    StorageInvalidArgumentError,
    StorageIOError,
    StorageNotFoundError,
    translate_backend_errors,
)
from .mapper import map_backend_to_metadata, map_metadata_to_backend, merge_user_metadata
from .metadata import BackendObjectMetadata, ObjectMetadata, ObjectWrapper
from .mime import lookup_mime_type
from .provider import IStreamStorageProvider, normalize_object_name

__all__ = [
    # 异常
    "StorageError",
    "StorageIOError",
    "StorageInvalidArgumentError",
    "StorageNotFoundError",
    "translate_backend_errors",
    # 元数据
    "BackendObjectMetadata",
    "ObjectMetadata",
    "ObjectWrapper",
    "map_backend_to_metadata",
    "map_metadata_to_backend",
    "merge_user_metadata",
    "lookup_mime_type",
    # 协议
    "IStorageBackend",
    "IStreamStorageProvider",
    "normalize_object_name",
]
