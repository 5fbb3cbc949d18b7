"""存储提供者接口。

所有存储后端适配器都必须满足 IStreamStorageProvider 协议。
各适配器是同一协议的独立实现，不共享基类状态。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import BinaryIO, Protocol, runtime_checkable

from .exceptions import StorageInvalidArgumentError
from .metadata import ObjectMetadata, ObjectWrapper

PATH_SEPARATOR = "/"


def normalize_object_name(object_name: str | None) -> str:
    """去掉对象名首尾的路径分隔符并校验。

    Args:
        object_name: 原始对象名

    Returns:
        str: 归一化后的对象名

    Raises:
        StorageInvalidArgumentError: 对象名为空或只包含分隔符
    """
    if object_name is not None:
        object_name = object_name.strip(PATH_SEPARATOR)
    if not object_name:
        raise StorageInvalidArgumentError("object_name")
    return object_name


def parse_int(value: object, default: int) -> int:
    """把配置值解析为整数，解析失败返回默认值。"""
    if isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


@runtime_checkable
class IStreamStorageProvider(Protocol):
    """对象存储提供者协议。

    除 configure 外，每个操作在进行任何 I/O 前都会校验对象名。
    """

    @property
    def provider_name(self) -> str:
        """提供者名称（如 "aliyun.oss"）。"""
        ...

    def configure(self, config: Mapping[str, str]) -> None:
        """应用配置。未知键忽略，数值解析失败回退到默认值，从不失败。"""
        ...

    def get_object(self, object_name: str) -> ObjectWrapper:
        """获取对象内容及元数据。

        Raises:
            StorageNotFoundError: 对象不存在
            StorageIOError: 后端故障
        """
        ...

    def get_object_metadata(self, object_name: str) -> ObjectMetadata:
        """只获取对象元数据，不传输内容。

        Raises:
            StorageNotFoundError: 对象不存在
            StorageIOError: 后端故障
        """
        ...

    def set_object_metadata(self, object_name: str, object_metadata: ObjectMetadata) -> None:
        """合并写入对象元数据。对象不存在时静默返回。"""
        ...

    def put_object(
        self,
        object_name: str,
        content: BinaryIO,
        override_if_exists: bool,
        object_metadata: ObjectMetadata | None = None,
    ) -> None:
        """写入对象。对象已存在且 override_if_exists 为 False 时静默返回。"""
        ...

    def delete_object(self, object_name: str) -> None:
        """删除对象。对象不存在时静默返回。"""
        ...

    def object_exists(self, object_name: str) -> bool:
        """检查对象是否存在。只有检查本身失败时才抛出 StorageIOError。"""
        ...


__all__ = [
    "IStreamStorageProvider",
    "PATH_SEPARATOR",
    "normalize_object_name",
    "parse_int",
]
