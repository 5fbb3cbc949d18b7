"""元数据映射 - 归一化元数据与后端原生元数据的双向转换。

两个方向都采用合并语义而不是替换：
- 内容类型为空时不覆盖目标
- 后端内容长度为负数时不覆盖目标
- 用户元数据逐项 upsert，目标中已有而源中没有的键保持不变
"""

from __future__ import annotations

from .metadata import BackendObjectMetadata, ObjectMetadata


def merge_user_metadata(source: dict[str, str], target: dict[str, str]) -> dict[str, str]:
    """把 source 中的每一项 upsert 到 target 中。

    Args:
        source: 源用户元数据
        target: 目标用户元数据（原地修改）

    Returns:
        dict[str, str]: target 本身
    """
    for key, value in source.items():
        target[key] = value
    return target


def map_backend_to_metadata(
    native: BackendObjectMetadata | None,
    metadata: ObjectMetadata | None,
) -> ObjectMetadata | None:
    """后端原生元数据 -> 归一化元数据（合并到 metadata 上）。

    Args:
        native: 后端原生元数据
        metadata: 归一化元数据（原地修改）

    Returns:
        ObjectMetadata | None: metadata 本身
    """
    if native is None or metadata is None:
        return metadata

    metadata.content_disposition = native.content_disposition
    if native.content_length is not None and native.content_length >= 0:
        metadata.content_length = native.content_length
    if native.content_type:
        metadata.content_type = native.content_type

    merge_user_metadata(native.user_metadata, metadata.user_metadata)
    return metadata


def map_metadata_to_backend(
    metadata: ObjectMetadata | None,
    native: BackendObjectMetadata | None,
) -> BackendObjectMetadata | None:
    """归一化元数据 -> 后端原生元数据（合并到 native 上）。

    内容长度不写入后端，由后端根据内容自行计算。

    Args:
        metadata: 归一化元数据
        native: 后端原生元数据（原地修改）

    Returns:
        BackendObjectMetadata | None: native 本身
    """
    if native is None or metadata is None:
        return native

    native.content_disposition = metadata.content_disposition
    if metadata.content_type:
        native.content_type = metadata.content_type

    merge_user_metadata(metadata.user_metadata, native.user_metadata)
    return native


__all__ = [
    "map_backend_to_metadata",
    "map_metadata_to_backend",
    "merge_user_metadata",
]
