"""对象元数据与对象包装类型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO


@dataclass
class ObjectMetadata:
    """归一化的对象元数据（与后端无关）。

    content_length 为 None 表示未设置；user_metadata 的键不做大小写归一化。
    """

    content_type: str = ""
    content_length: int | None = None
    content_disposition: str | None = None
    user_metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class BackendObjectMetadata:
    """后端原生元数据。

    content_length 为 -1 表示后端未给出长度。
    """

    content_type: str = ""
    content_length: int = -1
    content_disposition: str | None = None
    cache_control: str | None = None
    user_metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class ObjectWrapper:
    """get_object 的返回值。

    content 由调用方持有，使用完毕后必须关闭，推荐使用 with 语句：

        with provider.get_object("a/b.txt") as obj:
            data = obj.content.read()
    """

    object_name: str
    content: BinaryIO
    metadata: ObjectMetadata

    def close(self) -> None:
        """关闭内容流。"""
        self.content.close()

    def __enter__(self) -> ObjectWrapper:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "BackendObjectMetadata",
    "ObjectMetadata",
    "ObjectWrapper",
]
