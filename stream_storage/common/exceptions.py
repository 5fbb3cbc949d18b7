"""基础异常定义。

所有 stream_storage 异常的根类，其他层的异常都应继承此类。
"""

from __future__ import annotations


class StreamStorageError(Exception):
    """stream_storage 异常基类。

    Attributes:
        message: 错误消息
    """

    def __init__(self, message: str = "", *args: object) -> None:
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} message={self.message!r}>"


__all__ = [
    "StreamStorageError",
]
