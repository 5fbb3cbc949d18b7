"""存储异常定义。

三类失败：
- StorageInvalidArgumentError: 调用参数错误，在任何后端调用之前抛出
- StorageNotFoundError: 对象不存在，只由显式的存在性检查抛出
- StorageIOError: 后端协作方的其他任何故障，原始异常作为 cause 保留

NotFound 与 InvalidArgument 向上传播时不会被再次包装。
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from stream_storage.common.exceptions import StreamStorageError


class StorageError(StreamStorageError):
    """存储异常基类。"""

    pass


class StorageInvalidArgumentError(StorageError, ValueError):
    """参数无效异常。

    Attributes:
        param_name: 无效的参数名
    """

    def __init__(self, param_name: str, message: str | None = None) -> None:
        super().__init__(message or f"参数无效: {param_name}")
        self.param_name = param_name


class StorageNotFoundError(StorageError):
    """存储对象不存在异常。

    Attributes:
        object_name: 不存在的对象名
    """

    def __init__(self, object_name: str, message: str = "存储对象不存在") -> None:
        super().__init__(message)
        self.object_name = object_name

    def __str__(self) -> str:
        return f"{self.message}: {self.object_name}"


class StorageIOError(StorageError):
    """存储 I/O 异常，包装后端故障。

    Attributes:
        cause: 原始异常
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} ({type(self.cause).__name__}: {self.cause})"
        return self.message


@contextmanager
def translate_backend_errors(message: str) -> Iterator[None]:
    """把代码块中后端抛出的异常转换为 StorageIOError。

    已经归类的 StorageError（NotFound、InvalidArgument 等）原样抛出。

    Args:
        message: StorageIOError 的错误消息
    """
    try:
        yield
    except StorageError:
        raise
    except Exception as exc:
        raise StorageIOError(message, exc) from exc


__all__ = [
    "StorageError",
    "StorageIOError",
    "StorageInvalidArgumentError",
    "StorageNotFoundError",
    "translate_backend_errors",
]
