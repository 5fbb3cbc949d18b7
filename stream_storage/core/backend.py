"""后端协作方接口。

提供者对底层存储 SDK 客户端的全部要求。任何方法都可能抛出任意异常，
提供者把这些异常统一视为后端故障。
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

from .metadata import BackendObjectMetadata


@runtime_checkable
class IStorageBackend(Protocol):
    """存储后端客户端协议。"""

    def object_exists(self, bucket_name: str, object_name: str) -> bool: ...

    def bucket_exists(self, bucket_name: str) -> bool: ...

    def create_bucket(self, bucket_name: str) -> None: ...

    def get_object(
        self, bucket_name: str, object_name: str
    ) -> tuple[BinaryIO, BackendObjectMetadata]: ...

    def get_object_metadata(self, bucket_name: str, object_name: str) -> BackendObjectMetadata: ...

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        content: BinaryIO,
        metadata: BackendObjectMetadata,
    ) -> None: ...

    def modify_object_metadata(
        self, bucket_name: str, object_name: str, metadata: BackendObjectMetadata
    ) -> None: ...

    def delete_object(self, bucket_name: str, object_name: str) -> None: ...


__all__ = [
    "IStorageBackend",
]
