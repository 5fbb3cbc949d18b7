"""测试公共夹具。"""

from __future__ import annotations

import copy
import io

import pytest

from stream_storage.core.metadata import BackendObjectMetadata
from stream_storage.infrastructure.storage import (
    AliyunOssStorageProvider,
    LocalStreamStorageProvider,
    StorageManager,
)

BUCKET = "test-bucket"


class FakeOssBackend:
    """内存中的 IStorageBackend 实现，记录所有调用。"""

    def __init__(self) -> None:
        self.buckets: set[str] = set()
        self.objects: dict[tuple[str, str], tuple[bytes, BackendObjectMetadata]] = {}
        self.calls: list[tuple] = []

    def object_exists(self, bucket_name, object_name):
        self.calls.append(("object_exists", bucket_name, object_name))
        return (bucket_name, object_name) in self.objects

    def bucket_exists(self, bucket_name):
        self.calls.append(("bucket_exists", bucket_name))
        return bucket_name in self.buckets

    def create_bucket(self, bucket_name):
        self.calls.append(("create_bucket", bucket_name))
        self.buckets.add(bucket_name)

    def get_object(self, bucket_name, object_name):
        self.calls.append(("get_object", bucket_name, object_name))
        data, metadata = self.objects[(bucket_name, object_name)]
        return io.BytesIO(data), self._with_length(data, metadata)

    def get_object_metadata(self, bucket_name, object_name):
        self.calls.append(("get_object_metadata", bucket_name, object_name))
        data, metadata = self.objects[(bucket_name, object_name)]
        return self._with_length(data, metadata)

    def put_object(self, bucket_name, object_name, content, metadata):
        self.calls.append(("put_object", bucket_name, object_name))
        self.objects[(bucket_name, object_name)] = (content.read(), copy.deepcopy(metadata))

    def modify_object_metadata(self, bucket_name, object_name, metadata):
        self.calls.append(("modify_object_metadata", bucket_name, object_name))
        data, _ = self.objects[(bucket_name, object_name)]
        self.objects[(bucket_name, object_name)] = (data, copy.deepcopy(metadata))

    def delete_object(self, bucket_name, object_name):
        self.calls.append(("delete_object", bucket_name, object_name))
        del self.objects[(bucket_name, object_name)]

    def stored(self, object_name: str) -> bytes:
        return self.objects[(BUCKET, object_name)][0]

    def stored_metadata(self, object_name: str) -> BackendObjectMetadata:
        return self.objects[(BUCKET, object_name)][1]

    def called(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    @staticmethod
    def _with_length(data: bytes, metadata: BackendObjectMetadata) -> BackendObjectMetadata:
        result = copy.deepcopy(metadata)
        result.content_length = len(data)
        return result


class BrokenOssBackend:
    """所有调用都抛出网络异常的后端。"""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError(f"network unreachable: {name}")

        return fail


@pytest.fixture
def fake_backend() -> FakeOssBackend:
    return FakeOssBackend()


@pytest.fixture
def oss_provider(fake_backend: FakeOssBackend) -> AliyunOssStorageProvider:
    provider = AliyunOssStorageProvider(backend_factory=lambda config: fake_backend)
    provider.configure({"bucketName": BUCKET, "region": "cn-hangzhou"})
    return provider


@pytest.fixture
def broken_provider() -> AliyunOssStorageProvider:
    provider = AliyunOssStorageProvider(backend_factory=lambda config: BrokenOssBackend())
    provider.configure({"bucketName": BUCKET})
    return provider


@pytest.fixture
def untouchable_provider() -> AliyunOssStorageProvider:
    """任何后端访问都会使测试失败的提供者。"""

    def factory(config):
        pytest.fail("backend must not be touched")

    provider = AliyunOssStorageProvider(backend_factory=factory)
    provider.configure({"bucketName": BUCKET})
    return provider


@pytest.fixture
def local_provider(tmp_path) -> LocalStreamStorageProvider:
    provider = LocalStreamStorageProvider()
    provider.configure({"basePath": str(tmp_path), "bucketName": BUCKET})
    return provider


@pytest.fixture(autouse=True)
def reset_storage_manager():
    yield
    StorageManager.reset_instance()
