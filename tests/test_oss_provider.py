"""阿里云 OSS 存储提供者测试（使用内存后端）。"""

from __future__ import annotations

import io

import pytest

from stream_storage.core.exceptions import (
    StorageInvalidArgumentError,
    StorageIOError,
    StorageNotFoundError,
)
from stream_storage.core.metadata import BackendObjectMetadata, ObjectMetadata
from stream_storage.core.provider import IStreamStorageProvider
from stream_storage.infrastructure.storage import AliyunOssStorageProvider
from stream_storage.infrastructure.storage.oss import provider as oss_provider_module

from .conftest import BUCKET


def test_provider_satisfies_protocol(oss_provider):
    assert isinstance(oss_provider, IStreamStorageProvider)
    assert oss_provider.provider_name == "aliyun.oss"
    assert oss_provider.bucket_name == BUCKET


def test_put_then_get_round_trip(oss_provider):
    oss_provider.put_object("docs/readme.txt", io.BytesIO(b"hello"), True)

    with oss_provider.get_object("docs/readme.txt") as obj:
        assert obj.object_name == "docs/readme.txt"
        assert obj.content.read() == b"hello"
        assert obj.metadata.content_type == "text/plain"
        assert obj.metadata.content_length == 5


def test_get_object_closes_stream_on_exit(oss_provider):
    oss_provider.put_object("a.bin", io.BytesIO(b"x"), True)

    with oss_provider.get_object("a.bin") as obj:
        content = obj.content

    assert content.closed


def test_separators_are_stripped(oss_provider, fake_backend):
    oss_provider.put_object("//docs/a.txt/", io.BytesIO(b"data"), True)

    assert (BUCKET, "docs/a.txt") in fake_backend.objects
    assert oss_provider.object_exists("docs/a.txt")
    assert oss_provider.object_exists("/docs/a.txt")
    assert oss_provider.get_object_metadata("docs/a.txt/").content_length == 4


def test_put_creates_missing_bucket_once(oss_provider, fake_backend):
    oss_provider.put_object("a.txt", io.BytesIO(b"1"), True)
    oss_provider.put_object("b.txt", io.BytesIO(b"2"), True)

    assert BUCKET in fake_backend.buckets
    assert fake_backend.called("create_bucket") == 1


def test_first_write_wins_without_override(oss_provider, fake_backend):
    oss_provider.put_object("a.txt", io.BytesIO(b"first"), False)
    oss_provider.put_object("a.txt", io.BytesIO(b"second"), False)

    assert fake_backend.stored("a.txt") == b"first"
    assert fake_backend.called("put_object") == 1


def test_last_write_wins_with_override(oss_provider, fake_backend):
    oss_provider.put_object("a.txt", io.BytesIO(b"first"), True)
    oss_provider.put_object("a.txt", io.BytesIO(b"second"), True)

    assert fake_backend.stored("a.txt") == b"second"


def test_get_missing_object_raises_not_found(oss_provider):
    with pytest.raises(StorageNotFoundError) as exc_info:
        oss_provider.get_object("missing.txt")

    assert exc_info.value.object_name == "missing.txt"
    assert not isinstance(exc_info.value, StorageIOError)


def test_get_metadata_of_missing_object_raises_not_found(oss_provider):
    with pytest.raises(StorageNotFoundError):
        oss_provider.get_object_metadata("/missing.txt")


def test_get_deleted_object_raises_not_found(oss_provider):
    oss_provider.put_object("a.txt", io.BytesIO(b"x"), True)
    oss_provider.delete_object("a.txt")

    with pytest.raises(StorageNotFoundError):
        oss_provider.get_object("a.txt")
    assert oss_provider.object_exists("a.txt") is False


def test_delete_missing_object_is_noop(oss_provider, fake_backend):
    oss_provider.delete_object("missing.txt")

    assert fake_backend.called("delete_object") == 0


def test_get_object_metadata_does_not_transfer_content(oss_provider, fake_backend):
    oss_provider.put_object("a.txt", io.BytesIO(b"abc"), True)

    metadata = oss_provider.get_object_metadata("a.txt")

    assert metadata.content_length == 3
    assert fake_backend.called("get_object") == 0


def test_set_metadata_merges_onto_existing(oss_provider):
    oss_provider.put_object(
        "notes.dat",
        io.BytesIO(b"n"),
        True,
        ObjectMetadata(content_type="text/plain", user_metadata={"b": "2"}),
    )

    oss_provider.set_object_metadata(
        "notes.dat", ObjectMetadata(content_type="", user_metadata={"a": "1"})
    )

    metadata = oss_provider.get_object_metadata("notes.dat")
    assert metadata.content_type == "text/plain"
    assert metadata.user_metadata == {"a": "1", "b": "2"}


def test_set_metadata_on_missing_object_is_noop(oss_provider, fake_backend):
    oss_provider.set_object_metadata("missing.txt", ObjectMetadata(user_metadata={"a": "1"}))

    assert fake_backend.called("modify_object_metadata") == 0


def test_set_metadata_rejects_none(untouchable_provider):
    with pytest.raises(StorageInvalidArgumentError) as exc_info:
        untouchable_provider.set_object_metadata("a.txt", None)

    assert exc_info.value.param_name == "object_metadata"


@pytest.mark.parametrize("name", [None, "", "/", "///"])
@pytest.mark.parametrize(
    "operation",
    [
        lambda p, n: p.get_object(n),
        lambda p, n: p.get_object_metadata(n),
        lambda p, n: p.set_object_metadata(n, ObjectMetadata()),
        lambda p, n: p.put_object(n, io.BytesIO(b"x"), True),
        lambda p, n: p.delete_object(n),
        lambda p, n: p.object_exists(n),
    ],
    ids=["get", "get_metadata", "set_metadata", "put", "delete", "exists"],
)
def test_invalid_object_name_rejected_before_backend(untouchable_provider, operation, name):
    with pytest.raises(StorageInvalidArgumentError) as exc_info:
        operation(untouchable_provider, name)

    assert exc_info.value.param_name == "object_name"
    assert isinstance(exc_info.value, ValueError)


def test_put_rejects_missing_content(untouchable_provider):
    with pytest.raises(StorageInvalidArgumentError) as exc_info:
        untouchable_provider.put_object("a.txt", None, True)

    assert exc_info.value.param_name == "content"


def test_mime_type_inferred_once_when_empty(oss_provider, fake_backend, monkeypatch):
    lookups = []

    def fake_lookup(extension):
        lookups.append(extension)
        return "image/png"

    monkeypatch.setattr(oss_provider_module, "lookup_mime_type", fake_lookup)
    caller_metadata = ObjectMetadata(content_type="")

    oss_provider.put_object("img/logo.png", io.BytesIO(b"png"), True, caller_metadata)

    assert lookups == [".png"]
    assert fake_backend.stored_metadata("img/logo.png").content_type == "image/png"
    assert caller_metadata.content_type == ""


def test_mime_type_not_inferred_when_supplied(oss_provider, fake_backend, monkeypatch):
    lookups = []
    monkeypatch.setattr(
        oss_provider_module, "lookup_mime_type", lambda ext: lookups.append(ext) or "x/y"
    )

    oss_provider.put_object(
        "data.txt", io.BytesIO(b"{}"), True, ObjectMetadata(content_type="application/json")
    )

    assert lookups == []
    assert fake_backend.stored_metadata("data.txt").content_type == "application/json"


def test_unknown_extension_falls_back_to_octet_stream(oss_provider, fake_backend):
    oss_provider.put_object("blob", io.BytesIO(b"?"), True)

    assert fake_backend.stored_metadata("blob").content_type == "application/octet-stream"


def test_configured_cache_control_applied_to_writes(fake_backend):
    provider = AliyunOssStorageProvider(backend_factory=lambda config: fake_backend)
    provider.configure({"bucketName": BUCKET, "objectMetadata_CacheControl": "max-age=60"})

    provider.put_object("a.txt", io.BytesIO(b"x"), True)
    assert fake_backend.stored_metadata("a.txt").cache_control == "max-age=60"

    fake_backend.objects[(BUCKET, "a.txt")] = (
        b"x",
        BackendObjectMetadata(content_type="text/plain", cache_control="no-cache"),
    )
    provider.set_object_metadata("a.txt", ObjectMetadata())
    assert fake_backend.stored_metadata("a.txt").cache_control == "max-age=60"


def test_no_cache_control_when_not_configured(oss_provider, fake_backend):
    oss_provider.put_object("a.txt", io.BytesIO(b"x"), True)

    assert fake_backend.stored_metadata("a.txt").cache_control is None


@pytest.mark.parametrize(
    "operation",
    [
        lambda p: p.get_object("a.txt"),
        lambda p: p.get_object_metadata("a.txt"),
        lambda p: p.set_object_metadata("a.txt", ObjectMetadata()),
        lambda p: p.put_object("a.txt", io.BytesIO(b"x"), True),
        lambda p: p.delete_object("a.txt"),
        lambda p: p.object_exists("a.txt"),
    ],
    ids=["get", "get_metadata", "set_metadata", "put", "delete", "exists"],
)
def test_backend_faults_become_io_errors(broken_provider, operation):
    with pytest.raises(StorageIOError) as exc_info:
        operation(broken_provider)

    assert isinstance(exc_info.value.cause, ConnectionError)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_backend_construction_failure_becomes_io_error():
    def factory(config):
        raise RuntimeError("bad credentials")

    provider = AliyunOssStorageProvider(backend_factory=factory)
    provider.configure({"bucketName": BUCKET})

    with pytest.raises(StorageIOError) as exc_info:
        provider.object_exists("a.txt")

    assert isinstance(exc_info.value.cause, RuntimeError)


def test_backend_client_is_shared_until_reconfigured(fake_backend):
    created = []

    def factory(config):
        created.append(config)
        return fake_backend

    provider = AliyunOssStorageProvider(backend_factory=factory)
    provider.configure({"bucketName": BUCKET})
    provider.object_exists("a.txt")
    provider.object_exists("b.txt")
    assert len(created) == 1

    provider.configure({"bucketName": "other"})
    provider.object_exists("a.txt")
    assert len(created) == 2
    assert created[1].bucket_name == "other"
