"""工厂与管理器测试。"""

from __future__ import annotations

import io

import pytest

from stream_storage.application.bootstrap import setup_storage
from stream_storage.application.config import LocalStorageSettings, LogSettings, StorageSettings
from stream_storage.infrastructure.storage import (
    AliyunOssStorageProvider,
    LocalStreamStorageProvider,
    StorageManager,
    StorageProviderFactory,
)


def test_builtin_providers_registered():
    registered = StorageProviderFactory.get_registered()

    assert "aliyun.oss" in registered
    assert "local" in registered


def test_factory_creates_configured_provider(tmp_path):
    provider = StorageProviderFactory.create(
        "local", {"basePath": str(tmp_path), "bucketName": "assets"}
    )

    assert isinstance(provider, LocalStreamStorageProvider)
    assert provider.config.bucket_name == "assets"


def test_factory_creates_oss_provider_without_touching_network():
    provider = StorageProviderFactory.create("aliyun.oss", {"bucketName": "assets"})

    assert isinstance(provider, AliyunOssStorageProvider)
    assert provider.bucket_name == "assets"


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError, match="未注册"):
        StorageProviderFactory.create("ftp")


def test_manager_requires_initialization():
    manager = StorageManager.get_instance()

    assert not manager.is_initialized
    with pytest.raises(RuntimeError):
        manager.object_exists("a.txt")


def test_named_instances_are_independent(tmp_path):
    default = StorageManager.get_instance()
    backup = StorageManager.get_instance("backup")

    assert default is StorageManager.get_instance("default")
    assert default is not backup

    backup.init_provider("local", {"basePath": str(tmp_path)})
    assert backup.is_initialized
    assert not default.is_initialized


def test_manager_delegates_to_provider(tmp_path):
    manager = StorageManager.get_instance().init_app(
        StorageSettings(provider="local", local=LocalStorageSettings(base_path=str(tmp_path)))
    )

    manager.put_object("a.txt", io.BytesIO(b"abc"), True)

    assert manager.object_exists("/a.txt")
    assert manager.get_object_metadata("a.txt").content_length == 3
    with manager.get_object("a.txt") as obj:
        assert obj.content.read() == b"abc"

    manager.delete_object("a.txt")
    assert not manager.object_exists("a.txt")
    assert "local" in repr(manager)

    manager.cleanup()
    assert not manager.is_initialized


def test_setup_storage_initializes_named_manager(tmp_path):
    manager = setup_storage(
        StorageSettings(provider="local", local=LocalStorageSettings(base_path=str(tmp_path))),
        LogSettings(enable_console=False, enable_file=False),
        name="assets",
    )

    assert manager is StorageManager.get_instance("assets")
    assert manager.provider.provider_name == "local"
