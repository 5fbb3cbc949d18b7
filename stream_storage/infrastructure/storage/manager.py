"""存储管理器 - 命名多实例模式。

提供统一的存储访问入口，支持多实例（如 assets、backup 各自独立）。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import BinaryIO

from stream_storage.application.config import StorageSettings
from stream_storage.common.logging import logger
from stream_storage.core.metadata import ObjectMetadata, ObjectWrapper
from stream_storage.core.provider import IStreamStorageProvider

from .factory import StorageProviderFactory


class StorageManager:
    """存储管理器（命名多实例）。

    使用示例:
        # 从环境变量加载配置
        storage = StorageManager.get_instance()
        storage.init_app()

        # 命名实例，直接指定提供者与配置
        backup = StorageManager.get_instance("backup")
        backup.init_provider("aliyun.oss", {"bucketName": "backup", ...})

        storage.put_object("a/b.txt", stream, override_if_exists=True)
    """

    _instances: dict[str, StorageManager] = {}

    def __init__(self, name: str = "default") -> None:
        """初始化存储管理器。

        Args:
            name: 实例名称
        """
        self.name = name
        self._provider: IStreamStorageProvider | None = None

    @classmethod
    def get_instance(cls, name: str = "default") -> StorageManager:
        """获取指定名称的实例。

        Args:
            name: 实例名称，默认为 "default"

        Returns:
            StorageManager: 存储管理器实例
        """
        if name not in cls._instances:
            cls._instances[name] = cls(name)
        return cls._instances[name]

    @classmethod
    def reset_instance(cls, name: str | None = None) -> None:
        """重置实例（仅用于测试）。

        Args:
            name: 要重置的实例名称。如果为 None，则重置所有实例。
        """
        if name is None:
            cls._instances.clear()
        elif name in cls._instances:
            del cls._instances[name]

    def init_app(self, settings: StorageSettings | None = None) -> StorageManager:
        """根据配置初始化存储提供者。

        Args:
            settings: 存储配置，默认从环境变量加载

        Returns:
            self: 支持链式调用
        """
        settings = settings or StorageSettings()
        return self.init_provider(settings.provider, settings.to_provider_config())

    def init_provider(self, provider_name: str, config: Mapping[str, str] | None = None) -> StorageManager:
        """直接指定提供者名称与扁平配置初始化。

        Args:
            provider_name: 已注册的提供者名称
            config: 扁平配置映射

        Returns:
            self: 支持链式调用
        """
        self._provider = StorageProviderFactory.create(provider_name, config)
        logger.info(f"存储管理器 [{self.name}] 初始化完成: {provider_name}")
        return self

    @property
    def provider(self) -> IStreamStorageProvider:
        """获取存储提供者。"""
        if self._provider is None:
            raise RuntimeError(f"存储管理器 [{self.name}] 未初始化，请先调用 init_app()")
        return self._provider

    @property
    def is_initialized(self) -> bool:
        return self._provider is not None

    def get_object(self, object_name: str) -> ObjectWrapper:
        return self.provider.get_object(object_name)

    def get_object_metadata(self, object_name: str) -> ObjectMetadata:
        return self.provider.get_object_metadata(object_name)

    def set_object_metadata(self, object_name: str, object_metadata: ObjectMetadata) -> None:
        self.provider.set_object_metadata(object_name, object_metadata)

    def put_object(
        self,
        object_name: str,
        content: BinaryIO,
        override_if_exists: bool,
        object_metadata: ObjectMetadata | None = None,
    ) -> None:
        self.provider.put_object(object_name, content, override_if_exists, object_metadata)

    def delete_object(self, object_name: str) -> None:
        self.provider.delete_object(object_name)

    def object_exists(self, object_name: str) -> bool:
        return self.provider.object_exists(object_name)

    def cleanup(self) -> None:
        """释放提供者。"""
        if self._provider is not None:
            self._provider = None
            logger.info(f"存储管理器 [{self.name}] 已清理")

    def __repr__(self) -> str:
        provider_name = self._provider.provider_name if self._provider else "未初始化"
        return f"<StorageManager name={self.name} provider={provider_name}>"


__all__ = [
    "StorageManager",
]
