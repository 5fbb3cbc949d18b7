"""存储提供者工厂 - 注册机制。"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from stream_storage.common.logging import logger
from stream_storage.core.provider import IStreamStorageProvider


class StorageProviderFactory:
    """存储提供者工厂。

    通过注册机制支持多种后端，名称与提供者的 provider_name 一致。

    使用示例:
        StorageProviderFactory.register("aliyun.oss", AliyunOssStorageProvider)
        provider = StorageProviderFactory.create("aliyun.oss", {"bucketName": "assets"})
    """

    _providers: dict[str, Callable[[], IStreamStorageProvider]] = {}

    @classmethod
    def register(cls, name: str, provider_class: Callable[[], IStreamStorageProvider]) -> None:
        """注册存储提供者。

        Args:
            name: 提供者名称
            provider_class: 提供者类（无参构造）
        """
        cls._providers[name] = provider_class
        logger.debug(f"注册存储提供者: {name} -> {getattr(provider_class, '__name__', provider_class)}")

    @classmethod
    def create(cls, name: str, config: Mapping[str, str] | None = None) -> IStreamStorageProvider:
        """创建并配置存储提供者。

        Args:
            name: 提供者名称
            config: 扁平配置映射

        Returns:
            IStreamStorageProvider: 已配置的提供者实例

        Raises:
            ValueError: 提供者未注册
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(
                f"存储提供者 '{name}' 未注册。"
                f"可用提供者: {available}"
            )

        provider = cls._providers[name]()
        provider.configure(config or {})
        logger.info(f"创建存储提供者: {name}")
        return provider

    @classmethod
    def get_registered(cls) -> list[str]:
        """获取已注册的提供者名称。"""
        return list(cls._providers.keys())


__all__ = [
    "StorageProviderFactory",
]
