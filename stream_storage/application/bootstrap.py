"""应用启动入口 - 按配置初始化日志与存储。"""

from __future__ import annotations

from stream_storage.common.logging import setup_logging
from stream_storage.infrastructure.storage import StorageManager

from .config import LogSettings, StorageSettings


def setup_storage(
    settings: StorageSettings | None = None,
    log_settings: LogSettings | None = None,
    *,
    name: str = "default",
) -> StorageManager:
    """初始化日志系统与指定名称的存储管理器。

    Args:
        settings: 存储配置，默认从环境变量加载
        log_settings: 日志配置，默认从环境变量加载
        name: 存储管理器实例名称

    Returns:
        StorageManager: 已初始化的存储管理器
    """
    log_settings = log_settings or LogSettings()
    setup_logging(
        log_level=log_settings.level,
        log_dir=log_settings.dir,
        enable_console=log_settings.enable_console,
        enable_file=log_settings.enable_file,
    )
    return StorageManager.get_instance(name).init_app(settings)


__all__ = [
    "setup_storage",
]
