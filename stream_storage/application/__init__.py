"""应用层模块。

提供配置管理与启动入口（bootstrap.setup_storage）。
"""

from . import config

__all__ = [
    "config",
]
