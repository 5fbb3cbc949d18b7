"""日志管理器 - 统一的日志配置和管理。

提供：
- 统一的日志配置（控制台输出、文件滚动）
- 性能监控装饰器

注意：存储核心不记录错误日志，异常只通过抛出向调用方报告。
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
import os
import time

from loguru import logger

# 移除默认配置，由setup_logging统一配置
logger.remove()


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    enable_console: bool = True,
    enable_file: bool = True,
    rotation: str = "00:00",
    retention_days: int = 7,
) -> None:
    """设置日志配置。

    Args:
        log_level: 日志级别（DEBUG/INFO/WARNING/ERROR/CRITICAL）
        log_dir: 日志目录（默认：./log）
        enable_console: 是否输出到控制台
        enable_file: 是否输出到文件
        rotation: 滚动策略（时间如 "00:00"，或大小如 "100 MB"）
        retention_days: 日志保留天数（默认：7 天）
    """
    log_level = log_level.upper()
    log_dir = log_dir or "log"

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}:{function}:{line}</cyan> - "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss} | "
        "{level: <8} | "
        "{name}:{function}:{line} - "
        "{message}"
    )

    # 控制台输出
    if enable_console:
        logger.add(
            lambda msg: print(msg, end=""),
            format=console_format,
            level=log_level,
            colorize=True,
        )

    # 文件输出
    if enable_file:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "storage_{time:YYYY-MM-DD}.log"),
            rotation=rotation,
            retention=f"{retention_days} days",
            level=log_level,
            format=file_format,
            encoding="utf-8",
            enqueue=True,  # 异步写入
        )

    logger.info(
        f"日志系统初始化完成 | 级别: {log_level} | "
        f"目录: {log_dir if enable_file else '-'}"
    )


def log_performance(threshold: float = 1.0) -> Callable:
    """性能监控装饰器。

    记录函数执行时间，超过阈值时警告。异常原样抛出，不在此记录。

    Args:
        threshold: 警告阈值（秒）

    使用示例:
        @log_performance(threshold=0.5)
        def upload():
            # 如果执行时间超过0.5秒，会记录警告
            pass
    """
    def decorator[T](func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start_time = time.time()
            result = func(*args, **kwargs)
            duration = time.time() - start_time

            if duration > threshold:
                logger.warning(
                    f"性能警告: {func.__module__}.{func.__qualname__} 执行耗时 {duration:.3f}s "
                    f"(阈值: {threshold}s)"
                )
            else:
                logger.debug(
                    f"性能: {func.__module__}.{func.__qualname__} 执行耗时 {duration:.3f}s"
                )

            return result

        return wrapper
    return decorator


__all__ = [
    "log_performance",
    "logger",
    "setup_logging",
]
