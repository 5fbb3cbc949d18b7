"""MIME 类型查询。"""

from __future__ import annotations

import mimetypes
import posixpath

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_file_extension(object_name: str) -> str:
    """获取对象名的扩展名（含点号，如 ".txt"），没有扩展名时返回空字符串。"""
    return posixpath.splitext(object_name)[1]


def lookup_mime_type(file_extension: str) -> str:
    """根据扩展名查询 MIME 类型。

    Args:
        file_extension: 扩展名，可带或不带点号

    Returns:
        str: MIME 类型，未知扩展名返回 application/octet-stream
    """
    if not file_extension:
        return DEFAULT_MIME_TYPE
    if not file_extension.startswith("."):
        file_extension = f".{file_extension}"
    mime_type, _ = mimetypes.guess_type(f"object{file_extension.lower()}", strict=False)
    return mime_type or DEFAULT_MIME_TYPE


__all__ = [
    "DEFAULT_MIME_TYPE",
    "get_file_extension",
    "lookup_mime_type",
]
