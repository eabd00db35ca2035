"""Pulumi dynamic providers for file_provider resources."""

from .file import File, FileProvider

__all__ = [
    "File",
    "FileProvider",
]
