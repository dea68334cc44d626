"""Data models for filepane."""

from .files import FileRecord, FileType, SelectionRecord

__all__ = ["FileRecord", "FileType", "SelectionRecord"]
