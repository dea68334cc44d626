"""File repositories the browser lists and edits."""

from .base import FileRepository, ManagedFileRepository
from .local import LocalFileRepository

__all__ = ["FileRepository", "LocalFileRepository", "ManagedFileRepository"]
