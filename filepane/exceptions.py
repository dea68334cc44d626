"""Custom exception hierarchy for filepane.

Exception Hierarchy:
    FilePaneError (base)
    ├── FileOperationError - repository I/O
    │   ├── FileReadError
    │   ├── FileWriteError
    │   ├── FileNotFoundInRepositoryError
    │   └── InvalidFileNameError
    ├── SelectionError - selecting a record the browser does not list
    └── ConfigurationError - settings/configuration issues

Usage:
    from filepane.exceptions import FileReadError

    try:
        text = path.read_text()
    except OSError as e:
        raise FileReadError(path=str(path)) from e
"""

from typing import Any, Optional


class FilePaneError(Exception):
    """Base exception for all filepane errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., paths, names)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(FilePaneError):
    """Base exception for repository file operations."""

    pass


class FileReadError(FileOperationError):
    """Failed to load a file's contents."""

    def __init__(
        self,
        message: str = "Failed to read file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, retryable=True, **context)


class FileWriteError(FileOperationError):
    """Failed to persist a file's contents."""

    def __init__(
        self,
        message: str = "Failed to write file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, retryable=True, **context)


class FileNotFoundInRepositoryError(FileOperationError):
    """The repository does not list a record with this path."""

    def __init__(
        self,
        message: str = "File not found in repository",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


class InvalidFileNameError(FileOperationError):
    """A file name is empty, contains a separator, or is already taken."""

    def __init__(
        self,
        message: str = "Invalid file name",
        *,
        name: Optional[str] = None,
        **context: Any,
    ) -> None:
        if name is not None:
            context["name"] = name
        super().__init__(message, **context)


# =============================================================================
# Selection Errors
# =============================================================================


class SelectionError(FilePaneError):
    """A record outside the browser's file list was passed for selection.

    This always points at an inconsistency between collaborators, so it is
    raised instead of being silently accepted.
    """

    def __init__(
        self,
        message: str = "File is not part of the file list",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FilePaneError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
