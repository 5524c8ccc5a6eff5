"""Exception classes describing terminal tokenizer conditions."""

from typing import Optional


class OrgError(Exception):
    """Base exception for Org parsing conditions with context information."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        """
        Initialize the error.

        Args:
            message: Core error description
            line: 1-based line number where the condition was detected
        """
        self.message = message
        self.line = line
        super().__init__(message)


class OrgInputTooLargeError(OrgError):
    """The input exceeds the configured maximum size in bytes."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__("input exceeds maximum allowed size", line=1)


class OrgLineTooLongError(OrgError):
    """A single line exceeds the configured maximum length in characters."""

    def __init__(self, line: int, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__("line exceeds maximum allowed length", line=line)


class OrgCancelledError(OrgError):
    """The host signalled cancellation while the document was being tokenized."""

    def __init__(self, line: int) -> None:
        super().__init__("operation cancelled", line=line)
