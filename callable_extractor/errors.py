"""Exceptions raised by the callable extractor."""

from pathlib import Path


class CallableNotFound(Exception):
    """Raised when a lookup exhausts its candidates without a match."""
    def __init__(self):
        super().__init__("Callable not found")


class ScopeCollision(Exception):
    """Raised by an unsafe call when a scope name shadows an ambient binding."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scope variable already exists: {name}")


class ParseError(Exception):
    """Raised when tree-sitter parsing fails or recovery is disabled."""
    def __init__(self, source_name: str, error: Exception):
        self.source_name = source_name
        self.original_error = error
        super().__init__(f"Failed to parse {source_name} as python: {error}")


class FileTooLargeError(Exception):
    """Raised when a file exceeds MAX_FILE_SIZE."""
    def __init__(self, file_path: Path, size: int, limit: int):
        self.file_path = file_path
        self.size = size
        self.limit = limit
        super().__init__(
            f"Refusing to scan {file_path} for callables: {size:,} bytes is over "
            f"the {limit:,} byte cap (raise it with CALLABLE_EXTRACTOR_MAX_FILE_SIZE)"
        )
