"""Error types for catalog loading and the performance harness."""

from __future__ import annotations

from pathlib import Path


class SyntaxKitError(Exception):
    """Base class for all syntaxkit errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}"


class InvalidInputError(SyntaxKitError):
    """Raised when run parameters are rejected before any measurement."""


class SourceReadError(SyntaxKitError):
    """Raised when a source file cannot be read. Fatal to the whole run."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class CatalogError(SyntaxKitError):
    """Raised on malformed grammar catalog input, with the offending location."""

    def __init__(self, message: str, source: str, location: str = "") -> None:
        self.source = source
        self.location = location
        super().__init__(message)

    def format(self) -> str:
        result = f"error: {self.message}\n  --> {self.source}"
        if self.location:
            result += f"\n  in {self.location}"
        return result


class EngineError(SyntaxKitError):
    """Raised when the parsing engine fails on a source file. Fatal to the whole run."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"engine failed on {path}: {reason}")
