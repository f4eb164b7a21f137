from __future__ import annotations

from typing import List, Optional

from assetpacker.models import ValidationResult


class PackError(Exception):
    """Base for every error that ends a packaging run."""

    exit_code = 1


class UsageError(PackError):
    """Malformed or unknown command-line input."""

    exit_code = 2

    def __init__(self, message: str, usage: str = ""):
        super().__init__(message)
        self.usage = usage


class ValidationError(PackError):
    """One or more request fields are missing or malformed."""

    exit_code = 2

    def __init__(self, results: List[ValidationResult]):
        self.results = list(results)
        super().__init__("\n".join(f"{r.code}: {r.message}" for r in self.results))


class CollisionError(PackError):
    pass


class EditorNotFoundError(PackError):
    pass


class PackIOError(PackError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
