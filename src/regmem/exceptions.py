"""Exception hierarchy for regmem."""

from typing import Any, Optional


class RegmemError(Exception):
    """Base exception for all regmem errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class FetchError(RegmemError):
    """
    A document could not be fetched after all retry attempts.

    Distinct from a missing document, which the fetcher reports as None.
    """

    def __init__(self, url: str, original_error: Optional[Exception] = None):
        super().__init__("Fetch failed", {"url": url})
        self.url = url
        self.original_error = original_error

    def __str__(self) -> str:
        base = super().__str__()
        if self.original_error:
            return f"{base} | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base


class OutputError(RegmemError):
    """Writing the output file failed."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        super().__init__("Could not write output", {"path": path})
        self.path = path
        self.original_error = original_error

    def __str__(self) -> str:
        base = super().__str__()
        if self.original_error:
            return f"{base} | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base
