"""Exception types raised by catalog loading, resolution and the build model."""

from __future__ import annotations

from typing import Iterable, List, Optional


class InitforgeError(Exception):
    """Base class for all initforge errors."""


class InvalidVersionError(InitforgeError, ValueError):
    """Raised when a version or version range expression cannot be parsed."""


class UnknownIdentifier(InitforgeError, LookupError):
    """A request referenced a catalog id that does not exist.

    Args:
        kind: Catalog element kind, i.e. "dependency", "packaging".
        identifier: The id that could not be found.
    """

    def __init__(self, kind: str, identifier: str, message: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(message or f"Unknown {kind} '{identifier}' check project metadata")


class UnsupportedPlatformVersion(InitforgeError):
    """A version-range lookup needed by the request found no matching entry."""

    def __init__(self, version, element: Optional[str] = None, message: Optional[str] = None):
        self.version = version
        self.element = element
        if message is None:
            if element:
                message = f"{element} is not available for platform version {version}"
            else:
                message = f"Platform version {version} is not supported"
        super().__init__(message)


class CatalogIntegrityError(InitforgeError):
    """The catalog is internally inconsistent. Raised at construction only."""

    def __init__(self, problems: Iterable[str]):
        self.problems: List[str] = list(problems)
        summary = "; ".join(self.problems) if self.problems else "invalid catalog"
        super().__init__(f"Invalid catalog: {summary}")


class BuildModelStateError(InitforgeError):
    """A build model operation is not allowed in the model's current state."""


class BuildModelSealedError(BuildModelStateError):
    """Raised when a sealed build model is mutated."""
