"""Data models for platform versions and version ranges."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Qualifier(Enum):
    """Version qualifiers, declared in ascending order.

    A snapshot of ``x.y.z`` sorts after the ``x.y.z`` release: a
    ``2.3.0.BUILD-SNAPSHOT`` platform falls outside ``[2.0.0,2.3.0)`` and
    inside ``2.3.0``.
    """

    MILESTONE = "M"
    RELEASE_CANDIDATE = "RC"
    RELEASE = "RELEASE"
    SNAPSHOT = "BUILD-SNAPSHOT"

    @property
    def rank(self) -> int:
        """Position of the qualifier in the total order."""
        return _QUALIFIER_RANK[self]


_QUALIFIER_RANK = {q: i for i, q in enumerate(Qualifier)}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A comparable platform version.

    Equality and ordering use (major, minor, patch, qualifier, qualifier
    number, label); ``text`` only keeps the original spelling for display.
    """

    major: int
    minor: int = 0
    patch: int = 0
    qualifier: Qualifier = Qualifier.RELEASE
    qualifier_version: int = 0
    label: str = ""
    text: Optional[str] = field(default=None, compare=False)

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string, see ``versioning.parser.parse_version``."""
        from .parser import parse_version  # pylint: disable=import-outside-toplevel
        return parse_version(text)

    @property
    def sort_key(self) -> Tuple[int, int, int, int, int, str]:
        return (self.major, self.minor, self.patch, self.qualifier.rank, self.qualifier_version, self.label)

    @property
    def is_snapshot(self) -> bool:
        return self.qualifier is Qualifier.SNAPSHOT

    @property
    def is_prerelease(self) -> bool:
        """True for milestones and release candidates."""
        return self.qualifier in (Qualifier.MILESTONE, Qualifier.RELEASE_CANDIDATE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __str__(self) -> str:
        if self.text:
            return self.text
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.qualifier is Qualifier.RELEASE:
            return base
        if self.qualifier is Qualifier.SNAPSHOT:
            return f"{base}.BUILD-SNAPSHOT"
        suffix = self.label or self.qualifier.value
        return f"{base}.{suffix}{self.qualifier_version}"


@dataclass(frozen=True)
class VersionRange:
    """A version range with a mandatory lower bound and an optional upper bound.

    A range without upper bound means "this version and every later one".
    """

    lower: Version
    lower_inclusive: bool = True
    upper: Optional[Version] = None
    upper_inclusive: bool = False

    def match(self, version: Version) -> bool:
        """Return True if ``version`` lies within this range."""
        if self.lower_inclusive:
            if version < self.lower:
                return False
        elif version <= self.lower:
            return False
        if self.upper is None:
            return True
        if self.upper_inclusive:
            return version <= self.upper
        return version < self.upper

    def __contains__(self, version: Version) -> bool:
        return self.match(version)

    def __str__(self) -> str:
        if self.upper is None and self.lower_inclusive:
            return str(self.lower)
        start = "[" if self.lower_inclusive else "("
        end = "]" if self.upper_inclusive else ")"
        upper = str(self.upper) if self.upper is not None else ""
        return f"{start}{self.lower},{upper}{end}"
