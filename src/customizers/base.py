"""Customizer contract: activation predicates, per-request context and the base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from versioning import VersionRange, parse_range


def _as_tuple(value) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class Activation:
    """Conditions under which a customizer runs.

    Every dimension left as None matches anything; the dimensions that are
    set must all match. ``language``, ``packaging`` and ``build_tool_versions``
    accept a single value or a tuple of alternatives. ``build_tool_versions``
    holds version prefixes, i.e. ("4", "5") matches Gradle 4.10.2 and 5.0.
    """

    build_tool: Optional[str] = None
    dialect: Optional[str] = None
    language: Union[str, Tuple[str, ...], None] = None
    packaging: Union[str, Tuple[str, ...], None] = None
    platform_range: Union[VersionRange, str, None] = None
    build_tool_versions: Union[str, Tuple[str, ...], None] = None

    def __post_init__(self):
        if isinstance(self.platform_range, str):
            object.__setattr__(self, "platform_range", parse_range(self.platform_range))
        object.__setattr__(self, "language", _as_tuple(self.language))
        object.__setattr__(self, "packaging", _as_tuple(self.packaging))
        object.__setattr__(self, "build_tool_versions", _as_tuple(self.build_tool_versions))

    def matches(self, description) -> bool:
        """Return True if the resolved project ``description`` satisfies every set condition."""
        if self.build_tool is not None and description.build_tool != self.build_tool:
            return False
        if self.dialect is not None and description.dialect != self.dialect:
            return False
        if self.language is not None and description.language not in self.language:
            return False
        if self.packaging is not None and description.packaging not in self.packaging:
            return False
        if self.platform_range is not None and not self.platform_range.match(description.platform_version):
            return False
        if self.build_tool_versions is not None:
            version = description.build_tool_version
            if not version or not any(_has_prefix(version, prefix) for prefix in self.build_tool_versions):
                return False
        return True


def _has_prefix(version: str, prefix: str) -> bool:
    return version == prefix or version.startswith(prefix + ".")


ALWAYS = Activation()


@dataclass(frozen=True)
class CustomizationContext:
    """Per-request inputs handed to every customizer at construction."""

    description: object
    catalog: object

    @property
    def platform_version(self):
        return self.description.platform_version

    @property
    def settings(self):
        return self.catalog.settings


class BuildCustomizer(ABC):
    """A conditionally activated unit of build model mutation.

    Subclasses declare ``activation`` and ``priority`` as class attributes
    and implement ``customize``. A new instance is built for every request,
    so instance state never leaks between resolutions.
    """

    activation: Activation = ALWAYS
    priority: int = 0

    def __init__(self, context: CustomizationContext):
        self.context = context

    @property
    def description(self):
        return self.context.description

    @property
    def catalog(self):
        return self.context.catalog

    @abstractmethod
    def customize(self, build) -> None:
        """Mutate ``build`` for the current request."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"
