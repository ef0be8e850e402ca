"""Version range matching and mapping selection."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Union

from common.logging_utils import extra_context, is_debug_enabled

from .models import Version, VersionRange
from .parser import parse_range, parse_version

logger = logging.getLogger(__name__)


class _NotFound:
    """Sentinel type returned when no mapping applies."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()

RangeLike = Union[VersionRange, str]
VersionLike = Union[Version, str]


def _as_range(value: RangeLike) -> VersionRange:
    return value if isinstance(value, VersionRange) else parse_range(value)


def _as_version(value: VersionLike) -> Version:
    return value if isinstance(value, Version) else parse_version(value)


def matches(version_range: RangeLike, version: VersionLike) -> bool:
    """Return True if ``version`` lies within ``version_range``.

    Args:
        version_range: A VersionRange or range text.
        version: A Version or version text.
    """
    return _as_range(version_range).match(_as_version(version))


def _unpack(mapping: Any):
    """Accept (range, value) pairs or objects exposing .range and .value."""
    if isinstance(mapping, tuple):
        return mapping[0], mapping[1]
    return mapping.range, mapping.value


def select_mapping(mappings: Iterable[Any], version: VersionLike) -> Any:
    """Return the value of the first mapping whose range contains ``version``.

    Mappings are checked in declaration order; broader ranges declared
    first shadow narrower ones declared later.

    Args:
        mappings: Ordered (range, value) pairs or Mapping objects.
        version: The platform version to match.

    Returns:
        The matching value, or NOT_FOUND when no range contains the version.
    """
    target = _as_version(version)
    for index, mapping in enumerate(mappings):
        version_range, value = _unpack(mapping)
        if _as_range(version_range).match(target):
            if is_debug_enabled(logger):
                logger.debug("Mapping selected", extra=extra_context(
                    event="decision", component="matcher", action="select_mapping",
                    target=str(target), outcome="match", index=index
                ))
            return value
    if is_debug_enabled(logger):
        logger.debug("No mapping matched", extra=extra_context(
            event="decision", component="matcher", action="select_mapping",
            target=str(target), outcome="not_found"
        ))
    return NOT_FOUND
