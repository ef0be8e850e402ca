"""Platform versions, version ranges and range-to-value mapping selection."""

from .models import Qualifier, Version, VersionRange
from .parser import parse_range, parse_version
from .matcher import NOT_FOUND, matches, select_mapping

__all__ = [
    "Qualifier",
    "Version",
    "VersionRange",
    "parse_range",
    "parse_version",
    "NOT_FOUND",
    "matches",
    "select_mapping",
]
