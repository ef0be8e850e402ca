"""The project request as received from a caller, before any resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional


def split_ids(values: Optional[Iterable[str]]) -> List[str]:
    """Flatten dependency ids given as a list and/or comma separated text.

    Blank entries are dropped; order and duplicates are kept.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    ids: List[str] = []
    for value in values:
        ids.extend(part.strip() for part in str(value).split(",") if part.strip())
    return ids


@dataclass
class ProjectRequest:
    """What a caller asked for. Every field is optional; defaults come from the catalog."""

    type: Optional[str] = None
    build_tool: Optional[str] = None
    dialect: Optional[str] = None
    language: Optional[str] = None
    language_version: Optional[str] = None
    packaging: Optional[str] = None
    platform_version: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    package_name: Optional[str] = None
    application_name: Optional[str] = None

    def __post_init__(self):
        self.dependencies = split_ids(self.dependencies)
