"""Fluent construction of a MetadataCatalog."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from constants import DependencyScope
from versioning import Version, VersionRange, parse_range, parse_version

from .catalog import MetadataCatalog
from .models import (
    BillOfMaterials,
    BuildType,
    CatalogSettings,
    CoordinateOverride,
    Dependency,
    Exclusion,
    Language,
    Mapping,
    MavenParent,
    Packaging,
    Repository,
)

RangeLike = Union[VersionRange, str]


def _range(value: Optional[RangeLike]) -> Optional[VersionRange]:
    if value is None or isinstance(value, VersionRange):
        return value
    return parse_range(value)


def _version(value: Optional[Union[Version, str]]) -> Optional[Version]:
    if value is None or isinstance(value, Version):
        return value
    return parse_version(value)


def dependency_mapping(version_range: RangeLike, version: Optional[str] = None,
                       group_id: Optional[str] = None, artifact_id: Optional[str] = None,
                       repositories: Sequence[str] = ()) -> Mapping:
    """Build a dependency Mapping from range text and coordinate overrides."""
    return Mapping(
        range=_range(version_range),
        value=CoordinateOverride(group_id=group_id, artifact_id=artifact_id, version=version),
        repositories=tuple(repositories),
    )


def bom_mapping(version_range: RangeLike, version: str, repositories: Sequence[str] = (),
                additional_boms: Sequence[str] = ()) -> Mapping:
    """Build a BOM Mapping from range text and the BOM version it selects."""
    return Mapping(
        range=_range(version_range),
        value=version,
        repositories=tuple(repositories),
        additional_boms=tuple(additional_boms),
    )


def version_mapping(version_range: RangeLike, value: str) -> Mapping:
    """Build a plain range -> value Mapping (Kotlin or build tool versions)."""
    return Mapping(range=_range(version_range), value=value)


class CatalogBuilder:
    """Accumulates catalog entries and builds a validated MetadataCatalog.

    Entries are kept in insertion order, duplicates included, so that the
    catalog validation can report them.
    """

    def __init__(self):
        self._dependencies: List[Dependency] = []
        self._boms: List[BillOfMaterials] = []
        self._repositories: List[Repository] = []
        self._languages: List[Language] = []
        self._packagings: List[Packaging] = []
        self._types: List[BuildType] = []
        self._settings: Dict[str, Any] = {}
        self._build_tool_versions: Dict[str, List[Mapping]] = {}

    def add_dependency(self, dependency: Union[Dependency, str], group_id: Optional[str] = None,
                       artifact_id: Optional[str] = None, version: Optional[str] = None,
                       scope: Union[DependencyScope, str, None] = None,
                       facets: Iterable[str] = (), starter: bool = True,
                       exclusions: Iterable[Any] = (), mappings: Iterable[Mapping] = (),
                       compatibility_range: Optional[RangeLike] = None,
                       **kwargs) -> "CatalogBuilder":
        """Add a dependency, either a Dependency instance or an id plus attributes."""
        if isinstance(dependency, Dependency):
            self._dependencies.append(dependency)
            return self
        self._dependencies.append(Dependency(
            id=dependency,
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            scope=DependencyScope.from_text(scope),
            facets=tuple(facets),
            starter=starter,
            exclusions=tuple(_exclusion(e) for e in exclusions),
            mappings=tuple(mappings),
            compatibility_range=_range(compatibility_range),
            **kwargs,
        ))
        return self

    def add_dependency_group(self, category: str, *dependencies: Union[Dependency, str]) -> "CatalogBuilder":
        """Add several dependencies under one category; plain ids become platform starters."""
        for dep in dependencies:
            if isinstance(dep, str):
                dep = Dependency(id=dep, facets=("web",) if dep == "web" else ())
            self._dependencies.append(replace(dep, category=category))
        return self

    def add_bom(self, bom: Union[BillOfMaterials, str], group_id: Optional[str] = None,
                artifact_id: Optional[str] = None, version: Optional[str] = None,
                repositories: Sequence[str] = (), mappings: Iterable[Mapping] = (),
                **kwargs) -> "CatalogBuilder":
        if isinstance(bom, BillOfMaterials):
            self._boms.append(bom)
            return self
        self._boms.append(BillOfMaterials(
            id=bom, group_id=group_id, artifact_id=artifact_id, version=version,
            repositories=tuple(repositories), mappings=tuple(mappings), **kwargs,
        ))
        return self

    def add_repository(self, repository_id: str, name: str, url: str,
                       snapshots_enabled: bool = False, releases_enabled: bool = True) -> "CatalogBuilder":
        self._repositories.append(Repository(
            id=repository_id, name=name, url=url,
            snapshots_enabled=snapshots_enabled, releases_enabled=releases_enabled,
        ))
        return self

    def add_language(self, language_id: str, name: Optional[str] = None, default: bool = False) -> "CatalogBuilder":
        self._languages.append(Language(id=language_id, name=name, default=default))
        return self

    def add_packaging(self, packaging_id: str, name: Optional[str] = None, default: bool = False) -> "CatalogBuilder":
        self._packagings.append(Packaging(id=packaging_id, name=name, default=default))
        return self

    def add_type(self, type_id: str, build: str, dialect: Optional[str] = None, fmt: str = "project",
                 name: Optional[str] = None, default: bool = False) -> "CatalogBuilder":
        tags = {"build": build, "format": fmt}
        if dialect:
            tags["dialect"] = dialect
        self._types.append(BuildType(id=type_id, name=name, default=default, tags=tags))
        return self

    def set_platform(self, default_version: Optional[str] = None, versions: Sequence[str] = (),
                     compatibility_range: Optional[RangeLike] = None, **settings) -> "CatalogBuilder":
        """Set platform-wide settings; extra keywords map onto CatalogSettings fields."""
        if default_version is not None:
            self._settings["default_platform_version"] = _version(default_version)
        if versions:
            self._settings["platform_versions"] = tuple(_version(v) for v in versions)
        if compatibility_range is not None:
            self._settings["compatibility_range"] = _range(compatibility_range)
        self._settings.update(settings)
        return self

    def set_build_tool_versions(self, build_tool: str, *mappings: Mapping) -> "CatalogBuilder":
        self._build_tool_versions[build_tool] = list(mappings)
        return self

    def set_kotlin_versions(self, default_version: str, *mappings: Mapping) -> "CatalogBuilder":
        self._settings["kotlin_default_version"] = default_version
        self._settings["kotlin_versions"] = tuple(mappings)
        return self

    def set_maven_parent(self, group_id: str, artifact_id: str, version: str,
                         include_platform_bom: bool = False) -> "CatalogBuilder":
        self._settings["maven_parent"] = MavenParent(group_id, artifact_id, version, include_platform_bom)
        return self

    def build(self) -> MetadataCatalog:
        """Validate and return the catalog.

        Raises:
            CatalogIntegrityError: If the accumulated entries are inconsistent.
        """
        settings = dict(self._settings)
        settings["build_tool_versions"] = {k: tuple(v) for k, v in self._build_tool_versions.items()}
        return MetadataCatalog(
            dependencies=self._dependencies,
            boms=self._boms,
            repositories=self._repositories,
            languages=self._languages,
            packagings=self._packagings,
            types=self._types,
            settings=CatalogSettings(**settings),
        )


def _exclusion(value: Any) -> Exclusion:
    """Accept Exclusion, (group, artifact) pairs or "group:artifact" strings."""
    if isinstance(value, Exclusion):
        return value
    if isinstance(value, str):
        group_id, _, artifact_id = value.partition(":")
        return Exclusion(group_id, artifact_id)
    if isinstance(value, dict):
        return Exclusion(value["group_id"], value["artifact_id"])
    group_id, artifact_id = value
    return Exclusion(group_id, artifact_id)
