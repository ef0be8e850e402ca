"""Catalog entry models: dependencies, BOMs, repositories and project options.

All entries are frozen; a catalog is shared read-only across resolutions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping as MappingType, Optional, Tuple, Union

from constants import Constants, DependencyScope
from versioning import NOT_FOUND, Version, VersionRange, select_mapping


@dataclass(frozen=True)
class Repository:
    """A remote artifact repository."""

    id: str
    name: str
    url: str
    snapshots_enabled: bool = False
    releases_enabled: bool = True


@dataclass(frozen=True)
class Exclusion:
    """A transitive dependency excluded from a dependency."""

    group_id: str
    artifact_id: str


@dataclass(frozen=True)
class CoordinateOverride:
    """Coordinates selected by a dependency mapping; None parts keep the static value."""

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class Mapping:
    """A version range associated with a resolved value.

    ``value`` is a CoordinateOverride for dependencies and a version string
    for bills of materials.
    """

    range: VersionRange
    value: Any
    repositories: Tuple[str, ...] = ()
    additional_boms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Dependency:
    """A dependency known to the catalog."""

    id: str
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    scope: DependencyScope = DependencyScope.COMPILE
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    facets: Tuple[str, ...] = ()
    starter: bool = True
    type: Optional[str] = None
    exclusions: Tuple[Exclusion, ...] = ()
    bom: Optional[str] = None
    repository: Optional[str] = None
    compatibility_range: Optional[VersionRange] = None
    mappings: Tuple[Mapping, ...] = ()
    mapping_repositories: Tuple[str, ...] = ()

    @property
    def repositories(self) -> Tuple[str, ...]:
        """The static repository followed by those of the selected mapping."""
        static = (self.repository,) if self.repository else ()
        return _merge_ids(static, self.mapping_repositories)

    @property
    def has_coordinates(self) -> bool:
        return bool(self.group_id and self.artifact_id)

    def has_facet(self, facet: str) -> bool:
        return facet in self.facets

    def is_compatible_with(self, version: Version) -> bool:
        """Return True if this dependency can be used with the platform ``version``."""
        return self.compatibility_range is None or self.compatibility_range.match(version)

    def resolve(self, version: Version) -> Union["Dependency", Any]:
        """Return a copy with coordinates fixed for ``version``.

        Dependencies without mappings resolve to themselves.

        Returns:
            The resolved Dependency, or NOT_FOUND when mappings exist and none match.
        """
        if not self.mappings:
            return self
        mapping = select_mapping(((m.range, m) for m in self.mappings), version)
        if mapping is NOT_FOUND:
            return NOT_FOUND
        override = mapping.value or CoordinateOverride()
        return replace(
            self,
            group_id=override.group_id or self.group_id,
            artifact_id=override.artifact_id or self.artifact_id,
            version=override.version or self.version,
            mapping_repositories=tuple(mapping.repositories),
            mappings=(),
        )


@dataclass(frozen=True)
class ResolvedBom:
    """A bill of materials with its version fixed for one platform version."""

    id: str
    group_id: str
    artifact_id: str
    version: str
    order: int
    version_property: Optional[str] = None
    repositories: Tuple[str, ...] = ()
    additional_boms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BillOfMaterials:
    """A bill of materials known to the catalog."""

    id: str
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    version_property: Optional[str] = None
    order: int = Constants.DEFAULT_BOM_ORDER
    repositories: Tuple[str, ...] = ()
    additional_boms: Tuple[str, ...] = ()
    mappings: Tuple[Mapping, ...] = ()

    def resolve(self, version: Version) -> Union[ResolvedBom, Any]:
        """Fix the BOM version for the platform ``version``.

        Repositories of the matching mapping are appended to the BOM's own,
        keeping declaration order.

        Returns:
            ResolvedBom, or NOT_FOUND when mappings exist and none match.
        """
        if not self.mappings:
            return ResolvedBom(
                id=self.id, group_id=self.group_id, artifact_id=self.artifact_id,
                version=self.version or "", order=self.order,
                version_property=self.version_property,
                repositories=self.repositories, additional_boms=self.additional_boms,
            )
        mapping = select_mapping(((m.range, m) for m in self.mappings), version)
        if mapping is NOT_FOUND:
            return NOT_FOUND
        return ResolvedBom(
            id=self.id, group_id=self.group_id, artifact_id=self.artifact_id,
            version=str(mapping.value), order=self.order,
            version_property=self.version_property,
            repositories=_merge_ids(self.repositories, mapping.repositories),
            additional_boms=_merge_ids(self.additional_boms, mapping.additional_boms),
        )


def _merge_ids(first: Tuple[str, ...], second: Tuple[str, ...]) -> Tuple[str, ...]:
    merged = list(first)
    for item in second:
        if item not in merged:
            merged.append(item)
    return tuple(merged)


@dataclass(frozen=True)
class Language:
    """A programming language option."""

    id: str
    name: Optional[str] = None
    default: bool = False


@dataclass(frozen=True)
class Packaging:
    """A packaging option (jar, war)."""

    id: str
    name: Optional[str] = None
    default: bool = False


@dataclass(frozen=True)
class BuildType:
    """A project type, tagged with the build tool and dialect it stands for."""

    id: str
    name: Optional[str] = None
    default: bool = False
    tags: MappingType[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    @property
    def build_tool(self) -> Optional[str]:
        return self.tags.get("build")

    @property
    def dialect(self) -> Optional[str]:
        return self.tags.get("dialect")


@dataclass(frozen=True)
class MavenParent:
    """A custom parent POM replacing the platform parent."""

    group_id: str
    artifact_id: str
    version: str
    include_platform_bom: bool = False


@dataclass(frozen=True)
class CatalogSettings:
    """Platform-wide settings of a catalog."""

    platform_group_id: str = Constants.PLATFORM_GROUP_ID
    starter_prefix: str = Constants.PLATFORM_STARTER_PREFIX
    root_starter_id: Optional[str] = Constants.ROOT_STARTER_ID
    web_starter_id: str = Constants.WEB_STARTER_ID
    test_starter_id: str = Constants.TEST_STARTER_ID
    web_facet: str = "web"
    java_version: str = Constants.JAVA_VERSION
    platform_versions: Tuple[Version, ...] = ()
    default_platform_version: Optional[Version] = None
    compatibility_range: Optional[VersionRange] = None
    snapshot_repository: Optional[str] = None
    milestone_repository: Optional[str] = None
    build_tool_versions: MappingType[str, Tuple[Mapping, ...]] = field(default_factory=dict)
    kotlin_versions: Tuple[Mapping, ...] = ()
    kotlin_default_version: Optional[str] = None
    dependency_management_plugin_version: Optional[str] = None
    maven_parent: Optional[MavenParent] = None

    def __post_init__(self):
        object.__setattr__(self, "build_tool_versions", MappingProxyType(dict(self.build_tool_versions)))

    def starter_coordinates(self, dependency_id: str) -> Tuple[str, str]:
        """Default coordinates of a platform starter, i.e. "data-jpa" -> spring-boot-starter-data-jpa.

        The root starter maps to the bare prefix, "spring-boot-starter".
        """
        if dependency_id == self.root_starter_id:
            return self.platform_group_id, self.starter_prefix.rstrip("-")
        return self.platform_group_id, f"{self.starter_prefix}{dependency_id}"

    def kotlin_version(self, version: Version) -> Optional[str]:
        """Kotlin version to use with the platform ``version``."""
        selected = select_mapping(self.kotlin_versions, version)
        return self.kotlin_default_version if selected is NOT_FOUND else selected

    def build_tool_version(self, build_tool: Optional[str], version: Version) -> Optional[str]:
        """Build tool version mapped to the platform ``version``, if one is declared."""
        mappings = self.build_tool_versions.get(build_tool or "")
        if not mappings:
            return None
        selected = select_mapping(mappings, version)
        return None if selected is NOT_FOUND else selected
