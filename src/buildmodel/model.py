"""The in-progress build model and its read-only snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from catalog.models import Exclusion, Repository
from constants import DependencyScope
from errors import BuildModelSealedError, BuildModelStateError

from .containers import (
    BomContainer,
    DependencyContainer,
    PluginContainer,
    PropertyContainer,
    RepositoryContainer,
)


@dataclass(frozen=True)
class BuildDependency:
    """A dependency entry of the build, with resolved coordinates.

    ``requested`` marks entries the user asked for explicitly.
    """

    id: str
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: DependencyScope = DependencyScope.COMPILE
    type: Optional[str] = None
    exclusions: Tuple[Exclusion, ...] = ()
    facets: Tuple[str, ...] = ()
    requested: bool = False

    @classmethod
    def from_catalog(cls, dependency, scope: Optional[DependencyScope] = None,
                     requested: bool = False) -> "BuildDependency":
        """Build entry for a resolved catalog Dependency."""
        return cls(
            id=dependency.id,
            group_id=dependency.group_id,
            artifact_id=dependency.artifact_id,
            version=dependency.version,
            scope=scope or dependency.scope,
            type=dependency.type,
            exclusions=tuple(dependency.exclusions),
            facets=tuple(dependency.facets),
            requested=requested,
        )

    @property
    def coordinates(self) -> str:
        base = f"{self.group_id}:{self.artifact_id}"
        return f"{base}:{self.version}" if self.version else base


@dataclass(frozen=True)
class BomImport:
    """An imported bill of materials with its resolved version."""

    id: str
    group_id: str
    artifact_id: str
    version: str
    order: int
    version_property: Optional[str] = None
    repositories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ParentPom:
    """Parent POM of a Maven build."""

    group_id: str
    artifact_id: str
    version: str


@dataclass(frozen=True)
class BuildSettings:
    """Project coordinates and packaging carried to the renderer."""

    group_id: str
    artifact_id: str
    version: str
    name: Optional[str] = None
    description: Optional[str] = None
    packaging: Optional[str] = None
    parent: Optional[ParentPom] = None


class BuildModel:
    """Mutable, tool-agnostic accumulation of one request's build elements.

    Created empty for each resolution, mutated only while the customizer
    pipeline runs, then sealed. A sealed model rejects every mutation and
    evaluates its lazy properties exactly once.
    """

    def __init__(self, build_tool: Optional[str] = None, dialect: Optional[str] = None,
                 settings: Optional[BuildSettings] = None):
        self.build_tool = build_tool
        self.dialect = dialect
        self._settings = settings
        self._sealed = False
        self._resolved_properties: Optional[Mapping[str, str]] = None
        self.dependencies = DependencyContainer(self._check_mutable)
        self.boms = BomContainer(self._check_mutable)
        self.repositories = RepositoryContainer(self._check_mutable)
        self.properties = PropertyContainer(self._check_mutable)
        self.plugins = PluginContainer(self._check_mutable)

    @property
    def settings(self) -> Optional[BuildSettings]:
        return self._settings

    @settings.setter
    def settings(self, value: BuildSettings) -> None:
        self._check_mutable()
        self._settings = value

    def set_parent(self, parent: Optional[ParentPom]) -> None:
        self._check_mutable()
        if self._settings is None:
            raise BuildModelStateError("build settings must be set before the parent")
        self._settings = replace(self._settings, parent=parent)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_mutable(self) -> None:
        if self._sealed:
            raise BuildModelSealedError("build model is sealed and can no longer be modified")

    def seal(self) -> None:
        """Freeze the model; called once the last customizer ran."""
        self._sealed = True

    def resolved_properties(self) -> Mapping[str, str]:
        """Evaluate the property suppliers, once, after sealing.

        Raises:
            BuildModelStateError: If the model is not sealed yet.
        """
        if not self._sealed:
            raise BuildModelStateError("properties are evaluated once the build model is sealed")
        if self._resolved_properties is None:
            self._resolved_properties = MappingProxyType(self.properties.evaluate())
        return self._resolved_properties

    def snapshot(self) -> "ResolvedBuild":
        """Read-only view handed to renderers."""
        return ResolvedBuild(
            build_tool=self.build_tool,
            dialect=self.dialect,
            settings=self._settings,
            dependencies=tuple(self.dependencies.items()),
            boms=tuple(self.boms.ordered()),
            repositories=tuple(self.repositories.items()),
            properties=self.resolved_properties(),
            plugins=tuple(self.plugins.items()),
        )

    def __repr__(self) -> str:
        return (
            f"BuildModel(build_tool={self.build_tool!r}, dependencies={self.dependencies.ids()!r}, "
            f"boms={self.boms.ids()!r}, repositories={self.repositories.ids()!r}, sealed={self._sealed})"
        )


@dataclass(frozen=True)
class ResolvedBuild:
    """Immutable snapshot of a sealed build model."""

    build_tool: Optional[str]
    dialect: Optional[str]
    settings: Optional[BuildSettings]
    dependencies: Tuple[BuildDependency, ...] = ()
    boms: Tuple[BomImport, ...] = ()
    repositories: Tuple[Repository, ...] = ()
    properties: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    plugins: Tuple[Tuple[str, Optional[str]], ...] = ()
