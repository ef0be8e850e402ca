"""Resolves a project request against the catalog into a sealed build model."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import List, Optional

from buildmodel import BomImport, BuildDependency, BuildModel, BuildSettings
from catalog.models import Dependency
from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants, DependencyScope
from customizers import CustomizationContext, CustomizerPipeline, CustomizerRegistry, default_registry
from errors import UnknownIdentifier, UnsupportedPlatformVersion
from versioning import NOT_FOUND, Version

from .description import ProjectDescription
from .request import ProjectRequest
from .validator import RequestValidator

logger = logging.getLogger(__name__)


class ProjectResolver:
    """Turns ProjectRequests into build models for one catalog.

    The resolver holds no per-request state and can be shared between
    threads; each call to ``resolve`` works on its own BuildModel.
    """

    def __init__(self, catalog, registry: Optional[CustomizerRegistry] = None):
        self.catalog = catalog
        self.registry = registry if registry is not None else default_registry()

    def describe(self, request: ProjectRequest) -> ProjectDescription:
        """Validate ``request`` and complete it with the catalog defaults."""
        RequestValidator(self.catalog).validate(request)
        description = ProjectDescription.from_request(request, self.catalog)
        compatibility = self.catalog.settings.compatibility_range
        if compatibility is not None and not compatibility.match(description.platform_version):
            raise UnsupportedPlatformVersion(
                description.platform_version,
                message=(f"Invalid platform version '{description.platform_version}', "
                         f"it should match {compatibility}"),
            )
        return description

    def resolve(self, request: ProjectRequest) -> BuildModel:
        """Resolve ``request`` into a sealed BuildModel.

        Raises:
            UnknownIdentifier: If the request references an id the catalog lacks.
            UnsupportedPlatformVersion: If an element the request needs has no
                mapping for the platform version.
        """
        with Timer() as timer:
            description = self.describe(request)
            version = description.platform_version
            build = BuildModel(description.build_tool, description.dialect, _settings_of(description))

            included = self._seed_requested(build, description, version)
            self._add_root_starter(build, included, version)
            self._add_web_starter(build, description, included, version)
            self._add_test_starter(build, included, version)
            self._import_boms(build, included, version)

            pipeline = CustomizerPipeline(self.registry)
            pipeline.run(CustomizationContext(description=description, catalog=self.catalog), build)
            build.seal()

        logger.info("Resolved %s project for platform %s: %d dependencies, %d boms",
                    description.build_tool or "unknown", version, len(build.dependencies), len(build.boms))
        if is_debug_enabled(logger):
            logger.debug("Resolution finished", extra=extra_context(
                event="function_exit", component="resolver", action="resolve",
                target=description.artifact_id, count=len(build.dependencies),
                duration_ms=timer.duration_ms
            ))
        return build

    def _resolve_dependency(self, dependency_id: str, version: Version) -> Dependency:
        dependency = self.catalog.get_dependency(dependency_id)
        if dependency is None:
            raise UnknownIdentifier("dependency", dependency_id)
        if not dependency.is_compatible_with(version):
            raise UnsupportedPlatformVersion(
                version, element=f"dependency '{dependency_id}'",
                message=(f"Dependency '{dependency_id}' is not compatible with platform version {version}, "
                         f"it requires {dependency.compatibility_range}"),
            )
        resolved = dependency.resolve(version)
        if resolved is NOT_FOUND:
            raise UnsupportedPlatformVersion(version, element=f"dependency '{dependency_id}'")
        return resolved

    def _seed_requested(self, build: BuildModel, description: ProjectDescription,
                        version: Version) -> "OrderedDict[str, Dependency]":
        included: "OrderedDict[str, Dependency]" = OrderedDict()
        for dependency_id in description.dependencies:
            resolved = self._resolve_dependency(dependency_id, version)
            included[dependency_id] = resolved
            build.dependencies.add(BuildDependency.from_catalog(resolved, requested=True))
        return included

    def _starter(self, starter_id: str, version: Version) -> Dependency:
        """Catalog declaration of a starter, or bare platform coordinates when it has none."""
        if self.catalog.get_dependency(starter_id) is not None:
            return self._resolve_dependency(starter_id, version)
        group_id, artifact_id = self.catalog.settings.starter_coordinates(starter_id)
        return Dependency(id=starter_id, group_id=group_id, artifact_id=artifact_id)

    def _add_root_starter(self, build: BuildModel, included: "OrderedDict[str, Dependency]",
                          version: Version) -> None:
        root_id = self.catalog.settings.root_starter_id
        if not root_id or root_id in included:
            return
        if included and any(d.starter for d in included.values()):
            return
        root = self._starter(root_id, version)
        included[root_id] = root
        build.dependencies.add(BuildDependency.from_catalog(root))
        _log_decision("add_root_starter", root_id)

    def _add_web_starter(self, build: BuildModel, description: ProjectDescription,
                         included: "OrderedDict[str, Dependency]", version: Version) -> None:
        if description.packaging != Constants.WAR_PACKAGING:
            return
        settings = self.catalog.settings
        if build.dependencies.has_facet(settings.web_facet) or settings.web_starter_id in included:
            return
        web = self._starter(settings.web_starter_id, version)
        included[web.id] = web
        build.dependencies.add(BuildDependency.from_catalog(web))
        _log_decision("add_web_starter", web.id)

    def _add_test_starter(self, build: BuildModel, included: "OrderedDict[str, Dependency]",
                          version: Version) -> None:
        test_id = self.catalog.settings.test_starter_id
        if not test_id or build.dependencies.has(test_id):
            return
        test = self._starter(test_id, version)
        included[test_id] = test
        build.dependencies.add(BuildDependency.from_catalog(test, scope=DependencyScope.TEST_COMPILE))

    def _import_boms(self, build: BuildModel, included: "OrderedDict[str, Dependency]",
                     version: Version) -> None:
        pending: List[str] = []
        for dependency in included.values():
            for repository_id in dependency.repositories:
                self._add_repository(build, repository_id)
            if dependency.bom and dependency.bom not in pending:
                pending.append(dependency.bom)

        # Additional BOMs are appended as they are discovered; the list is the work queue.
        index = 0
        while index < len(pending):
            bom_id = pending[index]
            index += 1
            bom = self.catalog.get_bom(bom_id)
            if bom is None:
                raise UnknownIdentifier("bom", bom_id)
            resolved = bom.resolve(version)
            if resolved is NOT_FOUND:
                raise UnsupportedPlatformVersion(version, element=f"bom '{bom_id}'")
            build.boms.add(BomImport(
                id=resolved.id, group_id=resolved.group_id, artifact_id=resolved.artifact_id,
                version=resolved.version, order=resolved.order,
                version_property=resolved.version_property, repositories=resolved.repositories,
            ))
            for repository_id in resolved.repositories:
                self._add_repository(build, repository_id)
            for extra in resolved.additional_boms:
                if extra not in pending:
                    pending.append(extra)

    def _add_repository(self, build: BuildModel, repository_id: str) -> None:
        repository = self.catalog.get_repository(repository_id)
        if repository is None:
            raise UnknownIdentifier("repository", repository_id)
        build.repositories.add(repository)


def _settings_of(description: ProjectDescription) -> BuildSettings:
    return BuildSettings(
        group_id=description.group_id,
        artifact_id=description.artifact_id,
        version=description.version,
        name=description.name,
        description=description.description,
        packaging=description.packaging,
    )


def _log_decision(action: str, target: str) -> None:
    if is_debug_enabled(logger):
        logger.debug("Starter added", extra=extra_context(
            event="decision", component="resolver", action=action, target=target, outcome="added"
        ))


def resolve(request: ProjectRequest, catalog, registry: Optional[CustomizerRegistry] = None) -> BuildModel:
    """Resolve ``request`` against ``catalog`` with ``registry`` or the built-in customizers."""
    return ProjectResolver(catalog, registry).resolve(request)
