"""The read-only metadata catalog and its one-time integrity validation."""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from errors import CatalogIntegrityError

from .models import (
    BillOfMaterials,
    BuildType,
    CatalogSettings,
    Dependency,
    Language,
    Packaging,
    Repository,
)

logger = logging.getLogger(__name__)

FACET_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


class CatalogValidator:
    """Collects every integrity problem of a catalog definition.

    Runs once, when a MetadataCatalog is constructed.
    """

    def __init__(
        self,
        dependencies: Sequence[Dependency],
        boms: Sequence[BillOfMaterials],
        repositories: Sequence[Repository],
        languages: Sequence[Language],
        packagings: Sequence[Packaging],
        types: Sequence[BuildType],
        settings: CatalogSettings,
    ):
        self.dependencies = dependencies
        self.boms = boms
        self.repositories = repositories
        self.languages = languages
        self.packagings = packagings
        self.types = types
        self.settings = settings
        self.problems: List[str] = []

    def validate(self) -> None:
        """Raise CatalogIntegrityError if any problem was found."""
        self._check_duplicates("dependency", self.dependencies)
        self._check_duplicates("bom", self.boms)
        self._check_duplicates("repository", self.repositories)
        self._check_duplicates("language", self.languages)
        self._check_duplicates("packaging", self.packagings)
        self._check_duplicates("type", self.types)

        bom_ids = {b.id for b in self.boms}
        repo_ids = {r.id for r in self.repositories}

        for dep in self.dependencies:
            self._check_facets(dep)
            if dep.bom and dep.bom not in bom_ids:
                self.problems.append(f"dependency '{dep.id}' references unknown bom '{dep.bom}'")
            if dep.repository and dep.repository not in repo_ids:
                self.problems.append(
                    f"dependency '{dep.id}' references unknown repository '{dep.repository}'"
                )
            for mapping in dep.mappings:
                for repo in mapping.repositories:
                    if repo not in repo_ids:
                        self.problems.append(
                            f"dependency '{dep.id}' mapping {mapping.range} references unknown repository '{repo}'"
                        )

        for bom in self.boms:
            for repo in bom.repositories:
                if repo not in repo_ids:
                    self.problems.append(f"bom '{bom.id}' references unknown repository '{repo}'")
            for extra in bom.additional_boms:
                if extra not in bom_ids:
                    self.problems.append(f"bom '{bom.id}' references unknown bom '{extra}'")
            if not bom.version and not bom.mappings:
                self.problems.append(f"bom '{bom.id}' defines neither a version nor mappings")
            for mapping in bom.mappings:
                for repo in mapping.repositories:
                    if repo not in repo_ids:
                        self.problems.append(
                            f"bom '{bom.id}' mapping {mapping.range} references unknown repository '{repo}'"
                        )
                for extra in mapping.additional_boms:
                    if extra not in bom_ids:
                        self.problems.append(
                            f"bom '{bom.id}' mapping {mapping.range} references unknown bom '{extra}'"
                        )

        for label, repo in (("snapshot", self.settings.snapshot_repository),
                            ("milestone", self.settings.milestone_repository)):
            if repo and repo not in repo_ids:
                self.problems.append(f"{label} repository '{repo}' is not defined")

        if self.problems:
            raise CatalogIntegrityError(self.problems)

    def _check_duplicates(self, kind: str, entries: Iterable) -> None:
        counts = Counter(entry.id for entry in entries)
        for entry_id, count in counts.items():
            if count > 1:
                self.problems.append(f"duplicate {kind} id '{entry_id}'")

    def _check_facets(self, dep: Dependency) -> None:
        for facet in dep.facets:
            if not isinstance(facet, str) or not FACET_PATTERN.match(facet):
                self.problems.append(f"dependency '{dep.id}' has malformed facet {facet!r}")


class MetadataCatalog:
    """Immutable registry of dependencies, BOMs, repositories and project options.

    Construct once per process and share freely; lookups never mutate state.
    Lookups return the entry or None when the id is unknown.
    """

    def __init__(
        self,
        dependencies: Sequence[Dependency] = (),
        boms: Sequence[BillOfMaterials] = (),
        repositories: Sequence[Repository] = (),
        languages: Sequence[Language] = (),
        packagings: Sequence[Packaging] = (),
        types: Sequence[BuildType] = (),
        settings: Optional[CatalogSettings] = None,
    ):
        self.settings = settings or CatalogSettings()
        with Timer() as timer:
            CatalogValidator(
                dependencies, boms, repositories, languages, packagings, types, self.settings
            ).validate()

        self._dependencies = MappingProxyType(
            {d.id: self._with_default_coordinates(d) for d in dependencies}
        )
        self._boms = MappingProxyType({b.id: b for b in boms})
        self._repositories = MappingProxyType({r.id: r for r in repositories})
        self._languages = MappingProxyType({lang.id: lang for lang in languages})
        self._packagings = MappingProxyType({p.id: p for p in packagings})
        self._types = MappingProxyType({t.id: t for t in types})

        logger.info(
            "Catalog loaded: %d dependencies, %d boms, %d repositories",
            len(self._dependencies), len(self._boms), len(self._repositories),
        )
        if is_debug_enabled(logger):
            logger.debug("Catalog validated", extra=extra_context(
                event="function_exit", component="catalog", action="validate",
                duration_ms=timer.duration_ms
            ))

    def _with_default_coordinates(self, dep: Dependency) -> Dependency:
        if dep.group_id or dep.artifact_id:
            return dep
        group_id, artifact_id = self.settings.starter_coordinates(dep.id)
        return replace(dep, group_id=group_id, artifact_id=artifact_id)

    def get_dependency(self, dependency_id: str) -> Optional[Dependency]:
        return self._dependencies.get(dependency_id)

    def get_bom(self, bom_id: str) -> Optional[BillOfMaterials]:
        return self._boms.get(bom_id)

    def get_repository(self, repository_id: str) -> Optional[Repository]:
        return self._repositories.get(repository_id)

    def get_language(self, language_id: str) -> Optional[Language]:
        return self._languages.get(language_id)

    def get_packaging(self, packaging_id: str) -> Optional[Packaging]:
        return self._packagings.get(packaging_id)

    def get_type(self, type_id: str) -> Optional[BuildType]:
        return self._types.get(type_id)

    def get_dependencies(self) -> Tuple[Dependency, ...]:
        return tuple(self._dependencies.values())

    def get_boms(self) -> Tuple[BillOfMaterials, ...]:
        return tuple(self._boms.values())

    def get_repositories(self) -> Tuple[Repository, ...]:
        return tuple(self._repositories.values())

    def get_languages(self) -> Tuple[Language, ...]:
        return tuple(self._languages.values())

    def get_packagings(self) -> Tuple[Packaging, ...]:
        return tuple(self._packagings.values())

    def get_types(self) -> Tuple[BuildType, ...]:
        return tuple(self._types.values())

    def build_tools(self) -> Dict[str, Tuple[Optional[str], ...]]:
        """Map each build tool named by a type tag to the dialects declared for it."""
        tools: Dict[str, List[Optional[str]]] = {}
        for build_type in self._types.values():
            if not build_type.build_tool:
                continue
            dialects = tools.setdefault(build_type.build_tool, [])
            if build_type.dialect not in dialects:
                dialects.append(build_type.dialect)
        return {tool: tuple(dialects) for tool, dialects in tools.items()}

    def default_language(self) -> Optional[Language]:
        return _default_of(self._languages.values())

    def default_packaging(self) -> Optional[Packaging]:
        return _default_of(self._packagings.values())

    def default_type(self) -> Optional[BuildType]:
        return _default_of(self._types.values())

    def default_platform_version(self):
        """The catalog's default platform version, falling back to the first declared one."""
        if self.settings.default_platform_version is not None:
            return self.settings.default_platform_version
        if self.settings.platform_versions:
            return self.settings.platform_versions[0]
        return None


def _default_of(entries):
    """Return the entry flagged default, else the first one, else None."""
    entries = list(entries)
    for entry in entries:
        if entry.default:
            return entry
    return entries[0] if entries else None
