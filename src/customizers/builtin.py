"""Built-in platform conventions expressed as customizers.

Priorities: dependency and repository customizers run at 0, build tool
plugin customizers at 10, and customizers that react to the dependencies
already in the model (Kotlin JPA support) at 100.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from buildmodel import BomImport, BuildDependency, ParentPom
from catalog.models import Exclusion
from constants import BuildTools, Constants, DependencyScope, Facets, GradleDialects
from errors import UnsupportedPlatformVersion
from versioning import NOT_FOUND

from .base import Activation, BuildCustomizer

logger = logging.getLogger(__name__)

KOTLIN_GROUP_ID = "org.jetbrains.kotlin"
PLATFORM_PLUGIN_ID = "org.springframework.boot"
DEPENDENCY_MANAGEMENT_PLUGIN_ID = "io.spring.dependency-management"
PLATFORM_MAVEN_PLUGIN_ID = "org.springframework.boot:spring-boot-maven-plugin"
PLATFORM_PARENT_ARTIFACT_ID = "spring-boot-starter-parent"
PLATFORM_BOM_ARTIFACT_ID = "spring-boot-dependencies"
KOTLIN_NOARG_MAVEN_PLUGIN_ID = "org.jetbrains.kotlin:kotlin-maven-noarg"
KOTLIN_JPA_GRADLE_PLUGIN_ID = "org.jetbrains.kotlin.plugin.jpa"

PRIORITY_DEPENDENCIES = 0
PRIORITY_PLUGINS = 10
PRIORITY_DEPENDENCY_DRIVEN = 100

VINTAGE_EXCLUSIONS = (Exclusion("org.junit.vintage", "junit-vintage-engine"), Exclusion("junit", "junit"))


def starter(customizer: BuildCustomizer, starter_id: str,
            scope: DependencyScope = DependencyScope.COMPILE, exclusions=()) -> BuildDependency:
    """Build entry for a platform starter, resolved from the catalog's declaration when it has one.

    Raises:
        UnsupportedPlatformVersion: If the catalog entry has no mapping for the platform version.
    """
    entry = customizer.catalog.get_dependency(starter_id)
    if entry is None:
        group_id, artifact_id = customizer.catalog.settings.starter_coordinates(starter_id)
        return BuildDependency(
            id=starter_id, group_id=group_id, artifact_id=artifact_id,
            scope=scope, exclusions=tuple(exclusions),
        )
    version = customizer.description.platform_version
    resolved = entry.resolve(version)
    if resolved is NOT_FOUND:
        raise UnsupportedPlatformVersion(version, element=f"dependency '{starter_id}'")
    dependency = BuildDependency.from_catalog(resolved, scope=scope)
    return with_exclusions(dependency, exclusions)


def with_exclusions(dependency: BuildDependency, exclusions) -> BuildDependency:
    """Copy of ``dependency`` with ``exclusions`` appended to its own."""
    merged = list(dependency.exclusions)
    for exclusion in exclusions:
        if exclusion not in merged:
            merged.append(exclusion)
    return replace(dependency, exclusions=tuple(merged))


class WarPackagingTomcatCustomizer(BuildCustomizer):
    """War archives run in an external container: Tomcat is provided."""

    activation = Activation(packaging=Constants.WAR_PACKAGING)
    priority = PRIORITY_DEPENDENCIES

    def customize(self, build) -> None:
        build.dependencies.add(starter(self, "tomcat", DependencyScope.PROVIDED))


class PlatformRepositoriesCustomizer(BuildCustomizer):
    """Pre-release platform versions need the milestone, and snapshots also the snapshot, repository."""

    priority = PRIORITY_DEPENDENCIES

    def customize(self, build) -> None:
        version = self.description.platform_version
        settings = self.catalog.settings
        wanted = []
        if version.is_snapshot:
            wanted = [settings.snapshot_repository, settings.milestone_repository]
        elif version.is_prerelease:
            wanted = [settings.milestone_repository]
        for repository_id in wanted:
            if not repository_id:
                continue
            repository = self.catalog.get_repository(repository_id)
            if repository is not None:
                build.repositories.add(repository)


class JUnit4StarterCustomizer(BuildCustomizer):
    activation = Activation(platform_range="[1.5.0.RELEASE,2.2.0.M3)")
    priority = PRIORITY_DEPENDENCIES

    def customize(self, build) -> None:
        test_id = self.catalog.settings.test_starter_id
        if test_id and not build.dependencies.has(test_id):
            build.dependencies.add(starter(self, test_id, DependencyScope.TEST_COMPILE))


class JUnitJupiterCustomizer(BuildCustomizer):
    """From 2.2.0.M3 the test starter ships JUnit 5; keep JUnit 4 off the classpath."""

    activation = Activation(platform_range="2.2.0.M3")
    priority = PRIORITY_DEPENDENCIES

    def customize(self, build) -> None:
        test_id = self.catalog.settings.test_starter_id
        if not test_id:
            return
        existing = build.dependencies.get(test_id)
        if existing is None:
            build.dependencies.add(starter(self, test_id, DependencyScope.TEST_COMPILE, VINTAGE_EXCLUSIONS))
        else:
            build.dependencies.add(with_exclusions(existing, VINTAGE_EXCLUSIONS))


class MavenParentCustomizer(BuildCustomizer):
    """Parent POM, Java version and the platform Maven plugin.

    With a custom parent configured in the catalog, the platform BOM can be
    imported explicitly since the platform parent no longer manages versions.
    """

    activation = Activation(build_tool=BuildTools.MAVEN.value)
    priority = PRIORITY_PLUGINS

    def customize(self, build) -> None:
        settings = self.catalog.settings
        platform_version = str(self.description.platform_version)
        build.properties.put("java.version", self.description.language_version or settings.java_version)
        build.plugins.add(PLATFORM_MAVEN_PLUGIN_ID)

        parent = settings.maven_parent
        if parent is None:
            build.set_parent(ParentPom(settings.platform_group_id, PLATFORM_PARENT_ARTIFACT_ID, platform_version))
            return

        build.set_parent(ParentPom(parent.group_id, parent.artifact_id, parent.version))
        build.properties.put("project.build.sourceEncoding", Constants.SOURCE_ENCODING)
        build.properties.put("project.reporting.outputEncoding", Constants.SOURCE_ENCODING)
        if parent.include_platform_bom:
            build.properties.put("spring-boot.version", platform_version)
            build.boms.add(BomImport(
                id="spring-boot", group_id=settings.platform_group_id,
                artifact_id=PLATFORM_BOM_ARTIFACT_ID, version=platform_version,
                order=0, version_property="spring-boot.version",
            ))


class GradleLegacyPluginCustomizer(BuildCustomizer):
    """Gradle 3 applies the platform plugin from the buildscript classpath."""

    activation = Activation(build_tool=BuildTools.GRADLE.value, build_tool_versions="3")
    priority = PRIORITY_PLUGINS

    def customize(self, build) -> None:
        build.properties.put("springBootVersion", str(self.description.platform_version))
        build.plugins.add(PLATFORM_PLUGIN_ID)


class GradlePlatformPluginCustomizer(BuildCustomizer):
    activation = Activation(build_tool=BuildTools.GRADLE.value, dialect=GradleDialects.GROOVY.value,
                            build_tool_versions=("4", "5"))
    priority = PRIORITY_PLUGINS

    def customize(self, build) -> None:
        build.plugins.add(PLATFORM_PLUGIN_ID, str(self.description.platform_version))


class GradleKotlinDslPluginCustomizer(BuildCustomizer):
    activation = Activation(build_tool=BuildTools.GRADLE.value, dialect=GradleDialects.KOTLIN.value,
                            build_tool_versions="5")
    priority = PRIORITY_PLUGINS

    def customize(self, build) -> None:
        build.plugins.add(PLATFORM_PLUGIN_ID, str(self.description.platform_version))
        build.plugins.add(DEPENDENCY_MANAGEMENT_PLUGIN_ID,
                          self.catalog.settings.dependency_management_plugin_version)


class DependencyManagementPluginCustomizer(BuildCustomizer):
    activation = Activation(build_tool=BuildTools.GRADLE.value, dialect=GradleDialects.GROOVY.value,
                            platform_range="2.0.0.M1")
    priority = PRIORITY_PLUGINS

    def customize(self, build) -> None:
        build.plugins.add(DEPENDENCY_MANAGEMENT_PLUGIN_ID,
                          self.catalog.settings.dependency_management_plugin_version)


class KotlinDependenciesCustomizer(BuildCustomizer):
    """Kotlin runtime libraries, the Kotlin version property and Jackson's Kotlin module."""

    activation = Activation(language="kotlin")
    priority = PRIORITY_DEPENDENCIES

    def customize(self, build) -> None:
        build.dependencies.add(BuildDependency(id="kotlin-reflect", group_id=KOTLIN_GROUP_ID,
                                               artifact_id="kotlin-reflect"))
        build.dependencies.add(BuildDependency(id="kotlin-stdlib-jdk8", group_id=KOTLIN_GROUP_ID,
                                               artifact_id="kotlin-stdlib-jdk8"))
        build.properties.put("kotlin.version", self._kotlin_version)
        if build.dependencies.has_facet(Facets.JSON.value):
            build.dependencies.add(BuildDependency(
                id="jackson-module-kotlin", group_id="com.fasterxml.jackson.module",
                artifact_id="jackson-module-kotlin",
            ))

    def _kotlin_version(self) -> str:
        return self.catalog.settings.kotlin_version(self.description.platform_version) or ""


class _KotlinJpaCustomizer(BuildCustomizer):
    plugin_id = ""

    def kotlin_version(self) -> Optional[str]:
        return self.catalog.settings.kotlin_version(self.description.platform_version)

    def customize(self, build) -> None:
        if not build.dependencies.has_facet(Facets.JPA.value):
            return
        build.plugins.add(self.plugin_id, self.kotlin_version())


class KotlinJpaMavenCustomizer(_KotlinJpaCustomizer):
    """Adds the no-arg compiler plugin, JPA entities need a default constructor."""

    activation = Activation(build_tool=BuildTools.MAVEN.value, language="kotlin")
    priority = PRIORITY_DEPENDENCY_DRIVEN
    plugin_id = KOTLIN_NOARG_MAVEN_PLUGIN_ID


class KotlinJpaGradleCustomizer(_KotlinJpaCustomizer):
    activation = Activation(build_tool=BuildTools.GRADLE.value, language="kotlin")
    priority = PRIORITY_DEPENDENCY_DRIVEN
    plugin_id = KOTLIN_JPA_GRADLE_PLUGIN_ID


BUILTIN_CUSTOMIZERS = (
    PlatformRepositoriesCustomizer,
    WarPackagingTomcatCustomizer,
    JUnit4StarterCustomizer,
    JUnitJupiterCustomizer,
    KotlinDependenciesCustomizer,
    MavenParentCustomizer,
    GradleLegacyPluginCustomizer,
    GradlePlatformPluginCustomizer,
    GradleKotlinDslPluginCustomizer,
    DependencyManagementPluginCustomizer,
    KotlinJpaMavenCustomizer,
    KotlinJpaGradleCustomizer,
)


def register_builtin_customizers(registry) -> None:
    for customizer in BUILTIN_CUSTOMIZERS:
        registry.register(customizer)
