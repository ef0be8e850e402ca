import pytest

from catalog import CatalogBuilder, bom_mapping, dependency_mapping, version_mapping
from resolution import ProjectRequest, ProjectResolver


def make_builder():
    """Catalog builder with the platform setup shared by most tests."""
    builder = CatalogBuilder()
    builder.add_repository("spring-snapshots", "Spring Snapshots", "https://repo.spring.io/snapshot",
                           snapshots_enabled=True)
    builder.add_repository("spring-milestones", "Spring Milestones", "https://repo.spring.io/milestone")
    builder.add_repository("foo-repo", "Foo", "https://foo.example.com/repo")
    builder.add_repository("bar-repo", "Bar", "https://bar.example.com/repo")
    builder.set_platform(
        default_version="2.1.1.RELEASE",
        compatibility_range="1.5.0.RELEASE",
        snapshot_repository="spring-snapshots",
        milestone_repository="spring-milestones",
        dependency_management_plugin_version="1.0.6.RELEASE",
    )
    builder.set_build_tool_versions(
        "gradle",
        version_mapping("[1.5.0.RELEASE,2.0.0.M1)", "3.5.1"),
        version_mapping("[2.0.0.M1,2.1.0.M1)", "4.10.2"),
        version_mapping("2.1.0.M1", "5.2.1"),
    )
    builder.set_kotlin_versions("1.2.71", version_mapping("2.0.0.M1", "1.3.11"))
    builder.add_language("java", "Java", default=True)
    builder.add_language("kotlin", "Kotlin")
    builder.add_packaging("jar", "Jar", default=True)
    builder.add_packaging("war", "War")
    builder.add_type("maven-project", "maven", default=True)
    builder.add_type("gradle-project", "gradle", "groovy")
    builder.add_type("gradle-kotlin-project", "gradle", "kotlin")
    return builder


def add_default_dependencies(builder):
    builder.add_bom("the-bom", "com.example", "the-bom", "1.0.0", repositories=["foo-repo"])
    builder.add_bom("mapped-bom", "com.example", "mapped-bom", mappings=[
        bom_mapping("[2.0.0.RELEASE,2.2.0.M1)", "1.0.0", repositories=["foo-repo"]),
        bom_mapping("2.2.0.M1", "2.0.0", repositories=["foo-repo", "bar-repo"]),
    ])
    builder.add_dependency_group("Core", "root_starter")
    builder.add_dependency("web", facets=["web", "json"])
    builder.add_dependency("data-jpa", facets=["jpa"])
    builder.add_dependency("security")
    builder.add_dependency("test", scope="test")
    builder.add_dependency("h2", "com.h2database", "h2", scope="runtime", starter=False)
    builder.add_dependency("lombok", "org.projectlombok", "lombok", scope="annotationProcessor", starter=False)
    builder.add_dependency("foo", "org.acme", "foo", mappings=[
        dependency_mapping("[2.0.0,2.3.0)", "1.0.0"),
        dependency_mapping("2.3.0", "2.0.0"),
    ])
    builder.add_dependency("first", "com.example", "first", bom="the-bom")
    builder.add_dependency("second", "com.example", "second", bom="the-bom")
    builder.add_dependency("mapped", "com.example", "mapped", bom="mapped-bom")
    builder.add_dependency("webflux", facets=["json"], compatibility_range="2.0.0.M1")
    return builder


@pytest.fixture
def catalog():
    return add_default_dependencies(make_builder()).build()


@pytest.fixture
def resolver(catalog):
    return ProjectResolver(catalog)


@pytest.fixture
def request_for():
    def _make(*dependencies, **kwargs):
        kwargs.setdefault("type", "maven-project")
        return ProjectRequest(dependencies=list(dependencies), **kwargs)
    return _make
