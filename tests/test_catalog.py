"""Tests for the metadata catalog and its construction-time validation."""

import dataclasses

import pytest

from catalog import CatalogBuilder, Dependency, MetadataCatalog, Repository, bom_mapping, dependency_mapping
from constants import DependencyScope
from errors import CatalogIntegrityError
from versioning import NOT_FOUND, parse_version

from conftest import make_builder


def test_lookups_return_entries_or_none(catalog):
    assert catalog.get_dependency("web").id == "web"
    assert catalog.get_dependency("nope") is None
    assert catalog.get_bom("the-bom").artifact_id == "the-bom"
    assert catalog.get_bom("nope") is None
    assert catalog.get_repository("foo-repo").url == "https://foo.example.com/repo"
    assert catalog.get_repository("nope") is None
    assert catalog.get_language("kotlin") is not None
    assert catalog.get_packaging("war") is not None
    assert catalog.get_type("gradle-project").build_tool == "gradle"
    assert catalog.get_type("nope") is None


def test_collections_keep_declaration_order(catalog):
    assert [lang.id for lang in catalog.get_languages()] == ["java", "kotlin"]
    assert [p.id for p in catalog.get_packagings()] == ["jar", "war"]
    assert [t.id for t in catalog.get_types()] == ["maven-project", "gradle-project", "gradle-kotlin-project"]


def test_defaults(catalog):
    assert catalog.default_language().id == "java"
    assert catalog.default_packaging().id == "jar"
    assert catalog.default_type().id == "maven-project"
    assert catalog.default_platform_version() == parse_version("2.1.1.RELEASE")


def test_build_tools_from_type_tags(catalog):
    assert catalog.build_tools() == {"maven": (None,), "gradle": ("groovy", "kotlin")}


def test_starter_without_coordinates_gets_platform_coordinates(catalog):
    dep = catalog.get_dependency("data-jpa")
    assert (dep.group_id, dep.artifact_id) == ("org.springframework.boot", "spring-boot-starter-data-jpa")


def test_root_starter_maps_to_bare_starter(catalog):
    dep = catalog.get_dependency("root_starter")
    assert dep.artifact_id == "spring-boot-starter"
    assert dep.category == "Core"


def test_scope_aliases(catalog):
    assert catalog.get_dependency("test").scope is DependencyScope.TEST_COMPILE
    assert catalog.get_dependency("lombok").scope is DependencyScope.ANNOTATION_PROCESSOR
    assert catalog.get_dependency("h2").scope is DependencyScope.RUNTIME


def test_catalog_entries_are_immutable(catalog):
    with pytest.raises(dataclasses.FrozenInstanceError):
        catalog.get_dependency("web").scope = DependencyScope.RUNTIME
    with pytest.raises(TypeError):
        catalog.get_type("maven-project").tags["build"] = "gradle"


def test_dependency_resolve_with_mappings(catalog):
    foo = catalog.get_dependency("foo")
    assert foo.resolve(parse_version("2.2.0")).version == "1.0.0"
    assert foo.resolve(parse_version("2.3.0")).version == "2.0.0"
    assert foo.resolve(parse_version("1.5.0")) is NOT_FOUND


def test_dependency_mapping_can_override_coordinates_and_repository():
    dep = Dependency(id="x", group_id="g", artifact_id="a", mappings=(
        dependency_mapping("[1.0.0,2.0.0)", version="1.0", artifact_id="a-legacy", repositories=["r"]),
        dependency_mapping("2.0.0", version="2.0"),
    ))
    legacy = dep.resolve(parse_version("1.5.0"))
    assert (legacy.group_id, legacy.artifact_id, legacy.version, legacy.repositories) == ("g", "a-legacy", "1.0", ("r",))
    assert legacy.mappings == ()
    current = dep.resolve(parse_version("2.1.0"))
    assert (current.artifact_id, current.version, current.repositories) == ("a", "2.0", ())


def test_dependency_without_mappings_resolves_to_itself(catalog):
    web = catalog.get_dependency("web")
    assert web.resolve(parse_version("2.0.0")) is web


def test_bom_resolve_merges_mapping_repositories(catalog):
    bom = catalog.get_bom("mapped-bom").resolve(parse_version("2.2.0"))
    assert bom.version == "2.0.0"
    assert bom.repositories == ("foo-repo", "bar-repo")
    assert catalog.get_bom("mapped-bom").resolve(parse_version("1.5.0")) is NOT_FOUND


def test_compatibility_range(catalog):
    webflux = catalog.get_dependency("webflux")
    assert webflux.is_compatible_with(parse_version("2.0.0.RELEASE"))
    assert not webflux.is_compatible_with(parse_version("1.5.9.RELEASE"))


def test_duplicate_ids_rejected():
    builder = make_builder().add_dependency("web").add_dependency("web")
    with pytest.raises(CatalogIntegrityError) as excinfo:
        builder.build()
    assert "duplicate dependency id 'web'" in excinfo.value.problems


def test_duplicate_repository_ids_rejected():
    with pytest.raises(CatalogIntegrityError) as excinfo:
        make_builder().add_repository("foo-repo", "Again", "https://other").build()
    assert "duplicate repository id 'foo-repo'" in excinfo.value.problems


def test_dangling_bom_reference_rejected():
    builder = make_builder().add_dependency("x", "g", "a", bom="missing-bom")
    with pytest.raises(CatalogIntegrityError) as excinfo:
        builder.build()
    assert "dependency 'x' references unknown bom 'missing-bom'" in excinfo.value.problems


def test_dangling_repository_references_rejected():
    builder = make_builder()
    builder.add_bom("b", "g", "b", "1.0", repositories=["nowhere"])
    builder.add_bom("c", "g", "c", mappings=[bom_mapping("1.0.0", "1.0", additional_boms=["ghost"])])
    with pytest.raises(CatalogIntegrityError) as excinfo:
        builder.build()
    problems = excinfo.value.problems
    assert "bom 'b' references unknown repository 'nowhere'" in problems
    assert any("unknown bom 'ghost'" in p for p in problems)


@pytest.mark.parametrize("facet", ["Web", "", "with space", "-web"])
def test_malformed_facets_rejected(facet):
    with pytest.raises(CatalogIntegrityError):
        make_builder().add_dependency("x", "g", "a", facets=[facet]).build()


def test_all_problems_reported_at_once():
    builder = make_builder()
    builder.add_dependency("x", "g", "a", bom="missing", facets=["BAD"])
    builder.add_dependency("x", "g", "a")
    with pytest.raises(CatalogIntegrityError) as excinfo:
        builder.build()
    assert len(excinfo.value.problems) == 3
    assert str(excinfo.value).startswith("Invalid catalog: ")


def test_bom_needs_version_or_mappings():
    with pytest.raises(CatalogIntegrityError):
        make_builder().add_bom("b", "g", "b").build()


def test_missing_snapshot_repository_rejected():
    with pytest.raises(CatalogIntegrityError):
        CatalogBuilder().set_platform(snapshot_repository="spring-snapshots").build()


def test_empty_catalog_is_valid():
    catalog = MetadataCatalog()
    assert catalog.get_dependencies() == ()
    assert catalog.default_language() is None
    assert catalog.default_platform_version() is None


def test_catalog_accepts_entry_instances():
    repo = Repository("r", "R", "https://r")
    catalog = CatalogBuilder().add_dependency(Dependency(id="d", group_id="g", artifact_id="a", repository="r")) \
        .add_repository(repo.id, repo.name, repo.url).build()
    assert catalog.get_dependency("d").repository == "r"
