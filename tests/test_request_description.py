"""Tests for request validation and project description defaults."""

import pytest

from catalog import MetadataCatalog
from errors import UnknownIdentifier, UnsupportedPlatformVersion
from resolution import (
    ProjectDescription,
    ProjectRequest,
    RequestValidator,
    clean_package_name,
    generate_application_name,
    split_ids,
)
from versioning import parse_version


def test_split_ids_accepts_lists_and_comma_separated_text():
    assert split_ids("web, data-jpa,,security") == ["web", "data-jpa", "security"]
    assert split_ids(["web,h2", "test"]) == ["web", "h2", "test"]
    assert split_ids(None) == []


def test_request_normalizes_dependencies():
    assert ProjectRequest(dependencies="web,h2").dependencies == ["web", "h2"]


@pytest.mark.parametrize("request_kwargs,message", [
    ({"type": "foo-build"}, "Unknown type 'foo-build' check project metadata"),
    ({"language": "foo"}, "Unknown language 'foo' check project metadata"),
    ({"packaging": "star"}, "Unknown packaging 'star' check project metadata"),
    ({"dependencies": ["web", "foo-bar"]}, "Unknown dependency 'foo-bar' check project metadata"),
])
def test_validator_messages(catalog, request_kwargs, message):
    with pytest.raises(UnknownIdentifier) as excinfo:
        RequestValidator(catalog).validate(ProjectRequest(**request_kwargs))
    assert str(excinfo.value) == message


def test_validator_accepts_known_ids(catalog):
    RequestValidator(catalog).validate(ProjectRequest(
        type="gradle-project", language="kotlin", packaging="war",
        build_tool="gradle", dialect="kotlin", dependencies=["web", "data-jpa"],
    ))


def test_validator_rejects_unknown_dialect(catalog):
    with pytest.raises(UnknownIdentifier) as excinfo:
        RequestValidator(catalog).validate(ProjectRequest(build_tool="gradle", dialect="scala"))
    assert excinfo.value.kind == "dialect"


def test_validator_accepts_any_build_tool_without_typed_catalog():
    RequestValidator(MetadataCatalog()).validate(ProjectRequest(build_tool="bazel"))


def test_description_defaults(catalog):
    description = ProjectDescription.from_request(ProjectRequest(), catalog)
    assert description.platform_version == parse_version("2.1.1.RELEASE")
    assert description.build_tool == "maven"
    assert description.dialect is None
    assert description.type == "maven-project"
    assert description.language == "java"
    assert description.packaging == "jar"
    assert description.group_id == "com.example"
    assert description.artifact_id == "demo"
    assert description.name == "demo"
    assert description.package_name == "com.example.demo"
    assert description.application_name == "DemoApplication"


def test_description_build_tool_from_type(catalog):
    description = ProjectDescription.from_request(ProjectRequest(type="gradle-kotlin-project"), catalog)
    assert (description.build_tool, description.dialect) == ("gradle", "kotlin")


def test_description_type_from_build_tool(catalog):
    description = ProjectDescription.from_request(ProjectRequest(build_tool="gradle"), catalog)
    assert description.type == "gradle-project"
    assert description.dialect == "groovy"


def test_description_keeps_request_values(catalog):
    description = ProjectDescription.from_request(ProjectRequest(
        group_id="org.acme", artifact_id="foo", platform_version="2.0.3", packaging="war",
        description="This is my demo project", application_name="MyApplication",
        dependencies=["web", "h2", "web"],
    ), catalog)
    assert description.platform_version == parse_version("2.0.3")
    assert description.packaging == "war"
    assert description.description == "This is my demo project"
    assert description.application_name == "MyApplication"
    assert description.package_name == "org.acme.foo"
    assert description.dependencies == ("web", "h2")


def test_description_without_platform_version():
    with pytest.raises(UnsupportedPlatformVersion):
        ProjectDescription.from_request(ProjectRequest(), MetadataCatalog())


@pytest.mark.parametrize("text,expected", [
    ("org.acme.foo-1.4.5", "org.acme.foo145"),
    ("org.acme.42foo", "org.acme.foo"),
    ("com.example.demo", "com.example.demo"),
    ("Com.Example.My-App", "com.example.myapp"),
    ("", "com.example.demo"),
    ("...", "com.example.demo"),
])
def test_clean_package_name(text, expected):
    assert clean_package_name(text) == expected


def test_package_name_derived_from_group_and_artifact(catalog):
    description = ProjectDescription.from_request(ProjectRequest(group_id="org.acme", artifact_id="foo-1.4.5"), catalog)
    assert description.package_name == "org.acme.foo145"


@pytest.mark.parametrize("name,expected", [
    ("demo", "DemoApplication"),
    ("my-app", "MyAppApplication"),
    ("ShopApplication", "ShopApplication"),
    (None, "Application"),
    ("", "Application"),
    ("42", "Application"),
])
def test_generate_application_name(name, expected):
    assert generate_application_name(name) == expected


@pytest.mark.parametrize("request_kwargs", [
    {"dialect": "bogus"},
    {"type": "maven-project", "dialect": "kotlin"},
    {"type": "gradle-project", "dialect": "scala"},
])
def test_validator_checks_dialect_against_implied_build_tool(catalog, request_kwargs):
    with pytest.raises(UnknownIdentifier) as excinfo:
        RequestValidator(catalog).validate(ProjectRequest(**request_kwargs))
    assert excinfo.value.kind == "dialect"


def test_validator_accepts_dialect_of_typed_build_tool(catalog):
    RequestValidator(catalog).validate(ProjectRequest(type="gradle-project", dialect="kotlin"))
