import json

import pytest

from buildmodel import BuildModel, BuildRenderer, RendererRegistry
from constants import ExitCodes
from errors import UnknownIdentifier
from export import build_to_dict, export_json


class ListingRenderer(BuildRenderer):
    build_tool = "maven"

    def render(self, build):
        return "\n".join(d.coordinates for d in build.dependencies)


class KotlinScriptRenderer(BuildRenderer):
    build_tool = "gradle"
    dialect = "kotlin"

    def render(self, build):
        return "\n".join(f'implementation("{d.coordinates}")' for d in build.dependencies)


def test_build_to_dict(resolver, request_for):
    build = resolver.resolve(request_for("web", "first", "lombok", platform_version="2.1.1.RELEASE"))
    data = build_to_dict(build)
    assert data == build_to_dict(build.snapshot())
    assert data["buildTool"] == "maven"
    assert data["settings"]["groupId"] == "com.example"
    assert data["settings"]["parent"]["version"] == "2.1.1.RELEASE"
    lombok = next(d for d in data["dependencies"] if d["id"] == "lombok")
    assert lombok["scope"] == "annotation_processor"
    assert lombok["requested"] is True
    assert data["boms"] == [{
        "id": "the-bom", "groupId": "com.example", "artifactId": "the-bom", "version": "1.0.0",
        "versionProperty": None, "order": 2147483647,
    }]
    assert data["repositories"][0]["url"] == "https://foo.example.com/repo"
    assert data["properties"]["java.version"] == "1.8"
    assert {"id": "org.springframework.boot:spring-boot-maven-plugin", "version": None} in data["plugins"]


def test_jupiter_exclusions_exported(resolver, request_for):
    data = build_to_dict(resolver.resolve(request_for(platform_version="2.2.0.M3")))
    test = next(d for d in data["dependencies"] if d["id"] == "test")
    assert test["exclusions"] == ["org.junit.vintage:junit-vintage-engine", "junit:junit"]


def test_export_json(resolver, request_for, tmp_path):
    out = tmp_path / "build.json"
    export_json(resolver.resolve(request_for("h2")), str(out))
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["id"] for d in data["dependencies"]] == ["h2", "root_starter", "test"]


def test_export_json_unwritable_path(resolver, request_for, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        export_json(resolver.resolve(request_for()), str(tmp_path / "missing" / "build.json"))
    assert excinfo.value.code == ExitCodes.FILE_ERROR.value


def test_renderer_registry_selects_by_tool_and_dialect(resolver, request_for):
    registry = RendererRegistry()
    registry.register(ListingRenderer())
    registry.register(KotlinScriptRenderer())

    maven = resolver.resolve(request_for("h2"))
    assert registry.render(maven).splitlines()[0] == "com.h2database:h2"

    gradle = resolver.resolve(request_for("h2", type="gradle-kotlin-project"))
    assert registry.render(gradle).startswith('implementation("com.h2database:h2")')


def test_renderer_falls_back_to_dialectless_entry():
    registry = RendererRegistry()
    renderer = ListingRenderer()
    registry.register(renderer)
    assert registry.get("maven", "xml") is renderer


def test_unknown_renderer():
    with pytest.raises(UnknownIdentifier) as excinfo:
        RendererRegistry().get("gradle", "groovy")
    assert excinfo.value.kind == "renderer"
    assert excinfo.value.identifier == "gradle/groovy"


def test_replacing_renderer_warns(caplog):
    registry = RendererRegistry()
    registry.register(ListingRenderer())
    replacement = ListingRenderer()
    registry.register(replacement)
    assert registry.get("maven") is replacement
    assert "Replacing renderer" in caplog.text


def test_render_empty_sealed_model():
    registry = RendererRegistry()
    registry.register(ListingRenderer())
    build = BuildModel("maven")
    build.seal()
    assert registry.render(build) == ""
