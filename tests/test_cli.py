"""Tests for the initforge command line entry point."""

import json
import logging
from pathlib import Path

import pytest

from args import parse_args
from constants import Constants, ExitCodes
from initforge import build_request, main

SAMPLE_CATALOG = str(Path(__file__).parent.parent / "catalog.yml")


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, tmp_path):
    """Keep config lookup, environment and root logging state local to each test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
    monkeypatch.delenv(Constants.ENV_CATALOG, raising=False)
    monkeypatch.delenv(Constants.ENV_LOG_FORMAT, raising=False)
    monkeypatch.setattr(Constants, "DEFAULT_GROUP_ID", Constants.DEFAULT_GROUP_ID)
    monkeypatch.setattr(Constants, "DEFAULT_CATALOG_PATH", Constants.DEFAULT_CATALOG_PATH)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def run_cli(*argv):
    with pytest.raises(SystemExit) as excinfo:
        main(list(argv))
    return excinfo.value.code


def test_parse_request_args():
    ns = parse_args(["-t", "gradle-project", "-d", "web,h2", "-d", "test", "-b", "2.1.0.RELEASE"])
    request = build_request(ns)
    assert request.type == "gradle-project"
    assert request.dependencies == ["web", "h2", "test"]
    assert request.platform_version == "2.1.0.RELEASE"
    assert ns.LOG_LEVEL == "INFO"


def test_prints_build_as_json(capsys):
    code = run_cli("--catalog", SAMPLE_CATALOG, "-d", "web", "-d", "cloud-config-client")
    assert code == ExitCodes.SUCCESS.value
    data = json.loads(capsys.readouterr().out)
    assert data["buildTool"] == "maven"
    assert [d["id"] for d in data["dependencies"]] == ["web", "cloud-config-client", "test"]
    assert data["boms"][0]["version"] == "Greenwich.RC2"
    assert data["boms"][0]["versionProperty"] == "spring-cloud.version"
    assert [r["id"] for r in data["repositories"]] == ["spring-milestones"]
    assert data["settings"]["parent"]["artifactId"] == "spring-boot-starter-parent"


def test_quiet_prints_nothing(capsys):
    assert run_cli("--catalog", SAMPLE_CATALOG, "-q") == ExitCodes.SUCCESS.value
    assert capsys.readouterr().out == ""


def test_output_file(tmp_path):
    out = tmp_path / "build.json"
    assert run_cli("--catalog", SAMPLE_CATALOG, "-t", "gradle-project", "-o", str(out)) == ExitCodes.SUCCESS.value
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["buildTool"] == "gradle"
    assert data["dialect"] == "groovy"


def test_unknown_dependency_exits_with_invalid_request(caplog):
    assert run_cli("--catalog", SAMPLE_CATALOG, "-d", "nope", "-q") == ExitCodes.INVALID_REQUEST.value
    assert "Unknown dependency 'nope'" in caplog.text


def test_unsupported_platform_version_exits_with_invalid_request():
    code = run_cli("--catalog", SAMPLE_CATALOG, "-d", "webflux", "-b", "1.5.10.RELEASE", "-q")
    assert code == ExitCodes.INVALID_REQUEST.value


def test_missing_catalog_exits_with_file_error(tmp_path):
    assert run_cli("--catalog", str(tmp_path / "absent.yml"), "-q") == ExitCodes.FILE_ERROR.value


def test_invalid_catalog_exits_with_catalog_error(tmp_path):
    broken = tmp_path / "broken.yml"
    broken.write_text("boms:\n  a: {group_id: g, artifact_id: a}\n", encoding="utf-8")
    assert run_cli("--catalog", str(broken), "-q") == ExitCodes.CATALOG_ERROR.value


def test_catalog_from_environment(monkeypatch, capsys):
    monkeypatch.setenv(Constants.ENV_CATALOG, SAMPLE_CATALOG)
    assert run_cli() == ExitCodes.SUCCESS.value
    assert json.loads(capsys.readouterr().out)["buildTool"] == "maven"


def test_config_file_overrides_defaults(tmp_path, capsys):
    config = tmp_path / "custom.yml"
    config.write_text(f"catalog: {SAMPLE_CATALOG}\ndefaults:\n  group_id: org.acme\n", encoding="utf-8")
    assert run_cli("-c", str(config)) == ExitCodes.SUCCESS.value
    assert json.loads(capsys.readouterr().out)["settings"]["groupId"] == "org.acme"


def test_logfile_receives_records(tmp_path):
    log_file = tmp_path / "initforge.log"
    assert run_cli("--catalog", SAMPLE_CATALOG, "-q", "--logfile", str(log_file)) == ExitCodes.SUCCESS.value
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "Loading catalog" in log_file.read_text(encoding="utf-8")
