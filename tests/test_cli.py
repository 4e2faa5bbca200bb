"""Tests for the CLI."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from postgen import __version__
from postgen.cli import app
from postgen.errors import SchemaFetchError

runner = CliRunner()


@pytest.fixture
def outputs(tmp_path: Path) -> tuple[Path, Path]:
    return tmp_path / "out" / "collection.json", tmp_path / "out" / "logs.txt"


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


# === Generate Command Tests ===


def test_generate_success(sample_root: Path, outputs) -> None:
    """Test a collection and a log are written."""
    output, log_file = outputs

    result = runner.invoke(
        app, ["generate", str(sample_root), "--output", str(output), "--log-file", str(log_file)]
    )

    assert result.exit_code == 0, result.output
    assert "Found 2 controllers" in result.output
    assert f"Generated {output}" in result.output

    document = json.loads(output.read_text(encoding="utf-8"))
    assert [group["name"] for group in document["item"]] == ["Users", "Orders"]
    assert "Found method app.controllers.UsersController.GetById" in log_file.read_text()


def test_generate_options(sample_root: Path, outputs) -> None:
    output, log_file = outputs

    result = runner.invoke(
        app,
        [
            "generate",
            str(sample_root),
            "-o",
            str(output),
            "--log-file",
            str(log_file),
            "--base-url",
            "https://api.local",
            "--default-verb",
            "get",
        ],
    )

    assert result.exit_code == 0, result.output
    users = json.loads(output.read_text(encoding="utf-8"))["item"][0]["item"]
    assert users[0]["request"]["url"] == "https://api.local/api/Users/{id}"
    assert users[2]["request"] == {"url": "https://api.local/api/Users/legacy", "method": "GET"}


def test_generate_env_settings(sample_root: Path, outputs, monkeypatch) -> None:
    """Test marker names can come from the environment."""
    output, log_file = outputs
    monkeypatch.setenv("POSTGEN_CONTROLLER_BASE", "mvc.Missing")

    result = runner.invoke(
        app, ["generate", str(sample_root), "-o", str(output), "--log-file", str(log_file)]
    )

    assert result.exit_code == 0
    assert "No collection written" in result.output
    assert not output.exists()
    assert "mvc.Missing" in log_file.read_text()


def test_generate_without_framework(tmp_path: Path, outputs) -> None:
    """Test a missing framework is a silent no-op."""
    output, log_file = outputs
    (tmp_path / "app.py").write_text("class UsersController:\n    pass\n")

    result = runner.invoke(
        app, ["generate", str(tmp_path / "app.py"), "-o", str(output), "--log-file", str(log_file)]
    )

    assert result.exit_code == 0
    assert not output.exists()


def test_generate_write_failure(sample_root: Path, tmp_path: Path) -> None:
    """Test an unwritable output path fails the run."""
    blocker = tmp_path / "blocker"
    blocker.write_text("x")

    result = runner.invoke(
        app,
        [
            "generate",
            str(sample_root),
            "-o",
            str(blocker / "collection.json"),
            "--log-file",
            str(tmp_path / "logs.txt"),
        ],
    )

    assert result.exit_code == 1
    assert "Failed to write" in result.output


# === Endpoints Command Tests ===


def test_endpoints_table(sample_root: Path) -> None:
    result = runner.invoke(app, ["endpoints", str(sample_root)])

    assert result.exit_code == 0
    assert "/api/Users/{id}" in result.output
    assert "Users.GetById" in result.output
    assert "4 endpoints" in result.output


def test_endpoints_json(sample_root: Path) -> None:
    result = runner.invoke(app, ["endpoints", str(sample_root), "--format", "json"])

    assert result.exit_code == 0
    rows = json.loads(result.output)
    assert rows[0] == {
        "controller": "Users",
        "method": "GetById",
        "http_method": "GET",
        "route_prefix": "api/Users",
        "route": "{id}",
    }


def test_endpoints_bad_format(sample_root: Path) -> None:
    result = runner.invoke(app, ["endpoints", str(sample_root), "--format", "xml"])
    assert result.exit_code != 0


# === Validate Command Tests ===


def test_validate_generated(sample_root: Path, outputs) -> None:
    output, log_file = outputs
    runner.invoke(app, ["generate", str(sample_root), "-o", str(output), "--log-file", str(log_file)])

    result = runner.invoke(app, ["validate", str(output)])

    assert result.exit_code == 0
    assert "is valid" in result.output


def test_validate_invalid(tmp_path: Path) -> None:
    collection = tmp_path / "bad.json"
    collection.write_text(json.dumps({"item": []}))

    result = runner.invoke(app, ["validate", str(collection)])

    assert result.exit_code == 1
    assert "'info' is a required property" in result.output


def test_validate_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_validate_not_json(tmp_path: Path) -> None:
    collection = tmp_path / "bad.json"
    collection.write_text("{not json")

    result = runner.invoke(app, ["validate", str(collection)])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_validate_schema_url_failure(tmp_path: Path) -> None:
    collection = tmp_path / "c.json"
    collection.write_text("{}")

    with patch(
        "postgen.cli.CollectionValidator.from_url",
        side_effect=SchemaFetchError("Failed to fetch schema: boom", "https://x"),
    ):
        result = runner.invoke(app, ["validate", str(collection), "--schema-url", "https://x"])

    assert result.exit_code == 1
    assert "Failed to fetch schema" in result.output
