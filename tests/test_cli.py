"""Test CLI functionality."""

import json
from unittest.mock import patch

import pytest
import requests
from click.testing import CliRunner

from liveedit.cli import cli


class FakeResponse:
    def __init__(self, status_code=200, body=None, content_type="application/json"):
        self.status_code = status_code
        self.ok = status_code < 400
        self.headers = {"content-type": content_type}
        self._body = body
        self.text = json.dumps(body)

    def json(self):
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        """
[service]
host = "https://forms.example.com"
access_code = "ABC-1234-XYZ"

[editor]
form_template_id = "register-a-pet"
"""
    )
    return str(path)


@pytest.fixture(autouse=True)
def no_log_setup():
    with patch("liveedit.cli.setup_log") as mock_setup:
        yield mock_setup


def test_fetch_section(config_file, monkeypatch):
    urls = []

    def fake_get(url, headers=None, timeout=None):
        urls.append(url)
        return FakeResponse(body={"sectionPath": ".sections[0]"})

    monkeypatch.setattr(requests, "get", fake_get)

    result = CliRunner().invoke(cli, ["--config", config_file, "fetch-section", "n0"], obj={})

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"sectionPath": ".sections[0]"}
    assert urls[0].endswith("/original-section/register-a-pet/n0?a=ABC-1234-XYZ")


def test_fetch_section_invalid_number(config_file):
    result = CliRunner().invoke(cli, ["--config", config_file, "fetch-section", "zz"], obj={})
    assert result.exit_code != 0
    assert "Invalid section number" in result.output


def test_fetch_template_error(config_file, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda *_, **__: FakeResponse(404, {"error": "unknown"}))

    result = CliRunner().invoke(cli, ["--config", config_file, "fetch-template", "-f", "other"], obj={})

    assert result.exit_code == 1
    assert "Error when fetching template" in result.output


def test_fetch_acknowledgement(config_file, monkeypatch):
    urls = []

    def fake_get(url, headers=None, timeout=None):
        urls.append(url)
        return FakeResponse(body={"fields": []})

    monkeypatch.setattr(requests, "get", fake_get)

    result = CliRunner().invoke(cli, ["--config", config_file, "fetch-template", "--part", "acknowledgement"], obj={})

    assert result.exit_code == 0, result.output
    assert "/original-acknowledgement/register-a-pet" in urls[0]


def test_push(config_file, tmp_path, monkeypatch):
    payload_file = tmp_path / "payload.json"
    payload_file.write_text(json.dumps({"id": "petName", "label": "Pet name"}))
    posted = []

    def fake_post(url, json=None, headers=None, timeout=None):
        posted.append((url, json))
        return FakeResponse(body={})

    monkeypatch.setattr(requests, "post", fake_post)
    monkeypatch.setattr(requests, "get", lambda *_, **__: FakeResponse(body={"html": "<p>Pet name</p>"}))

    result = CliRunner().invoke(
        cli,
        [
            "--config",
            config_file,
            "push",
            "form_component",
            str(payload_file),
            "-s",
            "n0",
            "--component-id",
            "petName",
            "--timeout",
            "5",
        ],
        obj={},
    )

    assert result.exit_code == 0, result.output
    assert posted[0][0].endswith("/update-form-component/register-a-pet/petName")
    assert posted[0][1] == {"id": "petName", "label": "Pet name"}
    assert json.loads(result.output) == {"html": "<p>Pet name</p>"}


def test_push_reports_service_error(config_file, tmp_path, monkeypatch):
    payload_file = tmp_path / "payload.json"
    payload_file.write_text("{}")
    monkeypatch.setattr(requests, "post", lambda *_, **__: FakeResponse(400, {"error": "Bad update"}))

    result = CliRunner().invoke(
        cli, ["--config", config_file, "push", "section", str(payload_file), "-s", "n0", "--timeout", "5"], obj={}
    )

    assert result.exit_code == 1
    assert "Bad update" in result.output


def test_missing_config(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.toml"), "fetch-template"], obj={})
    assert result.exit_code == 1
    assert "Configuration file not found" in result.output
