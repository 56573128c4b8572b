"""Configuration module unit tests"""

import os
import tempfile
from pathlib import Path

import pytest

from liveedit.config import Config, ServiceConfig
from liveedit.errors import ConfigException


@pytest.fixture
def temp_config_file():
    """Create a temporary config file"""
    fd, path = tempfile.mkstemp(suffix=".toml")
    os.close(fd)
    yield path
    # Cleanup
    os.unlink(path)


# ========== Test Cases ==========


def test_load_from_file_with_only_required_fields(temp_config_file):
    """Test: Load config with only required fields from file"""
    Path(temp_config_file).write_text(
        """
[service]
host = "https://forms.example.com/"
"""
    )

    config = Config.load_from_file(temp_config_file)

    assert config.service.base_url == "https://forms.example.com"
    assert config.service.timeout is None
    assert config.service.access_code is None
    assert config.editor.form_template_id == ""
    assert config.log_file == "data/liveedit.log"


def test_load_from_file_with_all_fields(temp_config_file):
    """Test: Load config with every section filled in"""
    Path(temp_config_file).write_text(
        """
log_file = "logs/edit.log"

[service]
host = "https://forms.example.com"
timeout = 15
access_code = "ABC-1234-XYZ"

[editor]
form_template_id = "register-a-pet"
"""
    )

    config = Config.load_from_file(temp_config_file)

    assert config.log_file == "logs/edit.log"
    assert config.service.timeout == 15
    assert config.service.access_code == "ABC-1234-XYZ"
    assert config.editor.form_template_id == "register-a-pet"


def test_env_overrides_file(temp_config_file, monkeypatch):
    """Test: Environment variables take precedence over the file"""
    Path(temp_config_file).write_text(
        """
[service]
host = "https://forms.example.com"

[editor]
form_template_id = "from-file"
"""
    )
    monkeypatch.setenv("LIVEEDIT_EDITOR__FORM_TEMPLATE_ID", "from-env")

    config = Config.load_from_file(temp_config_file)

    assert config.editor.form_template_id == "from-env"


def test_missing_file():
    """Test: Missing config file raises ConfigException"""
    with pytest.raises(ConfigException, match="not found"):
        Config.load_from_file("/nonexistent/config.toml")


def test_missing_service_section(temp_config_file):
    """Test: Missing required section lists the failing field"""
    Path(temp_config_file).write_text('log_file = "x.log"\n')

    with pytest.raises(ConfigException) as exc_info:
        Config.load_from_file(temp_config_file)

    message = str(exc_info.value)
    assert "Configuration validation failed:" in message
    assert "service" in message


def test_invalid_timeout(temp_config_file):
    """Test: Non-positive timeout is rejected"""
    Path(temp_config_file).write_text(
        """
[service]
host = "https://forms.example.com"
timeout = 0
"""
    )

    with pytest.raises(ConfigException, match="service -> timeout"):
        Config.load_from_file(temp_config_file)


def test_invalid_toml(temp_config_file):
    """Test: Broken TOML raises ConfigException"""
    Path(temp_config_file).write_text("[service\nhost = ")

    with pytest.raises(ConfigException, match="Invalid configuration file"):
        Config.load_from_file(temp_config_file)


def test_blank_access_code_is_none():
    """Test: An empty access code counts as no access code"""
    assert ServiceConfig(host="https://forms.example.com", access_code="  ").access_code is None
