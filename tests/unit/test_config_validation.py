from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from survey_charts.config.loader import ConfigError, _validate_config_schema

"""Unit tests for config validation error cases."""


def test_validate_config_schema_missing_schema_file():
    """Test that ConfigError is raised when schema file does not exist."""
    with patch("survey_charts.config.loader.SCHEMA_PATH", Path("/nonexistent/schema.json")):
        with pytest.raises(ConfigError) as e:
            _validate_config_schema({})
        assert "config schema not found" in str(e.value)


def test_validate_config_schema_invalid_json_schema():
    """Test that ConfigError is raised when schema file contains invalid JSON."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        f.write("{ invalid json }")
        f.flush()
        temp_path = Path(f.name)

    try:
        with patch("survey_charts.config.loader.SCHEMA_PATH", temp_path):
            with pytest.raises(ConfigError) as e:
                _validate_config_schema({})
            assert "invalid schema file" in str(e.value)
    finally:
        temp_path.unlink()


def test_validate_config_schema_empty_is_valid():
    """Every key is optional: an empty user file just keeps the defaults."""
    _validate_config_schema({})


def test_validate_config_schema_wrong_type():
    """Test that ConfigError is raised when value has wrong type."""
    with pytest.raises(ConfigError) as e:
        _validate_config_schema({"source_directory": 123})
    assert "config validation failed" in str(e.value)


def test_validate_config_schema_additional_properties():
    """Test that ConfigError is raised when additional properties are present."""
    with pytest.raises(ConfigError) as e:
        _validate_config_schema({"source_directory": "./data", "database": {}})
    assert "config validation failed" in str(e.value)


@pytest.mark.parametrize(
    "chart",
    [
        {"max_label_length": 2},
        {"min_label_percentage": 150},
        {"colors": {"highly": "green"}},
        {"colors": {"often": "#00ff00"}},
        {"legend": True},
    ],
)
def test_validate_config_schema_invalid_chart(chart):
    with pytest.raises(ConfigError) as e:
        _validate_config_schema({"chart": chart})
    assert "config validation failed" in str(e.value)


def test_validate_config_schema_delimiter_single_char():
    _validate_config_schema({"delimiter": ";"})
    with pytest.raises(ConfigError):
        _validate_config_schema({"delimiter": ";;"})
