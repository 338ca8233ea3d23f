from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from survey_charts.config.loader import DEFAULTS_PATH, SCHEMA_PATH

"""Config schema contract test."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_packaged_defaults_match_schema(schema):
    jsonschema.validate(yaml.safe_load(DEFAULTS_PATH.read_text(encoding="utf-8")), schema)


def test_config_schema_valid_example(schema):
    config = {
        "delimiter": ";",
        "source_directory": "./exports",
        "output_directory": "./charts",
        "categories": {"highly": "Very important", "not": "Unimportant"},
        "synonyms": {"vi": "highly", "meh": "slightly"},
        "chart": {
            "max_label_length": 40,
            "fallback_label": "Q{index}",
            "bar_title": "Motivation",
            "pie_title": "Overall",
            "min_label_percentage": 2.5,
            "colors": {"moderately": "#FFEB3B"},
        },
    }
    jsonschema.validate(config, schema)


@pytest.mark.parametrize(
    "config",
    [
        {"palette": {}},
        {"categories": {"often": "Often"}},
        {"categories": {"highly": ""}},
        {"synonyms": {"maybe": "sometimes"}},
        {"delimiter": ""},
        {"chart": {"colors": {"not": "red"}}},
    ],
)
def test_config_schema_rejects_invalid(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)
