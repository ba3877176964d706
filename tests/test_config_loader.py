"""
Unit tests for config_loader module.

Tests configuration loading including:
- Reading YAML and JSON documents
- Validation of the accounts section
- Error handling for missing or invalid files
- Building the account repository
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gcelib.config_loader import (
    DEFAULT_DECORATOR,
    load_accounts,
    load_config,
    load_document,
    validate_config,
)
from gcelib.exceptions import ConfigurationError

CONFIG_YAML = """
decorator: appengine
accounts:
  - name: my-account
    project: my-project
    regions: [us-central1, europe-west1]
    environment: prod
  - name: staging
"""


class TestLoadDocument:
    """Tests for load_document() function."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "doc.yaml"
        path.write_text("application: myapp\nconfigFilepaths: [app.yaml]\n")

        assert load_document(path) == {"application": "myapp", "configFilepaths": ["app.yaml"]}

    def test_load_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"name": "web-lb", "hostRules": []}))

        assert load_document(str(path)) == {"name": "web-lb", "hostRules": []}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_document(tmp_path / "missing.yaml")

        assert "Could not read file" in str(exc_info.value)

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("accounts: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_document(path)

        assert "not valid YAML" in str(exc_info.value)


class TestValidateConfig:
    """Tests for validate_config() function."""

    def test_empty_config_gets_defaults(self):
        assert validate_config(None) == {"decorator": DEFAULT_DECORATOR, "accounts": []}

    def test_non_mapping_raises(self):
        with pytest.raises(ConfigurationError):
            validate_config(["not", "a", "mapping"])

    def test_accounts_must_be_list(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config({"accounts": {"name": "my-account"}})

        assert "'accounts' must be a list" in str(exc_info.value)

    def test_account_without_name_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config({"accounts": [{"name": "ok"}, {"project": "p"}]})

        assert exc_info.value.context["index"] == 1


class TestLoadConfig:
    """Tests for load_config() and load_accounts()."""

    def test_load_config_and_accounts(self, tmp_path):
        path = tmp_path / "accounts.yaml"
        path.write_text(CONFIG_YAML)

        config = load_config(path)
        repository = load_accounts(config)

        assert config["decorator"] == "appengine"
        account = repository.find_by_name("my-account")
        assert account.project == "my-project"
        assert account.regions == ["us-central1", "europe-west1"]
        assert repository.find_by_name("staging").regions == []
        assert repository.find_by_name("staging").project is None
        assert repository.find_by_name("unknown") is None
