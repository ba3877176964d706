"""
Tests for deploy description validation.

A single pass over a request must report every invalid field, not just the
first one.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gcelib.accounts import Account, MapBackedAccountRepository
from gcelib.attribute_validator import ValidationErrors
from gcelib.deploy_validator import validate_deploy_description


@pytest.fixture
def accounts():
    return MapBackedAccountRepository([Account(name="my-account", project="my-project")])


@pytest.fixture
def valid_description():
    return {
        "account": "my-account",
        "application": "myapp",
        "stack": "prod",
        "freeFormDetails": "canary-1",
        "repositoryUrl": "https://github.com/example/myapp.git",
        "configFilepaths": ["app.yaml"],
    }


class TestValidateDeployDescription:
    def test_valid_description(self, accounts, valid_description):
        errors = validate_deploy_description(valid_description, accounts)

        assert isinstance(errors, ValidationErrors)
        assert not errors.has_errors

    def test_reports_every_problem(self, accounts):
        description = {
            "account": "unknown",
            "application": "my-app",
            "stack": "",
            "freeFormDetails": "bad*details",
            "configFilepaths": [],
        }

        errors = validate_deploy_description(description, accounts, decorator="deploy")

        assert errors.field_paths() == [
            "deploy.account",
            "deploy.application",
            "deploy.stack",
            "deploy.freeFormDetails",
            "deploy.repositoryUrl",
            "deploy.configFilepaths",
        ]
        assert [r.reason_code for r in errors] == [
            "deploy.account.notFound",
            "deploy.application.invalid",
            "deploy.stack.empty",
            "deploy.freeFormDetails.invalid",
            "deploy.repositoryUrl.empty",
            "deploy.configFilepaths.empty",
        ]

    def test_missing_details_are_allowed(self, accounts, valid_description):
        del valid_description["freeFormDetails"]

        assert not validate_deploy_description(valid_description, accounts).has_errors

    def test_uses_supplied_sink(self, accounts, valid_description):
        sink = Mock()
        valid_description["account"] = None

        result = validate_deploy_description(valid_description, accounts, errors=sink)

        assert result is sink
        sink.reject.assert_called_once_with("deployDescription.account", "deployDescription.account.empty")
