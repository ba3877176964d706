"""
Configuration loading for gcpcheck.

Reads the accounts configuration and the request/resource documents the CLI
works on. Configuration is YAML:

    decorator: deployDescription      # optional
    accounts:
      - name: my-account
        project: my-project
        regions: [us-central1]
        environment: prod

Input documents may be YAML or JSON (JSON is a subset of YAML).
"""

from pathlib import Path
from typing import Any, Dict, Union
import logging

import yaml

from gcelib.accounts import Account, MapBackedAccountRepository
from gcelib.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DECORATOR = "deployDescription"

ACCOUNT_FIELDS = ("name", "project", "regions", "environment")


def load_document(path: Union[str, Path]) -> Any:
    """
    Load a YAML or JSON document from disk.

    Args:
        path: File to read

    Returns:
        Parsed document

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, "r") as file:
            document = yaml.safe_load(file)
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise ConfigurationError(
            f"Could not read file '{path}'", context={"error": e.strerror}
        ) from e
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse {path}: {e}")
        raise ConfigurationError(
            f"File '{path}' is not valid YAML or JSON", context={"error": str(e)}
        ) from e
    logger.debug(f"Loaded document from {path}")
    return document


def validate_config(config: Any, source: str = "<config>") -> Dict[str, Any]:
    """
    Check the shape of a configuration document and fill in defaults.

    Raises:
        ConfigurationError: If the document is not a mapping, accounts is not
            a list of mappings, or an account has no name
    """
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            "Configuration must be a mapping", context={"source": source}
        )

    accounts = config.get("accounts") or []
    if not isinstance(accounts, list):
        raise ConfigurationError(
            "'accounts' must be a list", context={"source": source}
        )
    for index, account in enumerate(accounts):
        if not isinstance(account, dict) or not account.get("name"):
            raise ConfigurationError(
                "Every account needs a name",
                context={"source": source, "index": index},
            )
        unknown = sorted(set(account) - set(ACCOUNT_FIELDS))
        if unknown:
            logger.warning(f"Ignoring unknown account fields {unknown} in {source}")

    return {
        "decorator": config.get("decorator") or DEFAULT_DECORATOR,
        "accounts": accounts,
    }


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and validate the accounts configuration file."""
    config = validate_config(load_document(path), source=str(path))
    logger.info(f"Loaded {len(config['accounts'])} account(s) from {path}")
    return config


def load_accounts(config: Dict[str, Any]) -> MapBackedAccountRepository:
    """Build an account repository from a validated configuration."""
    repository = MapBackedAccountRepository()
    for entry in config.get("accounts", []):
        account = Account(
            name=entry["name"],
            project=entry.get("project"),
            regions=list(entry.get("regions") or []),
            environment=entry.get("environment"),
        )
        repository.save(account.name, account)
    return repository
