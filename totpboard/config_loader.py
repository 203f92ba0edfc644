#!/usr/bin/env python3
"""
config_loader.py — read the account list from a YAML file.

Expected layout:

    accounts:
      - id: 1
        name: GitHub
        username: alice
        site: github.com
        secret: JBSWY3DPEHPK3PXP

Missing fields fall back to zero values ("" / 0) instead of failing.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"


class ConfigError(Exception):
    """Base class for errors that stop the dashboard at startup."""


class FileError(ConfigError):
    """Config file cannot be read."""


class ParseError(ConfigError):
    """Config file is not valid YAML or does not match the account layout."""


class EmptyConfigError(ConfigError):
    """Config file has no accounts."""


@dataclass(frozen=True)
class Account:
    id: int = 0
    name: str = ""
    username: str = ""
    site: str = ""
    secret: str = ""


@dataclass(frozen=True)
class Config:
    accounts: Tuple[Account, ...] = ()


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any, index: int) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ParseError(f"accounts[{index}].id: expected an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"accounts[{index}].id: expected an integer, got {value!r}") from e


def account_from_mapping(entry: Mapping[str, Any], index: int = 0) -> Account:
    """
    Build an Account from one YAML mapping.

    Unknown keys are ignored; missing or null keys become zero values.
    """
    if not isinstance(entry, Mapping):
        raise ParseError(f"accounts[{index}]: expected a mapping, got {type(entry).__name__}")
    return Account(
        id=_as_int(entry.get("id"), index),
        name=_as_str(entry.get("name")),
        username=_as_str(entry.get("username")),
        site=_as_str(entry.get("site")),
        secret=_as_str(entry.get("secret")),
    )


def parse_config(text: str) -> Config:
    """Parse YAML text into a Config. Raises ParseError."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, Mapping):
        raise ParseError(f"top level must be a mapping, got {type(data).__name__}")

    raw_accounts = data.get("accounts")
    if raw_accounts is None:
        return Config()
    if not isinstance(raw_accounts, list):
        raise ParseError(f"'accounts' must be a list, got {type(raw_accounts).__name__}")

    return Config(accounts=tuple(
        account_from_mapping(entry, i) for i, entry in enumerate(raw_accounts)
    ))


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Read and parse the config file at `path`.

    Raises:
        FileError: file missing or unreadable
        ParseError: content is not UTF-8 or not a valid account config
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise FileError(f"cannot read {path}: {e}") from e

    config = parse_config(text)
    logger.debug("Parsed %d account(s) from %s", len(config.accounts), path)
    return config


def require_accounts(config: Config) -> Config:
    if not config.accounts:
        raise EmptyConfigError("No accounts found in config file")
    return config
