# Area: Shared
"""
party_host.config — Host configuration
======================================

Configuration is layered: defaults, then an optional JSON file, then
environment variables (a ``.env`` file in the working directory is loaded
first). Later layers win.

Environment variables:
    PARTY_HOST_GRACE_SECONDS      disconnect grace period (default 300)
    PARTY_HOST_ROOM_CODE_LENGTH   generated room code length (default 4)
    PARTY_HOST_STARTING_DICE      Cachito hand size (default 5)
    PARTY_HOST_LOG_FILE           JSON log file (default party_host.log)
    PARTY_HOST_LOG_LEVEL          logging level name (default INFO)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from ._session.registry import ROOM_CODE_ALPHABET
from .errors import ConfigError

logger = logging.getLogger("party_host.config")

ENV_MAPPINGS = {
    "PARTY_HOST_GRACE_SECONDS": "disconnect_grace_seconds",
    "PARTY_HOST_ROOM_CODE_LENGTH": "room_code_length",
    "PARTY_HOST_STARTING_DICE": "starting_dice",
    "PARTY_HOST_LOG_FILE": "log_file",
    "PARTY_HOST_LOG_LEVEL": "log_level",
}

_NUMERIC_KEYS = {
    "disconnect_grace_seconds": float,
    "room_code_length": int,
    "starting_dice": int,
}


@dataclass(frozen=True)
class HostConfig:
    disconnect_grace_seconds: float = 300.0
    room_code_length: int = 4
    room_code_alphabet: str = ROOM_CODE_ALPHABET
    starting_dice: int = 5
    log_file: str = "party_host.log"
    log_level: str = "INFO"


def validate_config(config: HostConfig) -> HostConfig:
    """
    Check value ranges.

    Raises:
        ConfigError: if any value is out of range
    """
    problems = []
    if config.disconnect_grace_seconds <= 0:
        problems.append("disconnect_grace_seconds must be positive")
    if config.room_code_length < 1:
        problems.append("room_code_length must be at least 1")
    if config.starting_dice < 1:
        problems.append("starting_dice must be at least 1")
    if not config.room_code_alphabet:
        problems.append("room_code_alphabet must not be empty")
    if not isinstance(logging.getLevelName(config.log_level.upper()), int):
        problems.append(f"unknown log_level {config.log_level!r}")
    if problems:
        raise ConfigError(f"Invalid configuration: {problems}")
    return config


def config_from_dict(values: Dict[str, Any]) -> HostConfig:
    """Build a config from a dict, ignoring unknown keys."""
    known = {f.name for f in fields(HostConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {unknown}")
    kwargs = {}
    for key, value in values.items():
        if key not in known:
            continue
        if key in _NUMERIC_KEYS:
            try:
                value = _NUMERIC_KEYS[key](value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{key} must be a number, got {value!r}") from exc
        kwargs[key] = value
    return validate_config(replace(HostConfig(), **kwargs))


def load_config(config_path: Optional[str] = None, use_dotenv: bool = True) -> HostConfig:
    """Load config from file and environment."""
    values: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                values.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            values[config_key] = os.environ[env_key]

    return config_from_dict(values)
