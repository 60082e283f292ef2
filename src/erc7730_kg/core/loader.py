# erc7730_kg/core/loader.py
"""Adapter import paths and YAML config files with ``${VAR:-default}`` expansion."""
from __future__ import annotations

import importlib
import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

# ${NAME} or ${NAME:-fallback}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def import_attr(path: str) -> Any:
    """Resolve ``package.module:Name`` to the named object."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Invalid import path '{path}', expected 'module:attr'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        logger.error("Adapter module '%s' could not be imported", module_name)
        raise ImportError(f"Cannot import module '{module_name}'") from exc

    if not hasattr(module, attr):
        logger.error("Adapter '%s' not found in '%s'", attr, module_name)
        raise AttributeError(f"Module '{module_name}' has no attribute '{attr}'")
    return getattr(module, attr)


def _expand(match: re.Match) -> str:
    name, fallback = match.group(1), match.group(2)
    if name in os.environ:
        return os.environ[name]
    if fallback is None:
        raise ValueError(
            f"Environment variable '{name}' is not set and no default provided"
        )
    return fallback


def substitute_env_vars(value: Any) -> Any:
    """Expand env references in every string of a parsed YAML tree."""
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_expand, value)
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    patterns = list(patterns)
    files = sorted({Path(match).resolve() for pattern in patterns for match in glob(pattern)})
    if not files:
        logger.debug("No config files match %s", patterns)
        return []

    documents: list[dict[str, Any]] = []
    for path in files:
        logger.info("Loading config file %s", path)
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file '{path}' must contain a mapping")
        documents.append(data)
    return documents
