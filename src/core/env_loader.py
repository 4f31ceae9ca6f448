#!/usr/bin/env python3
"""
Reads demo settings from the process environment and an optional .env file.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# run.py and the optional .env sit at the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    name, sep, value = line.partition('=')
    if not sep:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        value = value[1:-1]
    return name.strip(), value


def load_env_file(env_file_path: str = ".env", base_dir: Optional[Path] = None) -> int:
    """
    Export KEY=VALUE pairs from a .env file, leaving variables that are
    already set untouched.

    Returns:
        How many variables were exported
    """
    env_path = (base_dir or PROJECT_ROOT) / env_file_path
    if not env_path.is_file():
        logger.debug(f"No .env file at {env_path}")
        return 0

    exported = 0
    for number, raw in enumerate(env_path.read_text(encoding='utf-8').splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue

        pair = _parse_line(line)
        if pair is None:
            logger.warning(f"Ignoring line {number} of {env_path.name}: {line}")
            continue

        key, value = pair
        if key not in os.environ:
            os.environ[key] = value
            exported += 1

    logger.info(f"Loaded {exported} setting(s) from {env_path}")
    return exported


def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Read a true/false style environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES
