"""
ABOUTME: .env file loading for environment readers
ABOUTME: Builds a read-only view of file and process variables without modifying os.environ
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from .exceptions import ConfigError


def load_env_file(path: Path) -> dict[str, str]:
    """
    Read the variables defined in a .env file.

    Parameters:
        path (Path): Location of the .env file.

    Returns:
        dict[str, str]: Variables from the file. Keys declared without a value are skipped.

    Raises:
        ConfigError: If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Environment file '{path}' not found")

    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    logging.debug(f"Loaded {len(values)} variables from {path}")
    return values


def build_environ(
    env_file: Optional[Path] = None, base: Optional[Mapping[str, str]] = None
) -> dict[str, str]:
    """
    Combine a .env file with the process environment.

    Variables already present in base (os.environ by default) take precedence over
    the file, matching how dotenv treats an existing environment.
    """
    base = os.environ if base is None else base
    if env_file is None:
        return dict(base)

    merged = load_env_file(env_file)
    overridden = [k for k in merged if k in base]
    if overridden:
        logging.debug(f"Process environment overrides {len(overridden)} file variables")
    merged.update(base)
    return merged
