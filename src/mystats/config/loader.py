"""
Reading config.toml from disk.

Parsing lives here; turning the parsed tables into validated dataclasses is
the job of ``validators``.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("statistics", "storage", "cluster", "logging")


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Parse ``config_path`` and return its tables.

    Unknown top-level tables are ignored with a warning so that a typo such
    as ``[statistic]`` does not silently fall back to the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Statistics configuration not found: {config_path}")

    logger.info(f"Reading statistics configuration from {config_path}")
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {config_path.name}",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
        raise

    for section in sorted(set(data) - set(KNOWN_SECTIONS)):
        logger.warning(f"Ignoring unknown section [{section}] in {config_path.name}")
    return {key: value for key, value in data.items() if key in KNOWN_SECTIONS}


def resolve_data_dir(storage_data: Dict[str, Any], config_dir: Path) -> Dict[str, Any]:
    """Return a copy of ``[storage]`` whose relative ``data_dir`` is anchored at ``config_dir``."""
    resolved = dict(storage_data)
    data_dir = resolved.get("data_dir")
    if isinstance(data_dir, str) and data_dir.strip():
        path = Path(data_dir).expanduser()
        resolved["data_dir"] = str(path if path.is_absolute() else config_dir / path)
    return resolved
