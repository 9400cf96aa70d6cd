"""
Process-wide configuration singleton.

The historian, the CLI and the tests all go through get_config(); the file is
read once and the validated AppConfig is cached until the path changes or
clear_config_cache() is called.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig
from ..validation import ValidationError, handle_config_error, ErrorSeverity
from .loader import read_config_file, resolve_data_dir
from .validators import validate_app_config

logger = logging.getLogger(__name__)

_CONFIG: Optional[AppConfig] = None

# <project root>/conf/config.toml; the CLI's --config replaces it.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """Point get_config() at another file and drop the cached configuration."""
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.debug(f"Configuration path set to: {_CONFIG_FILE_PATH}")


def get_config_path() -> Path:
    return _CONFIG_FILE_PATH


def clear_config_cache() -> None:
    global _CONFIG
    _CONFIG = None


def _load_config(config_path: Path) -> AppConfig:
    data = read_config_file(config_path)
    data["storage"] = resolve_data_dir(data.get("storage", {}), config_path.parent)

    try:
        app_config = validate_app_config(data)
    except ValidationError as e:
        handle_config_error(
            error=e,
            context=f"validating {config_path.name}",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
        raise

    stats = app_config.statistics
    logger.info(
        f"Sampling every {stats.sampling_interval}s, windows of {stats.window_interval}s, "
        f"{app_config.storage.format} storage"
    )
    return app_config


def get_config() -> AppConfig:
    """
    Return the application configuration, loading it on first use.

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If a value is out of range or of the wrong type
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    return _CONFIG is not None


def get_config_info() -> Dict[str, Any]:
    """Describe the configuration state without forcing a load."""
    info: Dict[str, Any] = {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "storage_format": None,
        "cluster_enabled": None,
        "sampling_interval": None,
        "window_interval": None,
    }
    if _CONFIG is not None:
        info.update(
            storage_format=_CONFIG.storage.format,
            cluster_enabled=_CONFIG.cluster.enabled,
            sampling_interval=_CONFIG.statistics.sampling_interval,
            window_interval=_CONFIG.statistics.window_interval,
        )
    return info
