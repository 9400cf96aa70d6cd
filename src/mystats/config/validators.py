"""
Configuration validation utilities.

This module turns the raw sections of `config.toml` into validated
configuration dataclasses.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AppConfig,
    ClusterConfig,
    CutPoints,
    DEFAULT_BYTES_RECEIVED_CUTS,
    DEFAULT_BYTES_SENT_CUTS,
    DEFAULT_REQUEST_TIME_CUTS,
    DEFAULT_SAMPLING_INTERVAL,
    DEFAULT_WINDOW_INTERVAL,
    StatisticsConfig,
)
from ..validation import (
    ValidationError,
    validate_cut_points,
    validate_enum_choice,
    validate_node_id,
    validate_positive_float,
)
from .storage_config import StorageConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_statistics_config(statistics_data: Dict[str, Any]) -> StatisticsConfig:
    """
    Validate and create a StatisticsConfig from the `[statistics]` section.

    Args:
        statistics_data: Raw statistics configuration from TOML

    Returns:
        Validated StatisticsConfig instance

    Raises:
        ValidationError: If validation fails
    """
    sampling_interval = validate_positive_float(
        statistics_data.get("sampling_interval", DEFAULT_SAMPLING_INTERVAL),
        min_value=0.1,
        max_value=3600.0,
        field_name="statistics.sampling_interval",
    )

    window_interval = validate_positive_float(
        statistics_data.get("window_interval", DEFAULT_WINDOW_INTERVAL),
        min_value=1.0,
        max_value=7 * 24 * 3600.0,
        field_name="statistics.window_interval",
    )

    # A window must be able to hold at least one per-second sample.
    if window_interval < sampling_interval:
        raise ValidationError(
            f"statistics.window_interval ({window_interval}) must be >= "
            f"statistics.sampling_interval ({sampling_interval})",
            field_name="statistics.window_interval",
            value=window_interval,
        )

    cuts_data = statistics_data.get("cuts", {})
    if not isinstance(cuts_data, dict):
        raise ValidationError(
            "statistics.cuts must be a table", field_name="statistics.cuts", value=cuts_data
        )

    cuts = CutPoints(
        bytes_sent=validate_cut_points(
            cuts_data.get("bytes_sent", DEFAULT_BYTES_SENT_CUTS),
            field_name="statistics.cuts.bytes_sent",
        ),
        bytes_received=validate_cut_points(
            cuts_data.get("bytes_received", DEFAULT_BYTES_RECEIVED_CUTS),
            field_name="statistics.cuts.bytes_received",
        ),
        request_time=validate_cut_points(
            cuts_data.get("request_time", DEFAULT_REQUEST_TIME_CUTS),
            field_name="statistics.cuts.request_time",
        ),
    )

    return StatisticsConfig(
        sampling_interval=sampling_interval,
        window_interval=window_interval,
        cuts=cuts,
    )


def validate_storage_config(storage_data: Dict[str, Any]) -> StorageConfig:
    """
    Validate the `[storage]` section.

    Raises:
        ValidationError: If the section holds unsupported values
    """
    try:
        return StorageConfig.from_dict(storage_data)
    except ValueError as e:
        raise ValidationError(str(e), field_name="storage", value=storage_data)


def validate_cluster_config(cluster_data: Dict[str, Any]) -> ClusterConfig:
    """
    Validate the `[cluster]` section.

    A node_id is optional even when clustering is enabled; it can be supplied
    through the environment at startup instead.

    Raises:
        ValidationError: If ``enabled`` is not a boolean or node_id is malformed
    """
    enabled = cluster_data.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ValidationError(
            "cluster.enabled must be a boolean", field_name="cluster.enabled", value=enabled
        )

    node_id = cluster_data.get("node_id")
    if node_id is not None:
        node_id = validate_node_id(node_id, field_name="cluster.node_id")

    return ClusterConfig(enabled=enabled, node_id=node_id)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole configuration file.

    Args:
        config_data: Parsed config.toml

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If any section fails validation
    """
    logging_data = config_data.get("logging", {})
    log_level = validate_enum_choice(
        logging_data.get("level", "INFO"),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )

    return AppConfig(
        statistics=validate_statistics_config(config_data.get("statistics", {})),
        storage=validate_storage_config(config_data.get("storage", {})),
        cluster=validate_cluster_config(config_data.get("cluster", {})),
        log_level=log_level,
    )
