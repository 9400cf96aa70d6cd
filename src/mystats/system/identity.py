"""
Node identity resolution.

In a cluster every node writes into the same repository, so each record is
tagged with the node that produced it and every store query is filtered by
that tag. A standalone server has no identity and its queries are unfiltered.
"""

import logging
import os
import socket
from typing import Mapping, Optional

from ..models.config import ClusterConfig
from ..validation import validate_node_id

logger = logging.getLogger(__name__)

NODE_ID_ENV_VAR = "MYSTATS_NODE_ID"


def resolve_node_identity(
    cluster_config: ClusterConfig, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Resolve the identity of this node once at startup.

    Lookup order when clustering is enabled: the ``MYSTATS_NODE_ID``
    environment variable, then ``cluster.node_id``, then the host name.

    Args:
        cluster_config: The ``[cluster]`` configuration
        environ: Environment to read; defaults to ``os.environ``

    Returns:
        The node id, or None when running standalone

    Raises:
        ValidationError: If the resolved id contains unsupported characters
    """
    if not cluster_config.enabled:
        logger.debug("Cluster mode disabled; running standalone")
        return None

    environ = os.environ if environ is None else environ
    source = NODE_ID_ENV_VAR
    node_id = environ.get(NODE_ID_ENV_VAR, "").strip()
    if not node_id and cluster_config.node_id:
        source = "cluster.node_id"
        node_id = cluster_config.node_id
    if not node_id:
        source = "hostname"
        node_id = socket.gethostname()

    node_id = validate_node_id(node_id, field_name=source)
    logger.info(f"Resolved node identity '{node_id}' from {source}")
    return node_id
