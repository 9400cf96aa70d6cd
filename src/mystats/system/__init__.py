"""
System interaction utilities.

Currently this is the node identity resolution used to tag records when
several cluster nodes share one repository.
"""

from .identity import NODE_ID_ENV_VAR, resolve_node_identity

__all__ = [
    "NODE_ID_ENV_VAR",
    "resolve_node_identity",
]
