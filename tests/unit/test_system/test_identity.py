"""
Unit tests for node identity resolution.
"""

from unittest.mock import patch

import pytest

from mystats.models.config import ClusterConfig
from mystats.system import NODE_ID_ENV_VAR, resolve_node_identity
from mystats.validation import ValidationError


@pytest.mark.unit
class TestResolveNodeIdentity:
    """Test cases for resolve_node_identity()."""

    def test_standalone_has_no_identity(self):
        config = ClusterConfig(enabled=False, node_id="ignored")

        assert resolve_node_identity(config, environ={NODE_ID_ENV_VAR: "env-node"}) is None

    def test_environment_overrides_config(self):
        config = ClusterConfig(enabled=True, node_id="config-node")

        assert resolve_node_identity(config, environ={NODE_ID_ENV_VAR: "env-node"}) == "env-node"

    def test_config_node_id(self):
        config = ClusterConfig(enabled=True, node_id="config-node")

        assert resolve_node_identity(config, environ={}) == "config-node"

    def test_blank_environment_value_is_ignored(self):
        config = ClusterConfig(enabled=True, node_id="config-node")

        assert resolve_node_identity(config, environ={NODE_ID_ENV_VAR: "  "}) == "config-node"

    def test_falls_back_to_hostname(self):
        with patch("mystats.system.identity.socket.gethostname", return_value="db-host.local"):
            node_id = resolve_node_identity(ClusterConfig(enabled=True), environ={})

        assert node_id == "db-host.local"

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv(NODE_ID_ENV_VAR, "from-os-env")

        assert resolve_node_identity(ClusterConfig(enabled=True)) == "from-os-env"

    def test_invalid_identity(self):
        with pytest.raises(ValidationError):
            resolve_node_identity(
                ClusterConfig(enabled=True), environ={NODE_ID_ENV_VAR: "bad id"}
            )
