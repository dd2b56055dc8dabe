"""Unit tests for topograph configuration."""

import pytest
from pydantic import ValidationError

from topograph.domain.value_objects.identifiers import (
    KEY_BLOCK_SIZES,
    KEY_MAX_BLOCK_SIZE,
    KEY_PLUGIN,
    TOPOLOGY_BLOCK,
    TOPOLOGY_TREE,
)
from topograph.infrastructure.config import (
    Config,
    ObservabilityConfig,
    TopologyConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Test configuration loading and validation."""

    def test_topology_config_defaults(self):
        config = TopologyConfig()
        assert config.plugin == TOPOLOGY_TREE
        assert config.block_sizes is None
        assert config.max_block_size is None
        assert config.normalize is True

    def test_observability_config_defaults(self):
        config = ObservabilityConfig()
        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.otlp_endpoint is None

    def test_to_metadata(self):
        config = TopologyConfig(plugin=TOPOLOGY_BLOCK, block_sizes="8, 16", max_block_size=18)
        assert config.to_metadata() == {
            KEY_PLUGIN: TOPOLOGY_BLOCK,
            KEY_BLOCK_SIZES: "8,16",
            KEY_MAX_BLOCK_SIZE: "18",
        }

    @pytest.mark.parametrize("value", ["0", "a", "4,,8"])
    def test_invalid_block_sizes(self, value):
        with pytest.raises(ValidationError):
            TopologyConfig(block_sizes=value)

    def test_invalid_plugin(self):
        with pytest.raises(ValidationError):
            TopologyConfig(plugin="topology/torus")

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TOPOGRAPH_TOPOLOGY__PLUGIN", TOPOLOGY_BLOCK)
        monkeypatch.setenv("TOPOGRAPH_TOPOLOGY__BLOCK_SIZES", "18")
        monkeypatch.setenv("TOPOGRAPH_OBSERVABILITY__LOG_FORMAT", "console")

        config = Config()
        assert config.topology.plugin == TOPOLOGY_BLOCK
        assert config.topology.block_sizes == "18"
        assert config.observability.log_format == "console"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()
