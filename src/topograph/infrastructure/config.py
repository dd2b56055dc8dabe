"""Configuration for topograph."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from topograph.domain.value_objects.identifiers import (
    KEY_BLOCK_SIZES,
    KEY_MAX_BLOCK_SIZE,
    KEY_PLUGIN,
    TOPOLOGY_TREE,
)


class TopologyConfig(BaseModel):
    """Topology generation defaults, overridable per request."""

    plugin: Literal["topology/tree", "topology/block"] = Field(default=TOPOLOGY_TREE)
    block_sizes: Optional[str] = Field(default=None, description="Comma separated SLURM BlockSizes")
    max_block_size: Optional[int] = Field(default=None, ge=1, description="Split larger accelerator domains")
    normalize: bool = Field(default=True, description="Replace switch ids with canonical names")

    @field_validator("block_sizes")
    @classmethod
    def _check_block_sizes(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        tokens = [token.strip() for token in value.split(",")]
        if not all(token.isdecimal() and int(token) > 0 for token in tokens):
            raise ValueError(f"block_sizes must be comma separated positive integers, got {value!r}")
        return ",".join(tokens)

    def to_metadata(self) -> dict[str, str]:
        """Root metadata for the graph builder."""
        metadata = {KEY_PLUGIN: self.plugin}
        if self.block_sizes is not None:
            metadata[KEY_BLOCK_SIZES] = self.block_sizes
        if self.max_block_size is not None:
            metadata[KEY_MAX_BLOCK_SIZE] = str(self.max_block_size)
        return metadata


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")
    environment: str = Field(default="development")
    otlp_endpoint: str | None = Field(default=None)
    # 0 keeps metrics in the registry without serving them
    metrics_port: int = Field(default=9090, ge=0)


class Config(BaseSettings):
    """Main configuration."""

    model_config = SettingsConfigDict(env_prefix="TOPOGRAPH_", env_nested_delimiter="__")

    topology: TopologyConfig = Field(default_factory=TopologyConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    return Config()

