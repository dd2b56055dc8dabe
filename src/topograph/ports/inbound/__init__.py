"""Inbound ports - API interfaces offered to clients."""

from topograph.ports.inbound.api import TopologyAPI

__all__ = ["TopologyAPI"]
