"""Application layer for topograph.

Orchestrates collectors and domain services into topology requests.
"""

from topograph.application.coordinator import TopologyCoordinator

__all__ = [
    "TopologyCoordinator",
]
