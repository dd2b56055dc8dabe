"""Topograph: cluster network topology discovery for workload schedulers.

Folds per-instance placement records from a cloud provider into a
hierarchical graph and renders it as a SLURM topology config.
"""

__version__ = "0.1.0"
