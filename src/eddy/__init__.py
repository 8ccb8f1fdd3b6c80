"""
eddy: Operator tooling for a transactional dataflow engine.

Waits for reactive work to drain across the cluster and scans the
engine's key-value data through a consistent snapshot.
"""

__version__ = "0.1.0"
