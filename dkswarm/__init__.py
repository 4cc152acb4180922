"""Session state on disk, dk-branch lifecycle, call-graph partitioning, symbol replacement and per-group git commits."""

__version__ = "0.1.0"