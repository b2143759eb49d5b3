"""treekeeper - resilient, order-deterministic directory tree utilities."""

__version__ = "0.1.0"
