"""Adapters binding service ports to third-party libraries."""
