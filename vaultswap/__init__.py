"""Bulk maintenance operations on KV v2 secrets in a Vault server, with dry-run support."""

__version__ = "0.1.0"