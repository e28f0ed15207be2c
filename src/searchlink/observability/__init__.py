"""Logging setup shared with the host service."""
