"""Sidecar route modules."""
