"""Maintenance use cases."""
