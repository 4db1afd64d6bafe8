"""Lookup services."""
