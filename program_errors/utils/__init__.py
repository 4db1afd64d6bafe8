"""Shared utilities: configuration and error handling."""
