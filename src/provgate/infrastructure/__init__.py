"""Filesystem, HTTP, config and logging adapters."""
