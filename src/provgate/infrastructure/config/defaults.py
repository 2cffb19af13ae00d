"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "provgate",
    "environment": "dev",
    "providers": {
        "source_dir": "./providers",
        "dist_dir": "./dist",
        "manifest_path": "./manifest.json",
        "catalog_filename": "catalog.ts",
    },
    "execution": {
        "timeout_seconds": None,  # no deadline unless configured
    },
    "http": {
        "timeout_seconds": 30.0,
        "follow_redirects": True,
        "user_agent": None,  # browser-like preset when unset
    },
    "base_urls": {
        "source_url": None,
        "ttl_seconds": 3600.0,
        "overrides": {},
    },
    "build": {
        "command": ["node", "build.js"],
        "cwd": None,
        "timeout_seconds": 300.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
