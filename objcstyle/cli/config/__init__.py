"""Config command group - Configuration management."""

from __future__ import annotations

from objcstyle.cli.config.main import app as config_app

__all__ = ["config_app"]
