"""Lint commands - check, rules, categories."""

from __future__ import annotations

from objcstyle.cli.lint.check import command as check_command
from objcstyle.cli.lint.rules import categories_command, rules_command

__all__ = ["check_command", "rules_command", "categories_command"]
