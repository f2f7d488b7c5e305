"""objcstyle CLI - Command-line interface for the linter.

Main entry point is in main.py which registers all commands.

Usage:
    objcstyle check Sources/
    python -m objcstyle.cli check Sources/
"""


def __getattr__(name: str):
    """Lazy import to avoid RuntimeWarning when running as module."""
    if name == "app":
        from objcstyle.cli.main import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]
