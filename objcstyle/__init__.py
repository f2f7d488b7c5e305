"""objcstyle - Style-convention linter for Objective-C source files.

This package provides a command-line interface
for checking naming and whitespace conventions.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
