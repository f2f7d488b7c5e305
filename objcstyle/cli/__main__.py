"""CLI package entry point.

Allows running the CLI as: python -m objcstyle.cli
"""

from objcstyle.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
