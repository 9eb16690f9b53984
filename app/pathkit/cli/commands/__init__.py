"""CLI commands for pathkit.

This package contains all subcommand implementations.
"""

from pathkit.cli.commands import config, ls, path, tree

__all__ = ["config", "ls", "path", "tree"]
