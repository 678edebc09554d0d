"""
cli — command-line interface for notekeeper.

Entry points
────────────
  python -m notekeeper   (via notekeeper/__main__.py)
  notekeeper             (via pyproject.toml [project.scripts])

Subcommands: add | list | delete | gui
"""

from notekeeper.cli.main import build_parser, cmd_add, cmd_delete, cmd_list, main

__all__ = ["build_parser", "cmd_add", "cmd_list", "cmd_delete", "main"]
