"""CLI package for treekeeper.

Provides the Typer application and its subcommands.
"""
