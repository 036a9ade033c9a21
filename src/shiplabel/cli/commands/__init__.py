"""Subcommands for the shiplabel CLI."""
