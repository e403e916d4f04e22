"""Subcommand parsers for the lbd CLI."""
