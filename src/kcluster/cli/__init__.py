"""Command-line interface for kcluster."""

from __future__ import annotations

from kcluster.cli.main import create_parser, main

__all__ = ["create_parser", "main"]
