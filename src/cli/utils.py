"""Shared utilities for CLI commands."""

from rich.console import Console

# Initialize Rich console for colored output
console = Console()
