"""
CLI utility functions.

Common helpers for CLI commands: colored status messages and formatting.
"""

import click


# Color definitions for consistent styling
COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
}


def echo_success(message: str) -> None:
    """Print success message with green checkmark."""
    click.echo(click.style("✓ ", fg=COLORS["success"]) + message)


def echo_error(message: str) -> None:
    """Print error message with red X."""
    click.echo(click.style("✗ ", fg=COLORS["error"]) + message, err=True)


def echo_warning(message: str) -> None:
    """Print warning message with yellow exclamation."""
    click.echo(click.style("! ", fg=COLORS["warning"]) + message)


def echo_info(message: str) -> None:
    """Print info message with blue arrow."""
    click.echo(click.style("→ ", fg=COLORS["info"]) + message)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"
