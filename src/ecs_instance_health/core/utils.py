"""Utility functions for ecs-instance-health."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.spinner import Spinner

console = Console()
error_console = Console(stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Toggle printing of success messages."""
    global _verbose
    _verbose = enabled


def extract_name_from_arn(arn: str) -> str:
    """Extract resource name from AWS ARN.

    Works for both container instance ARN formats:
    ``container-instance/<cluster>/<id>`` and the legacy ``container-instance/<id>``.
    """
    return arn.split("/")[-1]


def print_error(message: str) -> None:
    error_console.print(f"❌ {message}", style="red")


def print_success(message: str) -> None:
    if _verbose:
        console.print(f"✅ {message}", style="green")


def print_warning(message: str) -> None:
    error_console.print(f"⚠️ {message}", style="yellow")


def print_info(message: str) -> None:
    console.print(message, style="blue")


@contextmanager
def show_spinner(message: str = "") -> Iterator[None]:
    """Context manager that shows a spinner while running operations."""
    spinner = Spinner("dots", text=message, style="cyan")
    with console.status(spinner):
        yield
