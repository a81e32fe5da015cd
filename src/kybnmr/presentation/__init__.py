"""Command-line interfaces and other presentation layer components."""

from .cli.double_check import main as double_check_main

__all__ = ["double_check_main"]
