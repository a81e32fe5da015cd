"""Command-line interface modules."""

from .double_check import main as double_check_main

__all__ = ["double_check_main"]
