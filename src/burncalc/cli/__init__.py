"""
CLI commands for burncalc.
"""

from burncalc.cli.report import report_command

__all__ = [
    "report_command",
]
