"""CLI command implementations."""

from approvalradar.commands.scan import cmd_scan

__all__ = ["cmd_scan"]
