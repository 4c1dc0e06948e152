"""CLI command implementations for the cabinet-mfg application.

This package contains:
- validate: Validate a project file
- common: Project loading shared by commands
"""

from cabinet_mfg.cli.commands.validate import validate_command

__all__ = ["validate_command"]
