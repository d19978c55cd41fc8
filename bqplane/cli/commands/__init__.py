"""
CLI command implementations.
"""

from bqplane.cli.commands.parameterize import cmd_parameterize
from bqplane.cli.commands.probe import cmd_probe
from bqplane.cli.commands.schema import cmd_schema
from bqplane.cli.commands.transfer import cmd_transfer

__all__ = ["cmd_transfer", "cmd_probe", "cmd_parameterize", "cmd_schema"]
