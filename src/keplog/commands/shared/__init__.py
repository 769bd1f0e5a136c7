"""
Shared utilities for keplog commands.

This module provides the base class and option definitions used by every
command that talks to the API.
"""

from .base_command import BaseCommand
from .cli_options import CommonOptions

__all__ = ["BaseCommand", "CommonOptions"]
