"""
Configuration management module.

- config_manager: typer commands for inspecting configuration
- settings: interactive prompts and configuration display

Usage:
    from keplog.commands.config import app
"""

from .config_manager import app
from .settings import prompt_value, display_config

__all__ = [
    'app',
    'prompt_value',
    'display_config',
]
