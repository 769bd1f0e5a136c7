"""
User settings and credential prompts.

This module handles interactive input and configuration display.
"""

from pathlib import Path
from typing import Optional

import typer

from keplog.utils.config_store import KeplogConfig
from keplog.utils.console import display_panel, error, warning
from keplog.utils.formatting import mask_secret


def prompt_value(
    prompt_text: str,
    default: Optional[str] = None,
    required: bool = True,
    secret: bool = False,
) -> str:
    """Ask for a value, repeating until a required value is given"""
    while True:
        value = typer.prompt(
            prompt_text,
            default=default or "",
            hide_input=secret,
            show_default=bool(default) and not secret,
        )
        value = (value or "").strip()
        if value or not required:
            return value
        error(f"{prompt_text} is required")


def display_config(
    config: KeplogConfig,
    source: str,
    path: Optional[Path] = None,
) -> None:
    """Display the effective configuration with the API key masked"""
    if not (config.project_id or config.api_key):
        warning("No keplog configuration found. Run 'keplog init' to create one.")

    lines = [
        f"Source: {source}" + (f" ({path})" if path else ""),
        f"Project ID: {config.project_id or '-'}",
        f"API Key: {mask_secret(config.api_key)}",
        f"API URL: {config.api_url or '-'}",
    ]
    if config.project_name:
        lines.append(f"Project Name: {config.project_name}")

    display_panel("\n".join(lines), "keplog configuration", "blue")
