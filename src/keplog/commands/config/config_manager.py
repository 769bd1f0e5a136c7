"""
Configuration management commands.
"""

import typer
from rich.markup import escape

from keplog.logging import get_logger
from keplog.utils.config_store import ConfigStore
from keplog.utils.console import error, info
from .settings import display_config

app = typer.Typer(help="Inspect keplog configuration")


@app.command("show")
def show():
    """Show the effective configuration and where it comes from"""
    logger = get_logger("keplog.commands.config")
    config_store = ConfigStore()

    try:
        source = config_store.get_config_source()
        config = config_store.get_config()
    except OSError as e:
        logger.error(f"Failed to read configuration: {e}")
        error(f"Failed to read configuration: {escape(str(e))}")
        raise typer.Exit(1)

    path = None
    if source == "local":
        path = config_store.get_local_config_path()
    elif source == "global":
        path = config_store.get_global_config_path()

    logger.debug(f"Showing configuration from {source}")
    display_config(config, source, path)


@app.command("path")
def path():
    """Print the local and global configuration file locations"""
    config_store = ConfigStore()
    local_path = config_store.get_local_config_path()

    info(f"Local:  {local_path if local_path else 'not found'}")
    global_path = config_store.get_global_config_path()
    suffix = "" if config_store.has_global_config() else " (not found)"
    info(f"Global: {global_path}{suffix}")
