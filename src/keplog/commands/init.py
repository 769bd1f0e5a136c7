"""
Init command.

Interactively creates a local .keplog.json or the global ~/.keplogrc.
"""

import typer

from keplog.constants import DEFAULT_API_URL, GLOBAL_CONFIG_FILENAME, LOCAL_CONFIG_FILENAME
from keplog.logging import get_logger
from keplog.utils.config_store import ConfigStore, KeplogConfig
from keplog.utils.console import console, error, header, hint, info, success, warning
from keplog.utils.formatting import mask_secret
from .config.settings import prompt_value

logger = get_logger("keplog.commands.init")


def confirm_overwrite(config_store: ConfigStore, use_global: bool) -> bool:
    """Ask before replacing an existing config file; True when nothing exists"""
    if use_global:
        if not config_store.has_global_config():
            return True
        warning(f"⚠️  Global configuration already exists at ~/{GLOBAL_CONFIG_FILENAME}")
    else:
        local_path = config_store.get_local_config_path()
        if local_path is None:
            return True
        warning(f"⚠️  Configuration already exists at {local_path}")

    return typer.confirm("Do you want to overwrite it?", default=False)


def prompt_config(existing: KeplogConfig) -> KeplogConfig:
    hint("Get your credentials from: Project Settings → General → Project Credentials\n")

    project_id = prompt_value("Project ID", default=existing.project_id)
    api_key = prompt_value("API Key", default=existing.api_key, secret=True)
    api_url = prompt_value(
        "API URL (optional)",
        default=existing.api_url or DEFAULT_API_URL,
        required=False,
    )
    project_name = prompt_value(
        "Project name (optional)", default=existing.project_name, required=False
    )

    return KeplogConfig(
        project_id=project_id,
        api_key=api_key,
        api_url=api_url or DEFAULT_API_URL,
        project_name=project_name or None,
    )


def print_saved(config: KeplogConfig) -> None:
    info("\n📝 Saved configuration:")
    hint(f"   Project ID: {config.project_id}")
    hint(f"   API Key: {mask_secret(config.api_key)}")
    hint(f"   API URL: {config.api_url}")
    if config.project_name:
        hint(f"   Project Name: {config.project_name}")

    info("\n💡 Next steps:")
    hint('   1. Upload source maps: keplog upload --release=v1.0.0 --files="dist/**/*.map"')
    hint("   2. View help: keplog upload --help")
    console.print()


def run_init(config_store: ConfigStore, use_global: bool = False, force: bool = False) -> None:
    header("🚀 Keplog CLI Configuration")

    try:
        if not force and not confirm_overwrite(config_store, use_global):
            hint("\nConfiguration cancelled.")
            return

        config = prompt_config(config_store.read_config())

        if use_global:
            config_store.write_global_config(config)
            success(f"\nConfiguration saved globally to ~/{GLOBAL_CONFIG_FILENAME}")
        else:
            config_store.write_local_config(config)
            success(f"\nConfiguration saved to {LOCAL_CONFIG_FILENAME}")
            hint(f"\nTip: Add {LOCAL_CONFIG_FILENAME} to .gitignore to keep credentials secret")
    except (KeyboardInterrupt, EOFError, typer.Abort):
        hint("\n\nConfiguration cancelled.")
        raise typer.Exit(0)
    except OSError as e:
        logger.error(f"Failed to write configuration: {e}")
        error(f"Error: {e}")
        raise typer.Exit(1)

    logger.info(f"Initialized {'global' if use_global else 'local'} configuration")
    print_saved(config)


def init(
    use_global: bool = typer.Option(
        False, "--global", "-g", help="Save configuration globally (in ~/.keplogrc)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing configuration"
    ),
):
    """Initialize Keplog configuration for the current project"""
    run_init(ConfigStore(), use_global=use_global, force=force)
