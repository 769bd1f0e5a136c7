from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from keplog.commands import config, delete, init, issues, listing, logs, releases, upload
from keplog.constants import __version__
from keplog.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]Keplog[/bold blue] - error tracking and source map management",
    rich_markup_mode="rich",
)

# Command groups
app.add_typer(issues.app, name="issues")
app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")

# Standalone commands
app.command("init")(init.init)
app.command("upload")(upload.upload)
app.command("list")(listing.list_source_maps)
app.command("delete")(delete.delete)
app.command("releases")(releases.list_releases)


def version_callback(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """
    [bold blue]Keplog[/bold blue] - error tracking and source map management

    Upload source maps for releases and browse the issues they help decode.
    """
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())


def main():
    # .env values never override variables already set
    load_dotenv(Path.cwd() / ".env", override=False)

    setup_logging()
    logger = get_logger("keplog.main")
    logger.info("Keplog CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("Keplog CLI finished")


if __name__ == "__main__":
    main()
