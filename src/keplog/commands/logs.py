"""
Log commands for the keplog CLI.

Shows recent entries of the keplog log file and where logs are kept.
"""

from datetime import datetime
from typing import List, Optional

import typer
from rich.syntax import Syntax

from keplog.constants import LOG_APP_NAME, LOG_FILE_NAME, LOG_LINES_TO_SHOW
from keplog.logging import LogConfig, get_log_directory, get_logger
from keplog.logging.config import get_log_file_path
from keplog.utils.console import console, create_table, error, info, warning
from keplog.utils.formatting import format_file_size

app = typer.Typer(help="Inspect keplog CLI logs")


def tail_lines(lines: List[str], count: int, level: Optional[str] = None) -> List[str]:
    """Last count lines, optionally only those mentioning a level"""
    if level:
        level_upper = level.upper()
        lines = [line for line in lines if level_upper in line]
    if count <= 0:
        return []
    return lines[-count:]


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of lines to show"
    ),
    level: Optional[str] = typer.Option(
        None, "--level", help="Filter by log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Show recent log entries"""
    logger = get_logger("keplog.commands.logs")

    try:
        log_file = get_log_file_path()

        if not log_file.exists():
            warning(
                f"No log file found. Run some {LOG_APP_NAME} commands to generate logs."
            )
            return

        with open(log_file, "r", encoding="utf-8") as f:
            display_lines = tail_lines(f.readlines(), lines, level)

        if not display_lines:
            info("No log entries found matching the criteria.")
            return

        console.print(
            Syntax("".join(display_lines), "log", theme="monokai", line_numbers=False)
        )
    except OSError as e:
        logger.error(f"Failed to show logs: {e}")
        error(f"Failed to show logs: {e}")
        raise typer.Exit(1)


@app.command("info")
def log_info() -> None:
    """Show log configuration and file information"""
    logger = get_logger("keplog.commands.logs")

    try:
        config = LogConfig()
        log_file = get_log_file_path(config)
        log_dir = get_log_directory()

        table = create_table(f"{LOG_APP_NAME} Log Information", ["Setting", "Value"])
        table.add_row("Log Directory", str(log_dir))
        table.add_row("Log File", str(log_file))
        table.add_row("Log Level", config.default_level.value)
        table.add_row("Rotation", "Daily at midnight")
        table.add_row("Retention Days", str(config.log_retention_days))

        if log_file.exists():
            stat = log_file.stat()
            modified = datetime.fromtimestamp(stat.st_mtime)
            table.add_row("Current Size", format_file_size(stat.st_size))
            table.add_row("Last Modified", modified.strftime("%Y-%m-%d %H:%M:%S"))
        else:
            table.add_row("Current Size", "File not found")
            table.add_row("Last Modified", "N/A")

        rotated_files = list(log_dir.glob(f"{LOG_FILE_NAME}.log.*"))
        table.add_row("Rotated Files", str(len(rotated_files)))

        console.print(table)
    except OSError as e:
        logger.error(f"Failed to show log info: {e}")
        error(f"Failed to show log info: {e}")
        raise typer.Exit(1)
