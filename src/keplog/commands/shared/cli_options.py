"""
Common CLI options for keplog commands.

This module provides standardized CLI options shared by every command that
talks to the API, so flags and help text stay consistent.
"""

import typer


class CommonOptions:
    """Common CLI options for API commands"""

    @staticmethod
    def project_id():
        return typer.Option(
            None, "--project-id", "-p", help="Project ID (overrides config)"
        )

    @staticmethod
    def api_key():
        return typer.Option(
            None, "--api-key", "-k", help="API key (overrides config)"
        )

    @staticmethod
    def api_url():
        return typer.Option(
            None, "--api-url", "-u", help="API URL (overrides config)"
        )

    @staticmethod
    def release(help_text: str = "Release version (e.g. v1.0.0)"):
        return typer.Option(None, "--release", "-r", help=help_text)
