"""
Base command class providing common functionality.

Resolves credentials from the command line and the configuration chain,
builds the API client, and turns failures into exit code 1.
"""

import sys
from contextlib import contextmanager
from typing import Optional

import typer
from rich.markup import escape

from keplog.api.client import KeplogClient
from keplog.constants import (
    DEFAULT_API_URL,
    ENV_API_KEY,
    ENV_DEBUG,
    ENV_PROJECT_ID,
    ENV_RELEASE,
)
from keplog.exceptions import KeplogError
from keplog.logging import get_logger
from keplog.utils.config_store import ConfigStore, KeplogConfig
from keplog.utils.console import console, error, hint


class BaseCommand:
    """Base class for commands that call the Keplog API"""

    def __init__(self, config_store: Optional[ConfigStore] = None):
        self.config_store = config_store or ConfigStore()
        self.logger = get_logger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def resolve_credentials(
        self,
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        require_project: bool = True,
    ) -> KeplogConfig:
        """
        Merge command-line overrides onto the effective configuration.

        Exits with code 1 when the project ID (if required) or the API key
        cannot be resolved, before any network call is made.
        """
        # Unreadable config files exit 1 like any other failure
        with self.error_boundary():
            config = self.config_store.get_config()
        resolved = KeplogConfig(
            project_id=project_id or config.project_id,
            api_key=api_key or config.api_key,
            api_url=api_url or config.api_url or DEFAULT_API_URL,
            project_name=config.project_name,
        )

        if require_project and not resolved.project_id:
            self.missing_credential("Project ID", "--project-id=<your-project-id>", ENV_PROJECT_ID)
        if not resolved.api_key:
            self.missing_credential("API key", "--api-key=<your-api-key>", ENV_API_KEY)

        self.logger.debug(
            f"Resolved credentials for project {resolved.project_id} at {resolved.api_url}"
        )
        return resolved

    def missing_credential(self, label: str, flag: str, env_var: str) -> None:
        self.logger.error(f"{label} is required but was not configured")
        error(f"Error: {label} is required")
        hint("\nOptions:")
        hint("  1. Run: keplog init (recommended)")
        hint(f"  2. Use flag: {flag}")
        placeholder = flag.split("=", 1)[1]
        hint(f"  3. Set env: {env_var}={placeholder}")
        raise typer.Exit(1)

    def resolve_release(self, release: Optional[str]) -> str:
        """Release from the flag, else KEPLOG_RELEASE"""
        resolved = release or self.config_store.environment.get(ENV_RELEASE)
        if not resolved:
            error("Error: Release version is required")
            hint("\nOptions:")
            hint("  1. Use flag: --release=v1.0.0")
            hint(f"  2. Set env: {ENV_RELEASE}=v1.0.0")
            raise typer.Exit(1)
        return resolved

    def create_client(self, config: KeplogConfig) -> KeplogClient:
        return KeplogClient(
            api_url=config.api_url,
            api_key=config.api_key,
            project_id=config.project_id,
        )

    def fail(self, message: str) -> None:
        """Report a fatal error and exit with code 1"""
        self.logger.error(message)
        error(f"Error: {escape(message)}")
        debug = self.config_store.environment.get(ENV_DEBUG)
        if debug and sys.exc_info()[0] is not None:
            console.print_exception()
        raise typer.Exit(1)

    @contextmanager
    def error_boundary(self):
        """Convert any failure escaping the block into exit code 1"""
        try:
            yield
        except (typer.Exit, typer.Abort):
            raise
        except KeplogError as e:
            self.fail(str(e))
        except Exception as e:
            self.logger.exception(f"Unexpected error: {e}")
            self.fail(str(e))
