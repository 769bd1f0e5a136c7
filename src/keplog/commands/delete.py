"""
Delete command.

Removes one source map, or every source map of a release, one request per
file. Failures on individual files do not stop the batch.
"""

from typing import List, Optional

import typer

from keplog.logging import log_application_event
from keplog.utils.console import console, header, hint, info, warning
from keplog.utils.deletion_manager import DeletionManager, DeletionSummary
from keplog.utils.formatting import plural
from .shared import BaseCommand, CommonOptions


class DeleteCommand(BaseCommand):
    def __init__(self, config_store=None, deletion_manager: Optional[DeletionManager] = None):
        super().__init__(config_store)
        self.deletion_manager = deletion_manager or DeletionManager()

    def run(
        self,
        release: Optional[str],
        filename: Optional[str] = None,
        yes: bool = False,
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> Optional[DeletionSummary]:
        config = self.resolve_credentials(project_id, api_key, api_url)
        release = self.resolve_release(release)
        client = self.create_client(config)

        header("🗑️  Keplog Source Maps - Delete")
        info(f"Release: {release}")
        hint(f"Project ID: {config.project_id}")
        if filename:
            info(f"File: {filename}\n")
        else:
            warning("Target: All source maps for this release\n")

        with self.error_boundary():
            files = [filename] if filename else self.files_in_release(client, release)

        if not files:
            warning("No source maps found for this release.\n")
            return None

        if not self.deletion_manager.confirm_deletions(
            files, release, single_file=bool(filename), force=yes
        ):
            hint("\nDeletion cancelled.\n")
            return None

        hint("\nDeleting source maps...\n")
        summary = self.deletion_manager.execute_deletions(
            files, lambda name: client.delete_source_map(release, name)
        )
        self.deletion_manager.print_summary(summary, release)

        log_application_event(
            "Source maps deleted",
            details={
                "release": release,
                "deleted": summary.deleted_count,
                "failed": summary.failed_count,
            },
        )
        if summary.has_failures:
            raise typer.Exit(1)
        return summary

    def files_in_release(self, client, release: str) -> List[str]:
        """Fetch and show the files that a release-wide delete will remove"""
        with console.status("Fetching source maps..."):
            listing = client.list_source_maps(release)

        info(f"Found {plural(listing.count, 'source map')}")
        filenames = [source_map.filename for source_map in listing.source_maps]
        if filenames:
            hint("\nFiles to be deleted:")
            for name in filenames:
                console.print(f"  ✗ {name}", style="red", markup=False)
            console.print()
        return filenames


def delete(
    release: Optional[str] = CommonOptions.release(),
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Specific file to delete (omit to delete all files of the release)",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
    project_id: Optional[str] = CommonOptions.project_id(),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
):
    """Delete source maps for a specific release"""
    DeleteCommand().run(
        release=release,
        filename=file,
        yes=yes,
        project_id=project_id,
        api_key=api_key,
        api_url=api_url,
    )
