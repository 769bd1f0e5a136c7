"""
List command.

Shows the source maps uploaded for one release.
"""

from typing import Optional

from rich.markup import escape

from keplog.api.models import SourceMapList
from keplog.utils.console import console, create_table, header, hint, info, warning
from keplog.utils.formatting import format_datetime, format_file_size, plural
from .shared import BaseCommand, CommonOptions


class ListCommand(BaseCommand):
    def run(
        self,
        release: Optional[str],
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> SourceMapList:
        config = self.resolve_credentials(project_id, api_key, api_url)
        release = self.resolve_release(release)

        header("📁 Keplog Source Maps - List")
        info(f"Release: {release}")
        hint(f"Project ID: {config.project_id}")
        hint(f"API URL: {config.api_url}\n")

        with self.error_boundary():
            with console.status("Fetching source maps..."):
                listing = self.create_client(config).list_source_maps(release)

        self.render(listing)
        return listing

    def render(self, listing: SourceMapList) -> None:
        console.print(f"\n📦 Source Maps for {listing.release}", style="bold")
        hint(f"Found {plural(listing.count, 'file')}\n")

        if listing.count == 0 or not listing.source_maps:
            warning("No source maps found for this release.")
            hint(f"\nUpload source maps using: keplog upload --release={listing.release}\n")
            return

        table = create_table(
            f"Release {listing.release}", ["", "File", "Size", "Uploaded"]
        )
        for source_map in listing.source_maps:
            table.add_row(
                "[green]✓[/green]",
                escape(source_map.filename),
                format_file_size(source_map.size),
                format_datetime(source_map.uploaded_at),
            )
        console.print(table)

        hint(
            f"\nTotal: {plural(listing.count, 'file')} "
            f"({format_file_size(listing.total_size)})\n"
        )


def list_source_maps(
    release: Optional[str] = CommonOptions.release(
        "Release version to list source maps for"
    ),
    project_id: Optional[str] = CommonOptions.project_id(),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
):
    """List uploaded source maps for a specific release"""
    ListCommand().run(
        release=release, project_id=project_id, api_key=api_key, api_url=api_url
    )
