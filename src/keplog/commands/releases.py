"""
Releases command.

Lists every release that has source maps, with file counts and sizes.
"""

from typing import Optional

from rich.markup import escape

from keplog.api.models import ReleaseList
from keplog.utils.console import console, create_table, header, hint, warning
from keplog.utils.formatting import format_date, format_file_size, plural
from .shared import BaseCommand, CommonOptions


class ReleasesCommand(BaseCommand):
    def run(
        self,
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> ReleaseList:
        config = self.resolve_credentials(project_id, api_key, api_url)

        header("📦 Keplog Releases")
        hint(f"Project ID: {config.project_id}")
        hint(f"API URL: {config.api_url}\n")

        with self.error_boundary():
            with console.status("Fetching releases..."):
                releases = self.create_client(config).list_releases()

        self.render(releases)
        return releases

    def render(self, releases: ReleaseList) -> None:
        console.print("\n📋 Releases with Source Maps", style="bold")
        hint(f"Found {plural(releases.count, 'release')}\n")

        if releases.count == 0 or not releases.releases:
            warning("No releases found.")
            hint(
                '\nUpload source maps using: keplog upload --release=v1.0.0 '
                '--files="dist/**/*.map"\n'
            )
            return

        table = create_table("Releases", ["Release", "Files", "Size", "Last Modified"])
        for release in releases.releases:
            table.add_row(
                f"[cyan]{escape(release.release)}[/cyan]",
                plural(release.file_count, "file"),
                format_file_size(release.total_size),
                format_date(release.last_modified),
            )
        console.print(table)

        hint(
            f"\nTotal: {plural(releases.count, 'release')}, "
            f"{plural(releases.total_files, 'file')} "
            f"({format_file_size(releases.total_size)})\n"
        )


def list_releases(
    project_id: Optional[str] = CommonOptions.project_id(),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
):
    """List all releases with uploaded source maps"""
    ReleasesCommand().run(project_id=project_id, api_key=api_key, api_url=api_url)
