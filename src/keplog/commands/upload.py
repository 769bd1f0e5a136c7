"""
Upload command.

Discovers source maps from glob patterns and uploads them for a release.
"""

import os
from typing import List, Optional

import typer
from rich.markup import escape

from keplog.api.models import UploadResult
from keplog.constants import ENV_RELEASE
from keplog.logging import log_application_event
from keplog.upload import NoFilesFound, SourceMapUploader, collect_source_maps
from keplog.utils.console import console, error, header, hint, info, success, warning
from keplog.utils.formatting import format_file_size, plural
from .shared import BaseCommand, CommonOptions

UPLOAD_EXAMPLE = '  keplog upload --release=v1.0.0 --files="dist/**/*.map"'


class UploadCommand(BaseCommand):
    """Runs the discovery + upload pipeline and reports the outcome"""

    def run(
        self,
        release: Optional[str],
        patterns: Optional[List[str]],
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> UploadResult:
        release = release or self.config_store.environment.get(ENV_RELEASE)
        if not release:
            error("Error: --release is required")
            hint("\nExample:")
            hint(UPLOAD_EXAMPLE)
            raise typer.Exit(1)

        if not patterns:
            error("Error: --files is required")
            hint("\nExample:")
            hint(UPLOAD_EXAMPLE)
            raise typer.Exit(1)

        config = self.resolve_credentials(project_id, api_key, api_url)

        header("📦 Keplog Source Map Uploader")
        hint(f"Release: {release}")
        hint(f"Project ID: {config.project_id}")
        hint(f"API URL: {config.api_url}\n")

        with self.error_boundary():
            on_pattern = None
            if verbose:
                def on_pattern(pattern: str, count: int) -> None:
                    info(f'Pattern "{pattern}" matched {plural(count, "file")}')

            with console.status("Finding source map files..."):
                outcome = collect_source_maps(
                    patterns,
                    root=self.config_store.environment.cwd,
                    on_pattern=on_pattern,
                )

            if isinstance(outcome, NoFilesFound):
                self.report_no_files(outcome)
                raise typer.Exit(1)

            success(f"Found {plural(outcome.matched, 'file')}")
            if outcome.skipped:
                warning(f"Skipped {outcome.skipped} non-.map file(s)")

            if verbose:
                info("\n📁 Files to upload:")
                for index, path in enumerate(outcome.files, start=1):
                    size = format_file_size(os.path.getsize(path))
                    hint(f"  {index}. {path} ({size})")
                console.print()

            uploader = SourceMapUploader(
                self.create_client(config), show_progress=show_progress
            )
            result = uploader.upload(release, outcome.files)

        self.report_result(result)
        log_application_event(
            "Source maps uploaded",
            level="warning" if result.has_errors else "info",
            details={
                "release": release,
                "uploaded": result.count,
                "errors": len(result.errors),
            },
        )
        if result.has_errors:
            raise typer.Exit(1)
        return result

    def report_no_files(self, outcome: NoFilesFound) -> None:
        self.logger.warning(f"{outcome.reason}: {outcome.patterns}")
        error("No source map files found")
        warning(outcome.reason)
        if outcome.non_map_files:
            hint(f"Matched {plural(outcome.matched, 'file')}, none ending in .map")
        hint("\nTip: Make sure your patterns are correct:")
        hint('  --files="dist/**/*.map"')
        hint('  --files="build/*.map"')

    def report_result(self, result: UploadResult) -> None:
        console.print()
        if result.uploaded:
            success("Upload complete!")
        hint(f"Release: {result.release}")
        hint(f"Uploaded: {plural(result.count, 'file')}\n")

        if result.uploaded:
            info("📁 Successfully uploaded:")
            for filename in result.uploaded:
                console.print(f"   ✓ {escape(filename)}", style="green")

        if result.has_errors:
            warning("\nErrors:")
            for message in result.errors:
                console.print(f"   ✗ {escape(message)}", style="red")
            return

        info(
            f"\n💡 Source maps will be used automatically when processing "
            f"errors for release {result.release}\n"
        )


def upload(
    release: Optional[str] = CommonOptions.release(),
    files: Optional[List[str]] = typer.Option(
        None,
        "--files",
        "-f",
        help="Source map file pattern, supports glob (repeat for several)",
    ),
    project_id: Optional[str] = CommonOptions.project_id(),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    no_progress: bool = typer.Option(
        False, "--no-progress", help="Hide the upload progress bar"
    ),
):
    """Upload source maps for a specific release"""
    UploadCommand().run(
        release=release,
        patterns=files,
        project_id=project_id,
        api_key=api_key,
        api_url=api_url,
        verbose=verbose,
        show_progress=not no_progress,
    )
