"""
Deletion manager for source map removal.

Deletes files one request at a time and keeps going past individual
failures, collecting what succeeded and what did not.
"""

from dataclasses import dataclass, field
from typing import Callable, List

import typer
from rich.markup import escape

from keplog.utils.console import console, error, hint, info, success, warning
from keplog.utils.formatting import plural


@dataclass
class FailedDeletion:
    file: str
    message: str


@dataclass
class DeletionSummary:
    """Outcome of a delete batch"""

    deleted: List[str] = field(default_factory=list)
    failed: List[FailedDeletion] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0


class DeletionManager:
    """Manages confirmation and execution of source map deletions"""

    def confirm_deletions(
        self,
        files: List[str],
        release: str,
        single_file: bool = False,
        force: bool = False,
    ) -> bool:
        """
        Ask the user to confirm the deletion.

        Args:
            files: Filenames that will be deleted
            release: Release the files belong to
            single_file: Whether the user named one file explicitly
            force: Skip confirmation if True

        Returns:
            True if user confirms or force=True, False otherwise
        """
        if force:
            info("--yes given, skipping confirmation")
            return True

        if single_file:
            message = f"Are you sure you want to delete {files[0]} from release {release}?"
        else:
            message = (
                f"Are you sure you want to delete ALL {len(files)} source maps "
                f"from release {release}?"
            )

        return typer.confirm(message, default=False)

    def execute_deletions(
        self,
        files: List[str],
        delete_func: Callable[[str], None],
    ) -> DeletionSummary:
        """
        Delete each file in order, never stopping at the first failure.

        Args:
            files: Filenames to delete
            delete_func: Deletes one file, raising on failure

        Returns:
            DeletionSummary with deleted files and failures
        """
        summary = DeletionSummary()

        for filename in files:
            try:
                with console.status(f"Deleting {escape(filename)}..."):
                    delete_func(filename)
            except Exception as e:
                summary.failed.append(FailedDeletion(file=filename, message=str(e)))
                error(f"Failed to delete {escape(filename)}")
                continue

            summary.deleted.append(filename)
            success(f"Deleted {escape(filename)}")

        return summary

    def print_summary(self, summary: DeletionSummary, release: str) -> None:
        console.print("\nDeletion Complete!\n", style="bold")
        info(f"Release: {release}")
        info(f"Deleted: {plural(summary.deleted_count, 'file')}")

        if summary.has_failures:
            error(f"Failed: {plural(summary.failed_count, 'file')}\n")
            warning("Errors:")
            for failed in summary.failed:
                hint(f"   ✗ {escape(failed.file)}: {escape(failed.message)}")

        console.print()
