"""
Issue commands.

List a project's issues, show one issue with its stack trace, and list the
events recorded for an issue.
"""

from typing import List, Optional

import typer
from rich.markup import escape
from rich.text import Text

from keplog.api.models import IssueDetails, Issue, IssueEvent, MappedFrame, StackFrame
from keplog.constants import DEFAULT_EVENT_LIMIT, DEFAULT_ISSUE_LIMIT, DEFAULT_ISSUE_STATUS
from keplog.utils.console import console, create_table, header, hint, info, warning
from keplog.utils.formatting import format_datetime, format_relative, plural, truncate
from .shared import BaseCommand, CommonOptions

app = typer.Typer(help="Manage and view issues")

STATUS_STYLES = {
    "open": "red",
    "in_progress": "yellow",
    "resolved": "green",
    "ignored": "bright_black",
}

LEVEL_STYLES = {
    "critical": "bold red",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
}


def styled_status(status: str) -> Text:
    return Text(status or "-", style=STATUS_STYLES.get(status, "white"))


def styled_level(level: str) -> Text:
    return Text(level or "-", style=LEVEL_STYLES.get(level, "white"))


class IssuesCommand(BaseCommand):
    def list_issues(
        self,
        status: str = DEFAULT_ISSUE_STATUS,
        limit: int = DEFAULT_ISSUE_LIMIT,
        offset: int = 0,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        project_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> List[Issue]:
        config = self.resolve_credentials(project_id, api_key, api_url)

        header("🐛 Keplog Issues - List")
        hint(f"Project ID: {config.project_id}")
        info(f"Status: {status}")
        hint(f"Limit: {limit}\n")

        with self.error_boundary():
            with console.status("Fetching issues..."):
                issues = self.create_client(config).list_issues(
                    status=status,
                    limit=limit,
                    offset=offset,
                    date_from=date_from,
                    date_to=date_to,
                )

        self.render_list(issues, offset)
        return issues

    def render_list(self, issues: List[Issue], offset: int) -> None:
        if not issues:
            warning("\nNo issues found.\n")
            return

        console.print(f"\n📋 Found {plural(len(issues), 'issue')}\n", style="bold")

        table = create_table("Issues", ["ID", "Title", "Status", "Level", "Count", "Last Seen"])
        for issue in issues:
            table.add_row(
                issue.id[:8],
                escape(truncate(issue.title, 48)),
                styled_status(issue.status),
                styled_level(issue.level),
                str(issue.occurrences),
                format_relative(issue.last_seen),
            )
        console.print(table)

        hint(f"\nShowing {plural(len(issues), 'issue')} (offset: {offset})\n")
        hint("View details: keplog issues show <issue-id>\n")

    def show_issue(
        self,
        issue_id: str,
        show_minified: bool = False,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> IssueDetails:
        config = self.resolve_credentials(api_key=api_key, api_url=api_url, require_project=False)

        header("🐛 Keplog Issue Details")

        with self.error_boundary():
            with console.status("Fetching issue details..."):
                issue = self.create_client(config).get_issue(issue_id)

        self.render_issue(issue, show_minified)
        return issue

    def render_issue(self, issue: IssueDetails, show_minified: bool = False) -> None:
        console.print(f"\n📌 {escape(issue.title)}\n", style="bold")

        rows = [
            ("ID:", Text(issue.id)),
            ("Status:", styled_status(issue.status)),
            ("Level:", styled_level(issue.level)),
            ("Occurrences:", Text(str(issue.occurrences), style="cyan")),
            ("First Seen:", Text(format_datetime(issue.first_seen))),
            ("Last Seen:", Text(format_datetime(issue.last_seen))),
        ]
        if issue.assigned_user_name:
            rows.append(("Assigned To:", Text(issue.assigned_user_name)))
        elif issue.assigned_team_name:
            rows.append(("Assigned To:", Text(f"{issue.assigned_team_name} (team)")))
        if issue.snoozed_until:
            rows.append(("Snoozed:", Text(f"Until {format_datetime(issue.snoozed_until)}", style="yellow")))

        for label, value in rows:
            console.print(Text(f"{label:<14}", style="bright_black"), value, sep="")

        show_original = issue.has_mapped_trace and not show_minified
        context_frames = issue.context_frames

        if show_original:
            self.render_mapped_trace(issue)
        elif context_frames:
            self.render_context_frames(context_frames)
        elif issue.stack_trace:
            console.print("\n📚 Stack Trace:\n", style="bold")
            console.print(issue.stack_trace, style="bright_black", markup=False)

        if issue.has_mapped_trace and not show_original:
            hint("\n💡 Tip: Remove --show-minified to see original source code\n")

        console.print()

    def render_mapped_trace(self, issue: IssueDetails) -> None:
        trace = issue.mapped_stack_trace
        console.print("\n✓ Source Maps Applied", style="bold green")
        if trace.release:
            hint(f"Release: {trace.release}")
        console.print("\n📚 Stack Trace (Original Source):\n", style="bold")

        for frame in trace.frames:
            if frame.is_mapped:
                self.render_mapped_frame(frame)
            else:
                console.print("  ○", style="yellow")
                console.print(f"    {frame.function or 'anonymous'}", markup=False)
                console.print(
                    f"    {frame.filename or 'unknown'}:{frame.line_number or 0}",
                    style="bright_black",
                    markup=False,
                )
            console.print()

    def render_mapped_frame(self, frame: MappedFrame) -> None:
        line_number = frame.source_line_number or 0
        console.print("  ✓ [MAPPED]", style="green", markup=False)
        console.print(f"    {frame.source_function or 'anonymous'}", markup=False)
        console.print(
            f"    {frame.source_filename}:{line_number}:{frame.source_column or 0}",
            style="bright_black",
            markup=False,
        )

        if not frame.source_code:
            return

        console.print("\n    Source Code:", style="dim")
        start = line_number - len(frame.pre_context)
        for offset, line in enumerate(frame.pre_context):
            console.print(f"    {start + offset:>4} │ {line}", style="bright_black", markup=False)
        console.print(f"  → {line_number:>4} │ {frame.source_code}", style="red", markup=False)
        for offset, line in enumerate(frame.post_context, start=1):
            console.print(f"    {line_number + offset:>4} │ {line}", style="bright_black", markup=False)
        console.print()

    def render_context_frames(self, frames: List[StackFrame]) -> None:
        console.print("\n📚 Stack Trace:\n", style="bold")

        for frame in frames:
            console.print(f"  {frame.qualified_function}", markup=False)
            console.print(
                f"  {frame.file or 'unknown'}:{frame.line or '?'}",
                style="bright_black",
                markup=False,
            )

            snippet = frame.sorted_snippet()
            if snippet:
                console.print("\n  Code:", style="dim")
                for number, code in snippet:
                    if number == frame.line:
                        console.print(f"→ {number:>4} │ {code}", style="red", markup=False)
                    else:
                        console.print(f"  {number:>4} │ {code}", style="bright_black", markup=False)
                console.print()
            console.print()

    def list_events(
        self,
        issue_id: str,
        limit: int = DEFAULT_EVENT_LIMIT,
        offset: int = 0,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> List[IssueEvent]:
        config = self.resolve_credentials(api_key=api_key, api_url=api_url, require_project=False)

        header("🐛 Keplog Issue Events")
        hint(f"Issue ID: {issue_id}\n")

        with self.error_boundary():
            with console.status("Fetching events..."):
                events = self.create_client(config).get_issue_events(
                    issue_id, limit=limit, offset=offset
                )

        if not events:
            warning("No events found for this issue.\n")
            return events

        table = create_table(
            f"Events for {issue_id}", ["ID", "Time", "Level", "Environment", "Release", "Message"]
        )
        for event in events:
            table.add_row(
                event.id[:8],
                format_datetime(event.timestamp),
                styled_level(event.level),
                escape(event.environment or "-"),
                escape(event.release or "-"),
                escape(truncate(event.message, 60)),
            )
        console.print(table)
        hint(f"\nShowing {plural(len(events), 'event')} (offset: {offset})\n")
        return events


@app.command("list")
def list_issues(
    project_id: Optional[str] = CommonOptions.project_id(),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
    status: str = typer.Option(
        DEFAULT_ISSUE_STATUS,
        "--status",
        "-s",
        help="Filter by status (open, in_progress, resolved, ignored)",
    ),
    limit: int = typer.Option(DEFAULT_ISSUE_LIMIT, "--limit", "-l", help="Number of issues to fetch"),
    offset: int = typer.Option(0, "--offset", help="Offset for pagination"),
    date_from: Optional[str] = typer.Option(None, "--from", help="Filter from date (YYYY-MM-DD)"),
    date_to: Optional[str] = typer.Option(None, "--to", help="Filter to date (YYYY-MM-DD)"),
):
    """List issues for a project"""
    IssuesCommand().list_issues(
        status=status,
        limit=limit,
        offset=offset,
        date_from=date_from,
        date_to=date_to,
        project_id=project_id,
        api_key=api_key,
        api_url=api_url,
    )


@app.command("show")
def show_issue(
    issue_id: str = typer.Argument(..., help="Issue ID to display"),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
    show_minified: bool = typer.Option(
        False, "--show-minified", help="Show minified stack trace (if source maps available)"
    ),
):
    """Show detailed information about an issue"""
    IssuesCommand().show_issue(
        issue_id, show_minified=show_minified, api_key=api_key, api_url=api_url
    )


@app.command("events")
def list_events(
    issue_id: str = typer.Argument(..., help="Issue ID whose events to list"),
    api_key: Optional[str] = CommonOptions.api_key(),
    api_url: Optional[str] = CommonOptions.api_url(),
    limit: int = typer.Option(DEFAULT_EVENT_LIMIT, "--limit", "-l", help="Number of events to fetch"),
    offset: int = typer.Option(0, "--offset", help="Offset for pagination"),
):
    """List events recorded for an issue"""
    IssuesCommand().list_events(
        issue_id, limit=limit, offset=offset, api_key=api_key, api_url=api_url
    )
