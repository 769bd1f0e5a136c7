"""
Typed views of the Keplog REST API responses.

Each model is built with ``from_dict`` from the decoded JSON body. Missing
fields fall back to empty values so partially populated responses still
render.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


@dataclass
class UploadResult:
    """Server verdict on a source map upload"""

    uploaded: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    release: str = ""
    count: int = 0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any], release: str = "") -> "UploadResult":
        uploaded = [str(name) for name in _list(data.get("uploaded"))]
        return cls(
            uploaded=uploaded,
            errors=[str(err) for err in _list(data.get("errors"))],
            release=data.get("release") or release,
            count=_int(data.get("count", len(uploaded))),
        )


@dataclass
class SourceMap:
    filename: str
    size: int = 0
    uploaded_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceMap":
        return cls(
            filename=data.get("Filename", ""),
            size=_int(data.get("Size")),
            uploaded_at=data.get("UploadedAt"),
        )


@dataclass
class SourceMapList:
    release: str
    source_maps: List[SourceMap] = field(default_factory=list)
    count: int = 0

    @property
    def total_size(self) -> int:
        return sum(source_map.size for source_map in self.source_maps)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], release: str = "") -> "SourceMapList":
        source_maps = [SourceMap.from_dict(item) for item in _list(data.get("source_maps"))]
        return cls(
            release=data.get("release") or release,
            source_maps=source_maps,
            count=_int(data.get("count", len(source_maps))),
        )


@dataclass
class ReleaseInfo:
    release: str
    file_count: int = 0
    total_size: int = 0
    last_modified: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseInfo":
        return cls(
            release=data.get("Release", ""),
            file_count=_int(data.get("FileCount")),
            total_size=_int(data.get("TotalSize")),
            last_modified=data.get("LastModified"),
        )


@dataclass
class ReleaseList:
    releases: List[ReleaseInfo] = field(default_factory=list)
    count: int = 0

    @property
    def total_files(self) -> int:
        return sum(release.file_count for release in self.releases)

    @property
    def total_size(self) -> int:
        return sum(release.total_size for release in self.releases)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseList":
        releases = [ReleaseInfo.from_dict(item) for item in _list(data.get("releases"))]
        return cls(releases=releases, count=_int(data.get("count", len(releases))))


@dataclass
class Issue:
    id: str
    title: str = ""
    status: str = ""
    level: str = ""
    first_seen: Optional[str] = None
    last_seen: Optional[str] = None
    occurrences: int = 0
    project_id: Optional[str] = None
    assigned_user_name: Optional[str] = None
    assigned_team_name: Optional[str] = None
    snoozed_until: Optional[str] = None

    @classmethod
    def _fields_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(data.get("id", "")),
            "title": data.get("title") or "",
            "status": data.get("status") or "",
            "level": data.get("level") or "",
            "first_seen": data.get("first_seen"),
            "last_seen": data.get("last_seen"),
            "occurrences": _int(data.get("occurrences")),
            "project_id": data.get("project_id"),
            "assigned_user_name": data.get("assigned_user_name"),
            "assigned_team_name": data.get("assigned_team_name"),
            "snoozed_until": data.get("snoozed_until"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Issue":
        return cls(**cls._fields_from_dict(data))


@dataclass
class StackFrame:
    """Framework-reported frame (e.g. PHP/Laravel context frames)"""

    file: Optional[str] = None
    line: Optional[int] = None
    function: Optional[str] = None
    class_name: Optional[str] = None
    type: Optional[str] = None
    code_snippet: Dict[str, str] = field(default_factory=dict)

    @property
    def qualified_function(self) -> str:
        if self.class_name:
            return f"{self.class_name}{self.type or '::'}{self.function}"
        return self.function or "anonymous"

    def sorted_snippet(self) -> List[tuple]:
        """Code snippet lines as (line_number, code), numerically ordered"""
        lines = []
        for number, code in self.code_snippet.items():
            try:
                lines.append((int(number), code))
            except (TypeError, ValueError):
                continue
        return sorted(lines)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StackFrame":
        snippet = data.get("code_snippet")
        return cls(
            file=data.get("file"),
            line=data.get("line"),
            function=data.get("function"),
            class_name=data.get("class"),
            type=data.get("type"),
            code_snippet=snippet if isinstance(snippet, dict) else {},
        )


@dataclass
class MappedFrame:
    """Frame after the server applied source maps"""

    filename: Optional[str] = None
    line_number: Optional[int] = None
    column_number: Optional[int] = None
    function: Optional[str] = None
    source_filename: Optional[str] = None
    source_line_number: Optional[int] = None
    source_column: Optional[int] = None
    source_function: Optional[str] = None
    source_code: Optional[str] = None
    pre_context: List[str] = field(default_factory=list)
    post_context: List[str] = field(default_factory=list)
    mapped: bool = False

    @property
    def is_mapped(self) -> bool:
        return bool(self.mapped and self.source_filename)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappedFrame":
        return cls(
            filename=data.get("filename"),
            line_number=data.get("line_number"),
            column_number=data.get("column_number"),
            function=data.get("function"),
            source_filename=data.get("source_filename"),
            source_line_number=data.get("source_line_number"),
            source_column=data.get("source_column"),
            source_function=data.get("source_function"),
            source_code=data.get("source_code"),
            pre_context=_list(data.get("pre_context")),
            post_context=_list(data.get("post_context")),
            mapped=bool(data.get("mapped")),
        )


@dataclass
class MappedStackTrace:
    frames: List[MappedFrame] = field(default_factory=list)
    release: Optional[str] = None
    applied_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappedStackTrace":
        return cls(
            frames=[MappedFrame.from_dict(f) for f in _list(data.get("frames"))],
            release=data.get("release"),
            applied_at=data.get("applied_at"),
        )


@dataclass
class IssueDetails(Issue):
    fingerprint: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    stack_trace: Optional[str] = None
    mapped_stack_trace: Optional[MappedStackTrace] = None

    @property
    def context_frames(self) -> List[StackFrame]:
        return [StackFrame.from_dict(f) for f in _list(self.context.get("frames"))]

    @property
    def has_mapped_trace(self) -> bool:
        return bool(self.mapped_stack_trace and self.mapped_stack_trace.frames)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueDetails":
        context = data.get("context")
        mapped = data.get("mapped_stack_trace")
        return cls(
            **cls._fields_from_dict(data),
            fingerprint=data.get("fingerprint"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            context=context if isinstance(context, dict) else {},
            stack_trace=data.get("stack_trace"),
            mapped_stack_trace=MappedStackTrace.from_dict(mapped) if isinstance(mapped, dict) else None,
        )


@dataclass
class IssueEvent:
    id: str
    message: str = ""
    level: str = ""
    environment: Optional[str] = None
    release: Optional[str] = None
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IssueEvent":
        return cls(
            id=str(data.get("id", "")),
            message=data.get("message") or data.get("title") or "",
            level=data.get("level") or "",
            environment=data.get("environment"),
            release=data.get("release"),
            timestamp=data.get("timestamp") or data.get("created_at"),
        )
