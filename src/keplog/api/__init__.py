"""
Client and response models for the Keplog CLI API.
"""

from .client import KeplogClient
from .models import (
    Issue,
    IssueDetails,
    IssueEvent,
    ReleaseInfo,
    ReleaseList,
    SourceMap,
    SourceMapList,
    UploadResult,
)

__all__ = [
    "KeplogClient",
    "Issue",
    "IssueDetails",
    "IssueEvent",
    "ReleaseInfo",
    "ReleaseList",
    "SourceMap",
    "SourceMapList",
    "UploadResult",
]
