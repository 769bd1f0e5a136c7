"""
Source map upload pipeline: discovery, filtering and multipart upload.
"""

from .discovery import (
    NoFilesFound,
    SourceMapSet,
    collect_source_maps,
    discover_files,
)
from .uploader import ProgressReader, SourceMapUploader

__all__ = [
    "NoFilesFound",
    "SourceMapSet",
    "collect_source_maps",
    "discover_files",
    "ProgressReader",
    "SourceMapUploader",
]
