"""
Source map discovery.

Expands the user's glob patterns into a deduplicated list of absolute file
paths and keeps only source maps. Patterns follow shell glob rules with
``**`` for recursive matches and ``{a,b}`` alternation.
"""

import glob
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from keplog.constants import SOURCE_MAP_SUFFIX
from keplog.exceptions import InvalidPatternError
from keplog.logging import get_logger

logger = get_logger("keplog.upload.discovery")


@dataclass
class SourceMapSet:
    """Files that survived discovery and the extension filter"""

    files: List[str]
    matched: int
    skipped: int = 0


@dataclass
class NoFilesFound:
    """Discovery ended without anything to upload"""

    patterns: List[str]
    matched: int = 0
    non_map_files: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        if self.matched == 0:
            return "No files matched the specified patterns"
        return "No .map files found"


def _check_brackets(pattern: str) -> None:
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            # A leading ']' is a literal member of the class
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise InvalidPatternError(pattern, "unterminated character class")
            i = close
        i += 1


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` alternations into plain glob patterns.

    Raises:
        InvalidPatternError: on unbalanced braces
    """
    depth = 0
    start = None
    for i, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = i
            depth += 1
        elif char == "}":
            if depth == 0:
                raise InvalidPatternError(pattern, "unbalanced '}'")
            depth -= 1
            if depth == 0:
                body = pattern[start + 1:i]
                prefix, suffix = pattern[:start], pattern[i + 1:]
                options = _split_alternatives(body)
                if len(options) == 1:
                    # {x} has nothing to alternate; keep the braces literal
                    return [prefix + "{" + alt + "}" + rest
                            for alt in options
                            for rest in expand_braces(suffix)]
                expanded = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
    if depth != 0:
        raise InvalidPatternError(pattern, "unbalanced '{'")
    return [pattern]


def _split_alternatives(body: str) -> List[str]:
    parts, depth, current = [], 0, []
    for char in body:
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current.append(char)
    parts.append("".join(current))
    return parts


def validate_pattern(pattern: str) -> List[str]:
    """Check pattern syntax and return its brace expansions"""
    if not pattern or not pattern.strip():
        raise InvalidPatternError(pattern, "empty pattern")
    expansions = expand_braces(pattern)
    for expansion in expansions:
        _check_brackets(expansion)
    return expansions


def expand_pattern(pattern: str, root: Optional[Union[str, os.PathLike]] = None) -> List[str]:
    """
    Expand one pattern into absolute paths of regular files.

    Args:
        pattern: Glob pattern, relative to root unless absolute
        root: Base directory for relative patterns, defaults to the cwd

    Returns:
        Matching file paths in glob order, directories excluded
    """
    base = os.path.abspath(root or os.getcwd())
    matches = []
    for expansion in validate_pattern(pattern):
        expansion = os.path.expanduser(expansion)
        if not os.path.isabs(expansion):
            expansion = os.path.join(glob.escape(base), expansion)
        for match in sorted(glob.glob(expansion, recursive=True)):
            if os.path.isfile(match):
                matches.append(os.path.normpath(os.path.abspath(match)))
    return matches


def discover_files(
    patterns: Iterable[str],
    root: Optional[Union[str, os.PathLike]] = None,
    on_pattern: Optional[Callable[[str, int], None]] = None,
) -> List[str]:
    """
    Expand every pattern and union the results.

    All patterns are validated before any is expanded, so one bad pattern
    fails the whole batch.

    Args:
        patterns: Glob patterns in the order given by the user
        root: Base directory for relative patterns
        on_pattern: Called with (pattern, match count) after each expansion

    Returns:
        Unique file paths in first-seen order

    Raises:
        InvalidPatternError: if any pattern is malformed
    """
    patterns = list(patterns)
    for pattern in patterns:
        validate_pattern(pattern)

    unique = {}
    for pattern in patterns:
        matches = expand_pattern(pattern, root)
        logger.debug(f"Pattern {pattern!r} matched {len(matches)} file(s)")
        if on_pattern:
            on_pattern(pattern, len(matches))
        for path in matches:
            unique.setdefault(path, None)

    return list(unique)


def collect_source_maps(
    patterns: Iterable[str],
    root: Optional[Union[str, os.PathLike]] = None,
    on_pattern: Optional[Callable[[str, int], None]] = None,
) -> Union[SourceMapSet, NoFilesFound]:
    """
    Discover files and keep only those ending in ``.map``.

    Returns:
        SourceMapSet with the files to upload, or NoFilesFound when either
        nothing matched or nothing left after the extension filter
    """
    patterns = list(patterns)
    files = discover_files(patterns, root, on_pattern)

    if not files:
        return NoFilesFound(patterns=patterns)

    map_files = [path for path in files if path.endswith(SOURCE_MAP_SUFFIX)]
    skipped = [path for path in files if not path.endswith(SOURCE_MAP_SUFFIX)]

    if not map_files:
        return NoFilesFound(patterns=patterns, matched=len(files), non_map_files=skipped)

    if skipped:
        logger.info(f"Skipped {len(skipped)} non-{SOURCE_MAP_SUFFIX} file(s)")

    return SourceMapSet(files=map_files, matched=len(files), skipped=len(skipped))
