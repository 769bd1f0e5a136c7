"""
Multipart source map upload.

Files are handed to httpx as open binary handles so the request body is
streamed chunk by chunk instead of being assembled in memory.
"""

import os
from contextlib import ExitStack
from typing import BinaryIO, Callable, List, Optional

from tqdm import tqdm

from keplog.api.client import KeplogClient
from keplog.api.models import UploadResult
from keplog.logging import get_logger

SOURCE_MAP_CONTENT_TYPE = "application/json"


class ProgressReader:
    """Binary file wrapper that reports every chunk read"""

    def __init__(self, fileobj: BinaryIO, on_read: Callable[[int], object]):
        self._file = fileobj
        self._on_read = on_read

    def read(self, size: int = -1) -> bytes:
        chunk = self._file.read(size)
        if chunk:
            self._on_read(len(chunk))
        return chunk

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._file.seek(offset, whence)

    def tell(self) -> int:
        return self._file.tell()

    def fileno(self) -> int:
        return self._file.fileno()

    @property
    def name(self) -> str:
        return getattr(self._file, "name", "")

    def close(self) -> None:
        self._file.close()


class SourceMapUploader:
    """Sends a release's source maps in a single request"""

    def __init__(self, client: KeplogClient, show_progress: bool = True):
        self.client = client
        self.show_progress = show_progress
        self.logger = get_logger("keplog.upload.uploader")

    @staticmethod
    def total_size(files: List[str]) -> int:
        return sum(os.path.getsize(path) for path in files)

    def upload(
        self,
        release: str,
        files: List[str],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> UploadResult:
        """
        Upload files for a release.

        Args:
            release: Release identifier sent as the ``release`` form field
            files: Paths to upload, in order
            progress_callback: Optional (bytes_sent, bytes_total) observer

        Returns:
            UploadResult as reported by the server
        """
        total = self.total_size(files)
        sent = 0
        self.logger.info(
            f"Uploading {len(files)} file(s), {total} bytes, for release {release}"
        )

        with ExitStack() as stack:
            bar = stack.enter_context(tqdm(
                total=total,
                desc=f"📦 Uploading {len(files)} file(s)",
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                colour="green",
                leave=False,
                disable=not self.show_progress,
            ))

            def on_read(size: int) -> None:
                nonlocal sent
                sent += size
                bar.update(size)
                if progress_callback:
                    progress_callback(sent, total)

            parts = []
            for path in files:
                handle = stack.enter_context(open(path, "rb"))
                parts.append((
                    os.path.basename(path),
                    ProgressReader(handle, on_read),
                    SOURCE_MAP_CONTENT_TYPE,
                ))

            result = self.client.upload_source_maps(release, parts)

        self.logger.info(
            f"Upload finished: {len(result.uploaded)} uploaded, {len(result.errors)} error(s)"
        )
        return result
