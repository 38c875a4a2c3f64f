"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparer.py
The identity-equal predicate: two files are identical when their names match
case-insensitively and their contents match byte for byte.
"""

import logging
from typing import BinaryIO, Optional, Callable

from wixfrag.core.models import ResolvedFile, ScannedFile, OperationCancelled
from wixfrag.core.interfaces import FileComparer, FileOperations

logger = logging.getLogger(__name__)

COMPARE_CHUNK_SIZE = 8192


class ContentComparerImpl(FileComparer):
    """
    Compares a candidate file against the payload of an already resolved file.
    Both files are streamed in lockstep and closed on every exit path.
    """

    def __init__(self, file_ops: Optional[FileOperations] = None, chunk_size: int = COMPARE_CHUNK_SIZE):
        if file_ops is None:
            from wixfrag.services.file_service import FileService
            file_ops = FileService()
        self.file_ops = file_ops
        self.chunk_size = chunk_size

    @staticmethod
    def names_match(first: str, second: str) -> bool:
        return first.casefold() == second.casefold()

    def is_identical(
        self,
        existing: ResolvedFile,
        candidate: ScannedFile,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> bool:
        if not self.names_match(existing.name, candidate.name):
            return False

        return self.contents_match(existing.physical_path, candidate.path, stopped_flag=stopped_flag)

    def contents_match(
        self,
        first_path: str,
        second_path: str,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> bool:
        """True if both files hold exactly the same bytes."""
        first_length = self.file_ops.get_length(first_path)
        second_length = self.file_ops.get_length(second_path)
        # Unknown lengths fall through to the byte comparison
        if first_length is not None and second_length is not None and first_length != second_length:
            return False

        with self.file_ops.open_read(first_path) as first, self.file_ops.open_read(second_path) as second:
            while True:
                if stopped_flag and stopped_flag():
                    raise OperationCancelled(f"Comparison cancelled: {second_path}")

                chunk = first.read(self.chunk_size)
                if not chunk:
                    # Both files must be at EOF
                    return not second.read(self.chunk_size)

                other = self._read_full(second, len(chunk))
                if other is None or chunk != other:
                    return False

    @staticmethod
    def _read_full(stream: BinaryIO, count: int) -> Optional[bytes]:
        """Reads exactly count bytes, or returns None if the stream ends first."""
        parts = []
        remaining = count
        while remaining > 0:
            data = stream.read(remaining)
            if not data:
                return None
            parts.append(data)
            remaining -= len(data)
        return b"".join(parts)
