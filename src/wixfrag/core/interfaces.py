"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the fragment generator.
These protocols use Python's `typing.Protocol` so that any object with the
right methods can be plugged in, e.g. a file system other than the local one.

Key Components:
---------------
- FileOperations: File system capability consumed by the core (list, open, delete, write).
- HashAlgorithm: Standardized interface for hash functions (e.g., xxHash).
- FileScanner: Interface for enumerating every file under a root directory.
- FileComparer: Interface for the identity-equal predicate between two files.
- IdentityResolver: Interface for turning scanned files into resolved files.
"""

from typing import Protocol, List, Iterator, BinaryIO, Optional, Callable
from wixfrag.core.models import ScannedFile, ResolvedFile


# ===== Interfaces =====

class FileOperations(Protocol):
    """
    File system capability used by the core.

    The local implementation is services.file_service.FileService; a remote
    agent only needs to provide the same methods.
    """
    def walk_files(self, root: str) -> Iterator[ScannedFile]: ...
    def list_directories(self, root: str) -> List[str]: ...
    def open_read(self, path: str) -> BinaryIO: ...
    def get_length(self, path: str) -> Optional[int]: ...
    def delete_if_exists(self, path: str) -> bool: ...
    def read_all_bytes(self, path: str) -> bytes: ...
    def write_all_bytes(self, path: str, data: bytes) -> None: ...
    def clear_read_only(self, path: str) -> bool: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting the
    resolver. Digests are only used to pick candidates, never as proof of
    identity.
    """

    def new(self):
        """Returns a fresh incremental hash object with update()/digest()."""
        ...


class FileScanner(Protocol):
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[ScannedFile]:
        """
        Scan every file under the configured root.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of scanned files in discovery order.
        """
        ...


class FileComparer(Protocol):
    """Interface for the identity-equal predicate."""
    def is_identical(
        self,
        existing: ResolvedFile,
        candidate: ScannedFile,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> bool: ...


class IdentityResolver(Protocol):
    def resolve(
        self,
        files: List[ScannedFile],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[ResolvedFile]:
        """
        Resolve scanned files into records, in the same order.

        Returns:
            One ResolvedFile per scanned file.
        """
        ...
