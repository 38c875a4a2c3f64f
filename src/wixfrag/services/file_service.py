"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Local file system operations used by the fragment generator and the
product patcher. Implements the FileOperations protocol.
"""
import os
import stat
import logging
from pathlib import Path
from typing import List, Iterator, BinaryIO, Optional
from send2trash import send2trash

from wixfrag.core.models import ScannedFile

logger = logging.getLogger(__name__)


class FileService:
    """
    File operations against the local file system.
    Errors from the OS propagate unchanged except where noted.
    """

    def __init__(self, use_trash: bool = False):
        # When set, delete_if_exists moves the file to the system trash
        self.use_trash = use_trash

    @staticmethod
    def walk_files(root: str) -> Iterator[ScannedFile]:
        """
        Yields every file under root. Files of a directory come first (sorted
        by name), then its subdirectories in name order. Directory symlinks
        are not followed.
        """
        def on_error(error: OSError):
            raise error

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                yield ScannedFile(path=path, size=FileService.get_length(path), name=filename)

    @staticmethod
    def list_directories(root: str) -> List[str]:
        """Immediate subdirectories of root as absolute paths, sorted by name."""
        with os.scandir(root) as entries:
            dirs = [entry.path for entry in entries if entry.is_dir(follow_symlinks=False)]
        return sorted(dirs, key=lambda p: os.path.basename(p))

    @staticmethod
    def open_read(path: str) -> BinaryIO:
        return open(path, "rb")

    @staticmethod
    def get_length(path: str) -> Optional[int]:
        """File size in bytes, or None when the size cannot be read."""
        try:
            return os.stat(path).st_size
        except OSError as e:
            logger.debug(f"Could not get size of {path}: {e}")
            return None

    def delete_if_exists(self, path: str) -> bool:
        """Removes path if it is an existing file. Returns True when something was removed."""
        target = Path(path)
        if not target.is_file():
            return False

        if self.use_trash:
            FileService.move_to_trash(str(target))
        else:
            target.unlink()
        logger.debug(f"Removed existing file: {target}")
        return True

    @staticmethod
    def read_all_bytes(path: str) -> bytes:
        return Path(path).read_bytes()

    @staticmethod
    def write_all_bytes(path: str, data: bytes) -> None:
        """Writes data to path, creating missing parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    @staticmethod
    def clear_read_only(path: str) -> bool:
        """Makes the file writable for its owner. Returns True if the flag was set."""
        mode = os.stat(path).st_mode
        if mode & stat.S_IWRITE:
            return False
        os.chmod(path, mode | stat.S_IWRITE)
        logger.debug(f"Cleared read-only flag: {path}")
        return True

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
