"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements file enumeration for component generation.
Features:
- Recursively lists every file under the root, no filtering of any kind
- Deterministic discovery order for a given file system state
- Cancellation and throttled progress reporting
- Errors while listing a directory abort the scan
"""

import time
import logging
from pathlib import Path
from typing import List, Optional, Callable

from wixfrag.core.models import ScannedFile, OperationCancelled
from wixfrag.core.interfaces import FileScanner, FileOperations

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree through a FileOperations implementation.

    Attributes:
        root_dir: Root directory to scan
        file_ops: File system capability (local by default)
    """

    PROGRESS_INTERVAL = 1000  # Update every 1,000 files

    def __init__(self, root_dir: str, file_ops: Optional[FileOperations] = None):
        self.root_dir = root_dir
        if file_ops is None:
            from wixfrag.services.file_service import FileService
            file_ops = FileService()
        self.file_ops = file_ops

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[ScannedFile]:
        """
        Single-pass scanner with progress updates and debug logging.
        Returns every file found in the directory tree, in discovery order.
        """
        logger.debug(f"Scanning directory: {self.root_dir}")

        if stopped_flag and stopped_flag():
            raise OperationCancelled("Scan cancelled before start")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise NotADirectoryError(error_msg)

        found_files = []
        progress_counter = 0
        start_time = time.time()

        for scanned in self.file_ops.walk_files(str(root_path)):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                raise OperationCancelled("Scan cancelled")

            found_files.append(scanned)
            progress_counter += 1

            if progress_callback and progress_counter >= self.PROGRESS_INTERVAL:
                progress_callback('scanning', len(found_files), None)
                progress_counter = 0

        if progress_callback and progress_counter > 0:
            progress_callback('scanning', len(found_files), None)

        elapsed_time = time.time() - start_time
        logger.debug(f"Scan completed in {elapsed_time:.2f} seconds. Found {len(found_files)} files.")
        return found_files
