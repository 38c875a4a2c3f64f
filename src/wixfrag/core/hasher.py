"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Content digests used to bucket candidate duplicates before the byte-for-byte
comparison. A digest match is never taken as proof of identity.
"""

import logging
from typing import Dict, Optional, Callable

import xxhash

from wixfrag.core.models import OperationCancelled
from wixfrag.core.interfaces import HashAlgorithm, FileOperations

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new():
        return xxhash.xxh64()


class HasherImpl:
    """
    Computes and caches full content digests of files, keyed by path.
    Files are streamed in chunks; read errors propagate to the caller.
    """

    def __init__(self, algorithm: HashAlgorithm = None, file_ops: Optional[FileOperations] = None):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        if file_ops is None:
            from wixfrag.services.file_service import FileService
            file_ops = FileService()
        self.file_ops = file_ops
        self._cache: Dict[str, bytes] = {}

    def compute_full_hash(self, path: str, stopped_flag: Optional[Callable[[], bool]] = None) -> bytes:
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        hasher = self.algorithm.new()
        with self.file_ops.open_read(path) as f:
            while True:
                if stopped_flag and stopped_flag():
                    raise OperationCancelled(f"Hashing cancelled: {path}")
                data = f.read(READ_CHUNK_SIZE)
                if not data:
                    break
                hasher.update(data)

        result = hasher.digest()
        self._cache[path] = result
        logger.debug(f"Hashed {path}: {result.hex()}")
        return result
