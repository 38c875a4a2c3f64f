"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
File Identity Resolver: turns the scanned file list into ResolvedFile records,
collapsing byte-identical files with the same name onto one physical payload.

Two strategies share the same result:
  LINEAR   : every candidate is compared against all earlier records in order
  BUCKETED : only earlier records with the same folded name, the same size and
             the same xxHash64 digest reach the byte comparison
"""

import logging
from collections import defaultdict
from typing import List, Dict, Optional, Callable

from wixfrag.core.models import ResolvedFile, ScannedFile, IdentityMode, OperationCancelled
from wixfrag.core.interfaces import IdentityResolver, FileComparer
from wixfrag.core.comparer import ContentComparerImpl
from wixfrag.core.hasher import HasherImpl
from wixfrag.core.identifiers import IdentifierFactory

logger = logging.getLogger(__name__)


class FileIdentityResolverImpl(IdentityResolver):
    """
    Resolves files in discovery order. The first earlier record whose payload
    matches a new file wins, and the new record inherits its physical_path.
    """

    def __init__(
        self,
        mode: IdentityMode = IdentityMode.BUCKETED,
        comparer: FileComparer = None,
        hasher: HasherImpl = None,
        id_factory: IdentifierFactory = None
    ):
        self.mode = mode
        self.comparer = comparer or ContentComparerImpl()
        self.hasher = hasher or HasherImpl()
        self.id_factory = id_factory or IdentifierFactory()

    def resolve(
        self,
        files: List[ScannedFile],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[ResolvedFile]:
        logger.debug(f"Resolving {len(files)} files (mode: {self.mode.value})")

        resolved: List[ResolvedFile] = []
        by_name: Dict[str, List[ResolvedFile]] = defaultdict(list)
        total = len(files)

        for index, scanned in enumerate(files, 1):
            if stopped_flag and stopped_flag():
                raise OperationCancelled("Resolution cancelled")

            if self.mode == IdentityMode.LINEAR:
                candidates = resolved
            else:
                candidates = self._bucket_candidates(by_name[scanned.name.casefold()], scanned, stopped_flag)

            match = self._find_match(candidates, scanned, stopped_flag)
            if match is not None:
                record = match.create_reference(self.id_factory.new_id(), scanned)
                logger.debug(f"{scanned.path} is identical to {record.physical_path}")
            else:
                record = ResolvedFile.create(self.id_factory.new_id(), scanned)

            resolved.append(record)
            by_name[scanned.name.casefold()].append(record)

            if progress_callback:
                progress_callback('resolving', index, total)

        return resolved

    def _find_match(
        self,
        candidates: List[ResolvedFile],
        scanned: ScannedFile,
        stopped_flag: Optional[Callable[[], bool]]
    ) -> Optional[ResolvedFile]:
        for existing in candidates:
            if self.comparer.is_identical(existing, scanned, stopped_flag=stopped_flag):
                return existing
        return None

    def _bucket_candidates(
        self,
        same_name: List[ResolvedFile],
        scanned: ScannedFile,
        stopped_flag: Optional[Callable[[], bool]]
    ) -> List[ResolvedFile]:
        """
        Narrows same-name records to those that can hold the same bytes.
        Order is kept, so the first true match is the same one LINEAR finds.
        Digests are only computed once a name is seen twice; the hasher caches
        them per path.
        """
        if not same_name:
            return []

        # Unknown sizes never rule a record out
        sized = [
            r for r in same_name
            if r.size is None or scanned.size is None or r.size == scanned.size
        ]
        if not sized:
            return []

        digest = self.hasher.compute_full_hash(scanned.path, stopped_flag=stopped_flag)
        return [
            r for r in sized
            if self.hasher.compute_full_hash(r.physical_path, stopped_flag=stopped_flag) == digest
        ]
