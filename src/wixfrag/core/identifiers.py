"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/identifiers.py
Issues the 128-bit values behind every generated WiX identifier.
"""

import uuid
import logging
from typing import Callable, Optional, Set

logger = logging.getLogger(__name__)


class IdentifierFactory:
    """
    Hands out uuids that are unique for the lifetime of the factory.
    One factory is used per generation run.
    """

    def __init__(self, source: Optional[Callable[[], uuid.UUID]] = None):
        self._source = source or uuid.uuid4
        self._issued: Set[uuid.UUID] = set()

    def new_id(self) -> uuid.UUID:
        value = self._source()
        while value in self._issued:
            logger.debug(f"Discarding repeated identifier {value}")
            value = self._source()
        self._issued.add(value)
        return value

    def opaque(self, prefix: str) -> str:
        """prefix + 32 uppercase hex digits, not derived from any name."""
        return prefix + self.new_id().hex.upper()

    @property
    def issued_count(self) -> int:
        return len(self._issued)
