"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for component generation: scanned files, resolved files,
run parameters, statistics and error types.
"""

from dataclasses import dataclass
from typing import List, Optional
import os
import uuid
import logging
from enum import Enum

logger = logging.getLogger(__name__)

WIX_NAMESPACE = "http://schemas.microsoft.com/wix/2006/wi"
ROOT_DIRECTORY_ID = "TARGETDIR"

COMPONENT_ID_PREFIX = "cmp"
FILE_ID_PREFIX = "fil"
DIRECTORY_ID_PREFIX = "dir"


# =============================
# Errors
# =============================

class WixFragError(Exception):
    """Base class for all errors raised by wixfrag."""


class OperationCancelled(WixFragError):
    """Raised when the stopped_flag callback asks a running operation to stop."""


class ProductUpdateError(WixFragError):
    """Raised when product id, product version or source file are invalid."""


# =============================
# Enums
# =============================

class IdentityMode(Enum):
    """
    Strategy used by the resolver to find identical files.
    Both modes produce the same equivalence classes.
    """
    LINEAR = "linear"
    BUCKETED = "bucketed"

    @property
    def display_name(self) -> str:
        """Human-readable name for help output."""
        mapping = {
            IdentityMode.LINEAR: "Linear",
            IdentityMode.BUCKETED: "Bucketed",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        mapping = {
            IdentityMode.LINEAR:
                "Compare each file against every earlier file with the same name",
            IdentityMode.BUCKETED:
                "Name + Size + xxHash64 buckets, byte comparison inside a bucket",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class ScannedFile:
    """A file found by the scanner, before identity resolution."""
    path: str
    size: Optional[int] = None  # None when the size could not be read
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    def __repr__(self):
        return f"<ScannedFile path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class ResolvedFile:
    """
    One discovered file, deduplicated against the files resolved before it.

    physical_path is the path whose bytes get packaged. It equals source_path
    for the first occurrence of a payload; later identical occurrences copy
    the physical_path of the record they matched, so whole chains point at
    the first occurrence.
    """
    id: uuid.UUID
    source_path: str
    physical_path: str
    size: Optional[int] = None

    @property
    def name(self) -> str:
        return os.path.basename(self.source_path)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.source_path)

    @property
    def is_reference(self) -> bool:
        return self.physical_path != self.source_path

    @property
    def component_id(self) -> str:
        return COMPONENT_ID_PREFIX + self.id.hex.upper()

    @property
    def file_id(self) -> str:
        return FILE_ID_PREFIX + self.id.hex.upper()

    @property
    def guid(self) -> str:
        """Braced, hyphenated form of the id, used as the Component Guid."""
        return "{" + str(self.id) + "}"

    def create_reference(self, new_id: uuid.UUID, scanned: ScannedFile) -> "ResolvedFile":
        """Returns a record for `scanned` that points at this record's payload."""
        return ResolvedFile(
            id=new_id,
            source_path=scanned.path,
            physical_path=self.physical_path,
            size=scanned.size,
        )

    @staticmethod
    def create(new_id: uuid.UUID, scanned: ScannedFile) -> "ResolvedFile":
        return ResolvedFile(
            id=new_id,
            source_path=scanned.path,
            physical_path=scanned.path,
            size=scanned.size,
        )

    def __repr__(self):
        marker = f" -> {self.physical_path}" if self.is_reference else ""
        return f"<ResolvedFile {self.source_path}{marker}>"


@dataclass
class GenerationStats:
    """
    Statistics collected while generating a fragment.
    """
    files_scanned: int = 0
    unique_payloads: int = 0
    references: int = 0
    shared_bytes: int = 0
    groups: int = 0
    total_time: float = 0.0

    def record_files(self, files: List[ResolvedFile]) -> None:
        self.files_scanned = len(files)
        self.references = sum(1 for f in files if f.is_reference)
        self.unique_payloads = self.files_scanned - self.references
        self.shared_bytes = sum(f.size or 0 for f in files if f.is_reference)

    def print_summary(self) -> str:
        from wixfrag.utils.convert_utils import ConvertUtils

        lines = [
            "📊 Generation Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Files scanned: {self.files_scanned}",
            f"Unique payloads: {self.unique_payloads}",
            f"Duplicate references: {self.references}",
            f"Bytes deduplicated: {ConvertUtils.bytes_to_human(self.shared_bytes)}",
            f"Component groups: {self.groups}",
        ]
        return "\n".join(lines)


"""
DTOs for command parameters with built-in validation.
"""

@dataclass
class GenerationParams:
    """Parameters for fragment generation with validation."""
    source_dir: str
    target_dir: str
    fragment_file_name: Optional[str] = None
    mode: IdentityMode = IdentityMode.BUCKETED
    trash_existing: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source_dir:
            raise ValueError("Source directory cannot be empty")

        if not self.target_dir:
            raise ValueError("Target directory cannot be empty")

        # Source paths in the fragment are absolute
        self.source_dir = os.path.abspath(self.source_dir)
        self.target_dir = os.path.abspath(self.target_dir)

        # An empty fragment name is reported by the command as a warning
        if self.fragment_file_name is not None:
            self.fragment_file_name = self.fragment_file_name.strip()

    @property
    def output_path(self) -> str:
        return os.path.join(self.target_dir, self.fragment_file_name or "")


@dataclass
class ProductParams:
    """Parameters for the product attribute update."""
    source_dir: str
    source_file: Optional[str]
    product_version: str
    product_id: Optional[str] = None

    def __post_init__(self):
        if not self.source_dir:
            raise ValueError("Source directory cannot be empty")

        if self.product_id is not None:
            self.product_id = self.product_id.strip()

    @property
    def source_path(self) -> str:
        return os.path.join(self.source_dir, self.source_file or "")
