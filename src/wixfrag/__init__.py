"""
wixfrag — WiX fragment generator for installer payload directories.

Core features:
- One ComponentGroup and DirectoryRef per subdirectory of the source directory
- Byte-identical files with the same name are packaged once and referenced many times
- Pruned directory tree: only directories that hold files are declared
- Product Id/Version update of an existing WiX source, leaving the rest of the file untouched
- CLI interface for build scripts
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("wixfrag")
except Exception:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from wixfrag.commands import GenerateComponentsCommand, UpdateProductCommand
from wixfrag.core import (
    GenerationParams, ProductParams, IdentityMode, ResolvedFile, ScannedFile,
    WixFragError, OperationCancelled, ProductUpdateError)
from wixfrag.services.file_service import FileService

__all__ = [
    "GenerateComponentsCommand",
    "UpdateProductCommand",
    "GenerationParams",
    "ProductParams",
    "IdentityMode",
    "ResolvedFile",
    "ScannedFile",
    "WixFragError",
    "OperationCancelled",
    "ProductUpdateError",
    "FileService",
    "__version__",
]
