"""
Core generation engine: scanner, identity resolver, tree builder, emitter and patcher.

This package contains the whole WiX logic of wixfrag:
- FileScannerImpl: recursive enumeration of every file under a root
- ContentComparerImpl: name + byte-for-byte identity predicate
- FileIdentityResolverImpl: equivalence classes of identical files (linear or xxHash-bucketed)
- FragmentBuilder / FragmentWriter: two-fragment WiX document and its output file
- ProductPatcherImpl: Product Id/Version update of an existing WiX source
- Models: ScannedFile, ResolvedFile, params, stats and errors

Nothing here talks to the console; CLI concerns live in wixfrag.cli.
"""

from .scanner import FileScannerImpl
from .comparer import ContentComparerImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .identifiers import IdentifierFactory
from .resolver import FileIdentityResolverImpl
from .tree import DirectoryNode, build_group_tree
from .emitter import FragmentBuilder, FragmentWriter
from .patcher import ProductPatcherImpl
from .models import (
    ScannedFile, ResolvedFile, IdentityMode, GenerationParams, ProductParams,
    GenerationStats, WixFragError, OperationCancelled, ProductUpdateError)

__all__ = [
    "FileScannerImpl",
    "ContentComparerImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "IdentifierFactory",
    "FileIdentityResolverImpl",
    "DirectoryNode",
    "build_group_tree",
    "FragmentBuilder",
    "FragmentWriter",
    "ProductPatcherImpl",
    "ScannedFile",
    "ResolvedFile",
    "IdentityMode",
    "GenerationParams",
    "ProductParams",
    "GenerationStats",
    "WixFragError",
    "OperationCancelled",
    "ProductUpdateError",
]
