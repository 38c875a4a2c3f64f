"""
Command orchestrators for fragment generation and product updates.
This is the single source of truth for business logic used by the CLI.
"""
import logging
import time
from typing import List, Optional, Callable, Tuple

from wixfrag.core.models import (
    GenerationParams, GenerationStats, ProductParams, ProductUpdateError, ResolvedFile)
from wixfrag.core.interfaces import FileOperations
from wixfrag.core.scanner import FileScannerImpl
from wixfrag.core.comparer import ContentComparerImpl
from wixfrag.core.hasher import HasherImpl
from wixfrag.core.identifiers import IdentifierFactory
from wixfrag.core.resolver import FileIdentityResolverImpl
from wixfrag.core.emitter import FragmentBuilder, FragmentWriter
from wixfrag.core.patcher import ProductPatcherImpl, validate_product_id, validate_product_version
from wixfrag.services.file_service import FileService

logger = logging.getLogger(__name__)


class GenerateComponentsCommand:
    """
    Orchestrates the generation workflow:
    1. Scan every file under the source directory
    2. Resolve identical files onto shared payloads
    3. Build the two-fragment document for the root's subdirectories
    4. Replace the output file with the new document

    Usage:
        params = GenerationParams(source_dir=..., target_dir=..., fragment_file_name="Files.wxs")
        command = GenerateComponentsCommand()
        result = command.execute(params, progress_callback=printer, stopped_flag=check)
    """

    def __init__(self, file_ops: Optional[FileOperations] = None, id_factory: Optional[IdentifierFactory] = None):
        self._file_ops = file_ops
        self._id_factory = id_factory
        self._files: List[ResolvedFile] = []

    def execute(
            self,
            params: GenerationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Optional[Tuple[str, GenerationStats]]:
        """
        Returns:
            (output_path, statistics), or None when no fragment file name was given

        Raises:
            OSError: If a file cannot be read or the output cannot be written
            OperationCancelled: If stopped_flag fired; the output file is untouched
        """
        if not params.fragment_file_name:
            logger.warning("Fragment file name not specified; cannot generate components.")
            return None

        start_time = time.time()
        file_ops = self._file_ops or FileService(use_trash=params.trash_existing)
        id_factory = self._id_factory or IdentifierFactory()
        stats = GenerationStats()

        output_path = params.output_path
        logger.info(f"Generating {output_path} from {params.source_dir}")

        scanner = FileScannerImpl(params.source_dir, file_ops=file_ops)
        scanned = scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback)

        resolver = FileIdentityResolverImpl(
            mode=params.mode,
            comparer=ContentComparerImpl(file_ops=file_ops),
            hasher=HasherImpl(file_ops=file_ops),
            id_factory=id_factory,
        )
        self._files = resolver.resolve(scanned, stopped_flag=stopped_flag, progress_callback=progress_callback)
        stats.record_files(self._files)

        groups = file_ops.list_directories(params.source_dir)
        stats.groups = len(groups)

        document = FragmentBuilder(id_factory=id_factory).build(self._files, groups)
        FragmentWriter(file_ops=file_ops).write(document, output_path)

        stats.total_time = time.time() - start_time
        logger.info("Finished generating components.")
        return output_path, stats

    def get_files(self) -> List[ResolvedFile]:
        """Get resolved files after execution."""
        return self._files.copy()


class UpdateProductCommand:
    """
    Validates the product id/version and patches them into a WiX source file.
    All validation happens before the file is read.
    """

    def __init__(self, file_ops: Optional[FileOperations] = None):
        self._patcher = ProductPatcherImpl(file_ops=file_ops or FileService())
        self.product_id: Optional[str] = None  # Id written by the last run

    def execute(self, params: ProductParams) -> bool:
        """
        Returns:
            True if the file was updated, False if it has no Product element

        Raises:
            ProductUpdateError: If id, version or source file name are invalid
        """
        product_id = validate_product_id(params.product_id)
        product_version = validate_product_version(params.product_version)

        if not params.source_file:
            raise ProductUpdateError("Source file is not specified.")

        self.product_id = product_id
        return self._patcher.update(params.source_path, product_id, product_version)
