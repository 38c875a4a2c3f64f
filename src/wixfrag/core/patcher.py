"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/patcher.py
Updates the Id and Version attributes of the Product element in a WiX source file.

The document is parsed to check that /Wix/Product exists, then the Product
start tag is rewritten in the raw bytes. Everything outside the two attribute
values (comments, whitespace, quoting, declaration) stays byte-identical.
"""

import re
import uuid
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from wixfrag.core.models import WIX_NAMESPACE, ProductUpdateError
from wixfrag.core.interfaces import FileOperations

logger = logging.getLogger(__name__)

MAX_VERSION_PART = 2147483647

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+){1,3}$")

# Regions where a "<Product" lookalike is not markup
_NON_MARKUP = re.compile(rb"<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>", re.S)
_PRODUCT_START_TAG = re.compile(
    rb"<(?:[\w.\-]+:)?Product"
    rb"(?P<attrs>(?:\s+[\w.:\-]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)"
    rb"(?P<tail>\s*/?>)"
)
_ATTRIBUTE = re.compile(
    rb"\s+(?P<name>[\w.:\-]+)\s*=\s*(?P<quote>[\"'])(?P<value>.*?)(?P=quote)", re.S
)

_GUID_DIGITS = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
# Guid string forms N, D, B and P
_GUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{32}|" + _GUID_DIGITS + r"|\{" + _GUID_DIGITS + r"\}|\(" + _GUID_DIGITS + r"\)"
)


def validate_product_id(product_id: Optional[str]) -> str:
    """Returns product_id, or a new one when it is empty. Raises ProductUpdateError if malformed."""
    if not product_id:
        return str(uuid.uuid4())
    if not _GUID_PATTERN.fullmatch(product_id):
        raise ProductUpdateError("Product Id is not a valid Guid.")
    return product_id


def validate_product_version(version: Optional[str]) -> str:
    """Accepts Major.Minor[.Build[.Revision]] with each part in 0..2147483647."""
    if not version or not _VERSION_PATTERN.match(version):
        raise ProductUpdateError("Product Version is not a valid Major.Minor.Revision.Build version number.")
    if any(int(part) > MAX_VERSION_PART for part in version.split(".")):
        raise ProductUpdateError("Product Version is not a valid Major.Minor.Revision.Build version number.")
    return version


class ProductPatcherImpl:
    """Reads a WiX source file, patches its Product element and writes it back."""

    def __init__(self, file_ops: Optional[FileOperations] = None):
        if file_ops is None:
            from wixfrag.services.file_service import FileService
            file_ops = FileService()
        self.file_ops = file_ops

    def update(self, source_path: str, product_id: str, product_version: str) -> bool:
        """
        Args:
            source_path: WiX source file to update in place
            product_id: Already validated product id
            product_version: Already validated product version
        Returns:
            False when the file has no Product element (nothing is written)
        """
        data = self.file_ops.read_all_bytes(source_path)

        if not self.has_product_element(data):
            logger.warning("WiX source file does not contain a Product element.")
            return False

        logger.info(f"Updating Product Id to {product_id} and Version to {product_version} in {source_path}...")

        patched = self.patch_product_tag(data, [("Id", product_id), ("Version", product_version)])

        self.file_ops.clear_read_only(source_path)
        self.file_ops.write_all_bytes(source_path, patched)
        logger.info(f"{source_path} updated.")
        return True

    @staticmethod
    def has_product_element(data: bytes) -> bool:
        root = ET.fromstring(data)
        if root.tag != f"{{{WIX_NAMESPACE}}}Wix":
            return False
        return root.find(f"{{{WIX_NAMESPACE}}}Product") is not None

    @staticmethod
    def patch_product_tag(data: bytes, attributes: List[Tuple[str, str]]) -> bytes:
        """
        Rewrites the given attributes on the first Product start tag that is
        real markup. Existing attributes keep their position and quote style;
        missing ones are appended to the tag.
        """
        match = ProductPatcherImpl._find_product_tag(data)
        if match is None:
            raise ProductUpdateError("Could not locate the Product start tag.")

        attrs = match.group("attrs")
        for name, value in attributes:
            attrs = ProductPatcherImpl._set_attribute(attrs, name, value)

        start, end = match.span("attrs")
        return data[:start] + attrs + data[end:]

    @staticmethod
    def _find_product_tag(data: bytes):
        masked = [m.span() for m in _NON_MARKUP.finditer(data)]
        for match in _PRODUCT_START_TAG.finditer(data):
            position = match.start()
            if not any(start <= position < end for start, end in masked):
                return match
        return None

    @staticmethod
    def _set_attribute(attrs: bytes, name: str, value: str) -> bytes:
        # attrs is a run of whole attributes, so matching one at a time never enters a value
        target = name.encode("ascii")
        position = 0
        while position < len(attrs):
            existing = _ATTRIBUTE.match(attrs, position)
            if existing is None:
                break
            if existing.group("name") == target:
                quote = existing.group("quote")
                entities = {'"': "&quot;"} if quote == b'"' else {"'": "&apos;"}
                encoded = escape(value, entities).encode("utf-8")
                start, end = existing.span("value")
                return attrs[:start] + encoded + attrs[end:]
            position = existing.end()

        encoded = escape(value, {'"': "&quot;"}).encode("utf-8")
        return attrs + b" " + target + b'="' + encoded + b'"'
