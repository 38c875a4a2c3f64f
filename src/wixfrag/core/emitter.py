"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/emitter.py
Fragment Tree Builder & Emitter.

Document layout
---------------
<Wix xmlns="http://schemas.microsoft.com/wix/2006/wi">
  <Fragment>                      physical structure, one DirectoryRef per group
    <DirectoryRef Id="TARGETDIR">
      <Directory Id="dir<group name>" Name="<group name>">
        <Component Id="cmp<HEX>" Guid="{<uuid>}">
          <File Id="fil<HEX>" KeyPath="yes" Source="<physical path>" />
        </Component>
        <Directory Id="dir<HEX>" Name="<sub>"> ... </Directory>
      </Directory>
    </DirectoryRef>
  </Fragment>
  <Fragment>                      one ComponentGroup per group
    <ComponentGroup Id="<group name>">
      <ComponentRef Id="cmp<HEX>" />
    </ComponentGroup>
  </Fragment>
</Wix>

Only the group's own Directory gets an Id derived from its name; deeper
directories get opaque ids. The File Source is the physical path, so
duplicate files are packaged once and referenced by several components.
"""

import os
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from wixfrag.core.models import (
    ResolvedFile, WIX_NAMESPACE, ROOT_DIRECTORY_ID, DIRECTORY_ID_PREFIX)
from wixfrag.core.tree import DirectoryNode, build_group_tree, files_in_group
from wixfrag.core.identifiers import IdentifierFactory
from wixfrag.core.interfaces import FileOperations

logger = logging.getLogger(__name__)


class FragmentBuilder:
    """Builds the two-fragment WiX document for a resolved file list."""

    def __init__(self, id_factory: IdentifierFactory = None):
        self.id_factory = id_factory or IdentifierFactory()

    def build(self, files: List[ResolvedFile], groups: List[str]) -> ET.Element:
        """
        Args:
            files: Resolved files in resolution order
            groups: Absolute paths of the root's immediate subdirectories
        Returns:
            The Wix root element
        """
        wix = ET.Element("Wix", xmlns=WIX_NAMESPACE)

        structure = ET.SubElement(wix, "Fragment")
        for group in groups:
            directory_ref = ET.SubElement(structure, "DirectoryRef", Id=ROOT_DIRECTORY_ID)
            node = build_group_tree(group, files)
            if node is not None:
                self._write_directory(directory_ref, node, readable_id=True)

        component_groups = ET.SubElement(wix, "Fragment")
        for group in groups:
            group_name = os.path.basename(group.rstrip(os.sep))
            logger.info(f"Generating component: {group_name}")

            component_group = ET.SubElement(component_groups, "ComponentGroup", Id=group_name)
            for record in files_in_group(files, group):
                ET.SubElement(component_group, "ComponentRef", Id=record.component_id)

        return wix

    def _write_directory(self, parent: ET.Element, node: DirectoryNode, readable_id: bool) -> None:
        if readable_id:
            directory_id = DIRECTORY_ID_PREFIX + node.name
        else:
            directory_id = self.id_factory.opaque(DIRECTORY_ID_PREFIX)

        directory = ET.SubElement(parent, "Directory", Id=directory_id, Name=node.name)

        for record in node.files:
            self._write_component(directory, record)

        for child in node.children:
            self._write_directory(directory, child, readable_id=False)

    @staticmethod
    def _write_component(parent: ET.Element, record: ResolvedFile) -> None:
        component = ET.SubElement(parent, "Component", Id=record.component_id, Guid=record.guid)
        ET.SubElement(
            component,
            "File",
            Id=record.file_id,
            KeyPath="yes",
            Source=record.physical_path,
        )


class FragmentWriter:
    """
    Serializes a document and replaces the output file with it.
    The document is fully serialized before the old output is removed.
    """

    def __init__(self, file_ops: Optional[FileOperations] = None):
        if file_ops is None:
            from wixfrag.services.file_service import FileService
            file_ops = FileService()
        self.file_ops = file_ops

    @staticmethod
    def serialize(wix: ET.Element) -> bytes:
        tree = ET.ElementTree(wix)
        ET.indent(tree, space="  ")
        return ET.tostring(wix, encoding="utf-8", xml_declaration=True) + b"\n"

    def write(self, wix: ET.Element, output_path: str) -> None:
        data = self.serialize(wix)

        self.file_ops.delete_if_exists(output_path)
        self.file_ops.write_all_bytes(output_path, data)
        logger.debug(f"Wrote {len(data)} bytes to {output_path}")
