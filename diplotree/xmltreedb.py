"""A hierarchical database stored as an XML document."""

from __future__ import annotations

import copy
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from .errors import ErrorCode, TreeDBError
from .node import XMLTreeDBNode
from .values import DataType, data_type_of

ROOT_ELEMENT_NAME = "diplodocusdb-xmltreedb"
_XML_DECLARATION = '<?xml version="1.0"?>\n'


def _serialize(root: ET.Element, indent: str) -> str:
    formatted = copy.deepcopy(root)
    ET.indent(formatted, space=indent)
    return _XML_DECLARATION + ET.tostring(formatted, encoding="unicode") + "\n"


def _strip_layout_whitespace(root: ET.Element) -> None:
    for element in root.iter():
        if element.text is not None and not element.text.strip():
            element.text = None
        if element.tail is not None and not element.tail.strip():
            element.tail = None


class XMLTreeDB:
    """A tree of named nodes with typed values, persisted as XML.

    Every modifying operation is applied to the in-memory document at once;
    the document is written to disk when the database is closed.
    """

    def __init__(self) -> None:
        self._path: Path | None = None
        self._document: ET.Element | None = None
        self._root: XMLTreeDBNode | None = None

    def create(self, path: str | os.PathLike[str]) -> None:
        """Create a new, empty database file at the given path."""
        self._path = Path(path)
        self._document = ET.Element(ROOT_ELEMENT_NAME)
        self._root = XMLTreeDBNode(self._document, None)
        try:
            self._path.write_text(_serialize(self._document, "\t"), encoding="utf-8")
        except OSError as exc:
            raise TreeDBError(f"Failed to create file: {exc}", ErrorCode.GENERIC_ERROR) from exc

    def open(self, path: str | os.PathLike[str]) -> None:
        """Open an existing database file."""
        self._path = Path(path)
        try:
            document = ET.parse(self._path).getroot()
        except (OSError, ET.ParseError) as exc:
            raise TreeDBError("Failed to open file", ErrorCode.GENERIC_ERROR) from exc
        if document.tag != ROOT_ELEMENT_NAME:
            raise TreeDBError("Failed to open file", ErrorCode.GENERIC_ERROR)
        _strip_layout_whitespace(document)
        self._document = document
        self._root = XMLTreeDBNode(document, None)

    def close(self) -> None:
        """Write the document to its file and release it."""
        if self._document is None or self._path is None:
            return
        try:
            self._path.write_text(_serialize(self._document, "  "), encoding="utf-8")
        finally:
            self._document = None
            self._root = None

    def __enter__(self) -> XMLTreeDB:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def root(self) -> XMLTreeDBNode:
        """Return the root node of the tree."""
        if self._root is None:
            raise TreeDBError("Database is not open", ErrorCode.GENERIC_ERROR)
        return self._root

    def value(self, node: XMLTreeDBNode, data_type: DataType | None = None) -> Any:
        """Return the value of a node, or None if it does not have the requested type."""
        if data_type is None or node.data_type is data_type:
            return node.value
        return None

    def child_value(self, parent: XMLTreeDBNode, name: str, data_type: DataType | None = None) -> Any:
        """Return the value of the first child with the given name."""
        node = self.child(parent, name)
        if node is None:
            raise TreeDBError(f"No child node named {name!r}", ErrorCode.GENERIC_ERROR)
        return self.value(node, data_type)

    def parent(self, node: XMLTreeDBNode) -> XMLTreeDBNode | None:
        """Return the parent of a node, or None for the root."""
        return node.parent

    def child_nodes(self, parent: XMLTreeDBNode) -> list[XMLTreeDBNode]:
        """Return the children of a node in order."""
        return parent.children()

    def child(self, parent: XMLTreeDBNode, name: str) -> XMLTreeDBNode | None:
        """Return the first child with the given name, or None."""
        return parent.child(name)

    def previous_sibling(self, node: XMLTreeDBNode, name: str | None = None) -> XMLTreeDBNode | None:
        """Return the preceding sibling of a node, optionally with a given name."""
        return node.previous_sibling(name)

    def next_sibling(self, node: XMLTreeDBNode, name: str | None = None) -> XMLTreeDBNode | None:
        """Return the following sibling of a node, optionally with a given name."""
        return node.next_sibling(name)

    def set_value(self, node: XMLTreeDBNode, value: Any) -> None:
        """Replace the value of a node."""
        data_type_of(value)
        node.value = value
        self._commit(node)

    def insert_child_node(
        self, parent: XMLTreeDBNode, index: int, name: str, value: Any = None
    ) -> XMLTreeDBNode:
        """Insert a new child at a position and return it."""
        result = parent.insert_child(index, name, value)
        self._commit(parent)
        return result

    def append_child_node(self, parent: XMLTreeDBNode, name: str, value: Any = None) -> XMLTreeDBNode:
        """Add a new child after the existing ones and return it."""
        result = parent.append_child(name, value)
        self._commit(parent)
        return result

    def set_child_node(self, parent: XMLTreeDBNode, name: str, value: Any = None) -> XMLTreeDBNode:
        """Set the value of the first child with a name, appending one if there is none."""
        result = parent.set_child(name, value)
        self._commit(parent)
        return result

    def remove_child_node(self, parent: XMLTreeDBNode, name: str) -> int:
        """Remove the first child with a name; return the number of nodes removed."""
        result = parent.remove_child(name)
        self._commit(parent)
        return result

    def remove_all_child_nodes(self, parent: XMLTreeDBNode) -> int:
        """Remove all children of a node and return how many were removed."""
        return parent.remove_all_children()

    @staticmethod
    def _commit(node: XMLTreeDBNode) -> None:
        node.update_value()