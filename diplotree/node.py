"""Nodes of an XML-backed tree database."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from .values import DataType, data_type_of, decode_value, encode_value

_DATA_TYPE_ATTRIBUTE = "data-type"
_DATA_ELEMENT = "data"


def _has_value_element(element: ET.Element) -> bool:
    return (
        element.get(_DATA_TYPE_ATTRIBUTE) is not None
        and len(element) > 0
        and element[0].tag == _DATA_ELEMENT
    )


def _value_text(element: ET.Element) -> str | None:
    if _has_value_element(element):
        return element[0].text
    return element.text


class XMLTreeDBNode:
    """A node bound to one XML element, holding a typed value and child nodes.

    Children are read from the XML lazily on first access. Structural changes
    are applied to the XML at once; values are written by update_value().
    """

    def __init__(self, element: ET.Element, parent: XMLTreeDBNode | None = None) -> None:
        self.element = element
        self.parent = parent
        self.value: Any = None
        self._children: list[XMLTreeDBNode] | None = None

    def __repr__(self) -> str:
        return f"XMLTreeDBNode(name={self.name!r}, value={self.value!r})"

    @property
    def name(self) -> str:
        return self.element.tag

    @property
    def data_type(self) -> DataType:
        return data_type_of(self.value)

    def is_root(self) -> bool:
        """Return True if the node has no parent."""
        return self.parent is None

    def _child_elements(self) -> list[ET.Element]:
        elements = list(self.element)
        if _has_value_element(self.element):
            elements = elements[1:]
        return elements

    def _load(self, element: ET.Element) -> XMLTreeDBNode:
        node = XMLTreeDBNode(element, self)
        type_name = element.get(_DATA_TYPE_ATTRIBUTE)
        if type_name is not None:
            node.value = decode_value(type_name, _value_text(element))
        return node

    def _loaded_children(self) -> list[XMLTreeDBNode]:
        if self._children is None:
            self._children = [self._load(element) for element in self._child_elements()]
        return self._children

    def children(self) -> list[XMLTreeDBNode]:
        """Return the child nodes in document order."""
        return list(self._loaded_children())

    def child(self, name: str) -> XMLTreeDBNode | None:
        """Return the first child with the given name, or None."""
        return next((c for c in self._loaded_children() if c.name == name), None)

    def _siblings_around(self) -> tuple[list[XMLTreeDBNode], list[XMLTreeDBNode]] | None:
        if self.parent is None:
            return None
        siblings = self.parent._loaded_children()
        position = next((i for i, s in enumerate(siblings) if s is self), None)
        if position is None:
            return None
        return siblings[:position], siblings[position + 1 :]

    def previous_sibling(self, name: str | None = None) -> XMLTreeDBNode | None:
        """Return the nearest preceding sibling, optionally with the given name."""
        around = self._siblings_around()
        if around is None:
            return None
        return next(
            (s for s in reversed(around[0]) if name is None or s.name == name), None
        )

    def next_sibling(self, name: str | None = None) -> XMLTreeDBNode | None:
        """Return the nearest following sibling, optionally with the given name."""
        around = self._siblings_around()
        if around is None:
            return None
        return next((s for s in around[1] if name is None or s.name == name), None)

    def insert_child(self, index: int, name: str, value: Any = None) -> XMLTreeDBNode:
        """Insert a new child at the given position and return it."""
        if index < 0:
            raise ValueError(f"child index must not be negative: {index}")
        data_type_of(value)
        children = self._loaded_children()
        element = ET.Element(name)
        if index < len(children):
            position = list(self.element).index(children[index].element)
            self.element.insert(position, element)
        else:
            self.element.append(element)
        node = XMLTreeDBNode(element, self)
        node.value = value
        children.insert(index, node)
        return node

    def append_child(self, name: str, value: Any = None) -> XMLTreeDBNode:
        """Add a new child after the last one and return it."""
        return self.insert_child(len(self._loaded_children()), name, value)

    def set_child(self, name: str, value: Any = None) -> XMLTreeDBNode:
        """Set the value of the first child with this name, appending one if none exists."""
        existing = self.child(name)
        if existing is None:
            return self.append_child(name, value)
        data_type_of(value)
        existing.value = value
        return existing

    def remove_child(self, name: str) -> int:
        """Remove the first child with the given name; return the number removed."""
        existing = self.child(name)
        if existing is None:
            return 0
        self.element.remove(existing.element)
        self._loaded_children().remove(existing)
        return 1

    def remove_all_children(self) -> int:
        """Remove every child and return how many there were."""
        children = self._loaded_children()
        for child in children:
            self.element.remove(child.element)
        count = len(children)
        children.clear()
        return count

    def update_value(self) -> None:
        """Write the value of this node and of all its descendants into the XML."""
        children = self._loaded_children()
        self.element.text = None
        if _has_value_element(self.element):
            self.element.remove(self.element[0])

        data_type, text = encode_value(self.value)
        if data_type is DataType.NULL:
            # Null is the default, so untyped nodes stay free of the attribute.
            self.element.attrib.pop(_DATA_TYPE_ATTRIBUTE, None)
        else:
            self.element.set(_DATA_TYPE_ATTRIBUTE, data_type.value)
            if children:
                value_element = ET.Element(_DATA_ELEMENT)
                value_element.text = text
                self.element.insert(0, value_element)
            else:
                self.element.text = text

        for child in children:
            child.update_value()