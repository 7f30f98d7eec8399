"""Document tree nodes and the string helpers that work on them."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Iterable, Optional

ROOT_NAME = "/"

_uids = itertools.count(1)


class NodeType(Enum):
    """Kinds of node that can appear in a document tree."""

    EMPTY = auto()
    ELEMENT = auto()
    ATTRIBUTE = auto()
    TEXT = auto()
    COMMENT = auto()
    PI = auto()


@dataclass(eq=False)
class XmlNode:
    """A node of a document tree; nodes compare by identity."""

    type: NodeType
    name: Optional[str] = None
    content: Optional[str] = None
    parent: Optional["XmlNode"] = field(default=None, repr=False)
    children: list["XmlNode"] = field(default_factory=list, repr=False)
    attributes: list["XmlNode"] = field(default_factory=list, repr=False)
    position: int = 0
    order: int = 0
    no_escape: bool = False
    cdata: bool = False
    file: Optional[str] = None
    line: int = 0
    original: Optional["XmlNode"] = field(default=None, repr=False)
    uid: int = field(default_factory=lambda: next(_uids))

    def add_child(self, child: "XmlNode") -> "XmlNode":
        """Append ``child`` as the last child of this node."""
        if child is None:
            raise ValueError("child is None")
        self.children.append(child)
        child.parent = self
        return child

    def append_child(self, node_type: NodeType) -> "XmlNode":
        """Create a new node of ``node_type`` as the last child."""
        return self.add_child(XmlNode(node_type))

    def unlink(self) -> None:
        """Remove this node from its parent's children."""
        if self.parent is None:
            return
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                del siblings[index]
                break
        self.parent = None

    def add_attribute(self, name: str, value: Optional[str]) -> "XmlNode":
        """Add an attribute in front of the existing ones."""
        attribute = XmlNode(NodeType.ATTRIBUTE, name, content=value, parent=self)
        self.attributes.insert(0, attribute)
        return attribute

    def add_text(self, text: str) -> "XmlNode":
        """Append a text child holding ``text``."""
        return self.add_child(XmlNode(NodeType.TEXT, content=text))

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.content
        return None


def create_document() -> XmlNode:
    """Create an empty document root."""
    return XmlNode(NodeType.EMPTY, ROOT_NAME)


def create_element(parent: Optional[XmlNode], name: str) -> XmlNode:
    """Create an element, attaching it to ``parent`` when one is given."""
    element = XmlNode(NodeType.ELEMENT, name)
    if parent is not None:
        parent.add_child(element)
    return element


def nodeset_copy(source: Iterable[XmlNode]) -> list[XmlNode]:
    """Copy a selection, numbering the copies from 1.

    The copies share children and attributes with the nodes they copy.
    """
    return [
        XmlNode(
            node.type,
            node.name,
            content=node.content,
            parent=node.parent,
            children=node.children,
            attributes=node.attributes,
            position=position,
            order=node.order,
            original=node.original,
        )
        for position, node in enumerate(source, 1)
    ]


def is_node_parallel(node: XmlNode) -> bool:
    """Tell whether an element sibling follows ``node``."""
    if node.type is NodeType.TEXT or node.parent is None:
        return False
    siblings = node.parent.children
    index = next((i for i, s in enumerate(siblings) if s is node), None)
    if index is None:
        return False
    return any(s.type is NodeType.ELEMENT for s in siblings[index + 1:])


def string_value(node: Optional[XmlNode]) -> Optional[str]:
    """Return the text value of a node: its descendant text for elements."""
    if node is None:
        return None
    if node.type in (NodeType.ELEMENT, NodeType.EMPTY):
        return "".join(_texts(node))
    return node.content or ""


def _texts(node: XmlNode) -> Iterable[str]:
    for child in node.children:
        if child.type is NodeType.TEXT:
            yield child.content or ""
        elif child.type in (NodeType.ELEMENT, NodeType.EMPTY):
            yield from _texts(child)


def compare_strings(left: Optional[str], right: Optional[str]) -> int:
    """Compare two strings where ``None`` sorts before any string."""
    if left is right:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    return (left > right) - (left < right)


def process_string(
    text: Optional[str], evaluate: Callable[[str], Optional[str]]
) -> Optional[str]:
    """Expand ``{expression}`` parts of an attribute value template.

    ``{{`` and ``}}`` stand for literal braces.
    """
    if text is None:
        return None
    if "{" not in text and "}" not in text:
        return text

    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "{":
            i += 1
            if i < n and text[i] == "{":
                out.append("{")
                i += 1
                continue
            close = text.find("}", i)
            expression = text[i:] if close < 0 else text[i:close]
            value = evaluate(expression)
            if value is not None:
                out.append(value)
            if close < 0:
                break
            i = close + 1
        else:
            if ch == "}" and text[i + 1:i + 2] == "}":
                i += 1
            out.append(text[i])
            i += 1
    return "".join(out)