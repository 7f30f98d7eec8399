"""Serialisation of document trees to XML or HTML text."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Union

from .nodes import NodeType, XmlNode

logger = logging.getLogger(__name__)

_HTML_EMPTY_TAGS = frozenset({"img", "meta", "hr", "br", "link", "input"})


class OutputMode(Enum):
    """How elements are written out."""

    XML = auto()
    HTML = auto()


@dataclass(frozen=True)
class OutputSettings:
    """Options that control serialisation."""

    mode: OutputMode = OutputMode.XML
    omit_declaration: bool = False
    encoding: Optional[str] = None
    standalone: bool = False
    doctype_public: Optional[str] = None
    doctype_system: Optional[str] = None


def quote_text(text: str) -> str:
    """Escape ``<``, ``>`` and ``&`` (unless it starts a character reference)."""
    parts: list[str] = []
    for index, char in enumerate(text):
        if char == "<":
            parts.append("&lt;")
        elif char == ">":
            parts.append("&gt;")
        elif char == "&" and text[index + 1:index + 2] != "#":
            parts.append("&amp;")
        else:
            parts.append(char)
    return "".join(parts)


def quote_attribute(value: Optional[str]) -> str:
    """Escape an attribute value, including double quotes."""
    if value is None:
        return ""
    return quote_text(value).replace('"', "&quot;")


def _first_element(nodes: Iterable[XmlNode]) -> Optional[XmlNode]:
    for node in nodes:
        if node.type is NodeType.ELEMENT:
            return node
        found = _first_element(node.children)
        if found is not None:
            return found
    return None


def _write(nodes: Iterable[XmlNode], out: list[str], settings: OutputSettings, raw: bool) -> None:
    html = settings.mode is OutputMode.HTML
    for node in nodes:
        kind = node.type
        if kind is NodeType.ELEMENT:
            name = node.name or ""
            out.append("<" + name)
            for attribute in node.attributes:
                out.append(f' {attribute.name or ""}="{quote_attribute(attribute.content)}"')
            if html and name in _HTML_EMPTY_TAGS:
                out.append(">")
            elif node.children:
                out.append(">")
                child_raw = raw or (html and name == "script")
                _write(node.children, out, settings, child_raw)
                out.append(f"</{name}>")
            elif settings.mode is OutputMode.XML:
                out.append("/>")
            else:
                out.append(f"></{name}>")
        elif kind is NodeType.COMMENT:
            out.append("<!--" + (node.content or "") + "-->")
        elif kind is NodeType.PI:
            out.append("<?" + (node.name or ""))
            if node.content is not None:
                out.append(" " + node.content)
            out.append(">")
        elif kind is NodeType.TEXT:
            if node.cdata:
                out.append("<![CDATA[")
            if node.content is not None:
                out.append(node.content if node.no_escape or raw else quote_text(node.content))
            if node.cdata:
                out.append("]]>")
        else:
            _write(node.children, out, settings, raw)


def serialize(
    tree: Union[XmlNode, Iterable[XmlNode], None],
    settings: Optional[OutputSettings] = None,
) -> str:
    """Return the text of ``tree`` (a node or a sequence of sibling nodes)."""
    settings = settings or OutputSettings()
    if tree is None:
        nodes: list[XmlNode] = []
    elif isinstance(tree, XmlNode):
        nodes = [tree]
    else:
        nodes = list(tree)

    out: list[str] = []
    if settings.mode is OutputMode.XML and not settings.omit_declaration:
        out.append('<?xml version="1.0"')
        if settings.encoding:
            out.append(' encoding="UTF-8"')
        if settings.standalone:
            out.append(' standalone="yes"')
        out.append("?>\n")

    if settings.doctype_public and settings.doctype_system:
        if _first_element(nodes) is not None:
            out.append(
                f'<!DOCTYPE html PUBLIC "{settings.doctype_public}" "{settings.doctype_system}">\n'
            )
        else:
            logger.error("first node not found")

    _write(nodes, out, settings, raw=False)
    return "".join(out)


def write_file(
    tree: Union[XmlNode, Iterable[XmlNode], None],
    path: Union[str, os.PathLike],
    settings: Optional[OutputSettings] = None,
) -> None:
    """Serialise ``tree`` into the file at ``path``, ending with a newline."""
    text = serialize(tree, settings)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
        handle.write("\n")