"""A small, forgiving XML parser producing :class:`XmlNode` trees."""

from __future__ import annotations

import logging
import os
import re
import string
from enum import Enum, auto
from typing import Optional, Union

from .nodes import ROOT_NAME, NodeType, XmlNode

logger = logging.getLogger(__name__)

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "-_:")
_WHITESPACE = frozenset(" \t\r\n")
_NAMED_ENTITIES = (
    ("amp;", "&"),
    ("quot;", '"'),
    ("lt;", "<"),
    ("gt;", ">"),
    ("apos;", "'"),
)
_DECIMAL = re.compile(r"[0-9]*")
_HEXADECIMAL = re.compile(r"[0-9A-Fa-f]*")


class ParseError(ValueError):
    """Raised when a document cannot be parsed."""


def _code_point(value: int) -> str:
    return chr(value) if 0 < value < 0x110000 else ""


def _decode_entity(text: str, pos: int) -> tuple[str, int]:
    """Decode the entity starting right after ``&``; return it and the new position."""
    if text.startswith("#", pos):
        pos += 1
        if text[pos:pos + 1] in ("x", "X"):
            match = _HEXADECIMAL.match(text, pos + 1)
            value = int(match.group() or "0", 16)
        else:
            match = _DECIMAL.match(text, pos)
            value = int(match.group() or "0")
        pos = match.end()
        if text.startswith(";", pos):
            return _code_point(value), pos + 1
        logger.error("invalid numeric entity")
        return "?", pos
    for name, char in _NAMED_ENTITIES:
        if text.startswith(name, pos):
            return char, pos + len(name)
    logger.error("unknown entity &%s", text[pos:pos + 3])
    return "&", pos


def unescape(text: str) -> str:
    """Replace character and entity references in ``text``."""
    parts: list[str] = []
    pos = 0
    while True:
        amp = text.find("&", pos)
        if amp < 0:
            parts.append(text[pos:])
            return "".join(parts)
        parts.append(text[pos:amp])
        char, pos = _decode_entity(text, amp + 1)
        parts.append(char)


class _State(Enum):
    INIT = auto()
    OPEN = auto()
    CLOSE = auto()
    COMMENT = auto()
    TEXT = auto()
    XMLDECL = auto()
    INSIDE_TAG = auto()
    ATTR_VALUE = auto()
    CDATA = auto()
    DOCTYPE = auto()


class _Parser:
    def __init__(self, text: str, uri: str) -> None:
        self.text = text
        self.uri = uri
        self.pos = 0
        self.line = 0
        self.root = XmlNode(NodeType.EMPTY, ROOT_NAME, file=uri)
        self.parent = self.root
        self.current: Optional[XmlNode] = None
        self.attribute: Optional[XmlNode] = None
        self.handlers = {
            _State.INIT: self._init,
            _State.OPEN: self._open,
            _State.CLOSE: self._close,
            _State.COMMENT: self._comment,
            _State.TEXT: self._text,
            _State.XMLDECL: self._xml_declaration,
            _State.INSIDE_TAG: self._inside_tag,
            _State.ATTR_VALUE: self._attribute_value,
            _State.CDATA: self._cdata,
            _State.DOCTYPE: self._doctype,
        }

    def parse(self) -> XmlNode:
        state = _State.INIT
        while self.pos < len(self.text):
            state = self.handlers[state]()
        _renumber([self.root])
        return self.root

    def _advance_to(self, index: int) -> None:
        self.line += self.text.count("\n", self.pos, index)
        self.pos = index

    def _skip_spaces(self) -> None:
        text = self.text
        start = self.pos
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1
        self.line += text.count("\n", start, self.pos)

    def _read_name(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _NAME_CHARS:
            self.pos += 1
        return self.text[start:self.pos]

    def _add_text(self, content: str, no_escape: bool) -> None:
        node = XmlNode(
            NodeType.TEXT, content=content, no_escape=no_escape, file=self.uri, line=self.line
        )
        self.parent.add_child(node)

    def _init(self) -> _State:
        index = self.text.find("<", self.pos)
        if index < 0:
            self._advance_to(len(self.text))
            return _State.INIT
        self._advance_to(index)
        self.pos += 1
        return _State.OPEN

    def _xml_declaration(self) -> _State:
        index = self.text.find("?>", self.pos)
        if index < 0:
            raise ParseError("unterminated declaration")
        self.pos = index + 2
        return _State.INIT

    def _comment(self) -> _State:
        index = self.text.find("-->", self.pos)
        if index < 0:
            self._advance_to(len(self.text))
            return _State.COMMENT
        self._advance_to(index)
        self.pos += 3
        return _State.TEXT

    def _open(self) -> _State:
        text, pos = self.text, self.pos
        if text.startswith("?", pos):
            self.pos += 1
            return _State.XMLDECL
        if text.startswith("!--", pos):
            self.pos += 3
            return _State.COMMENT
        if text.startswith("![CDATA[", pos):
            self.pos += 8
            return _State.CDATA
        if text.startswith("!DOCTYPE", pos):
            self.pos += 8
            return _State.DOCTYPE
        if text.startswith("!", pos):
            raise ParseError("unknown instruction")
        if text.startswith("/", pos):
            self.pos += 1
            return _State.CLOSE
        self._skip_spaces()
        name = self._read_name()
        element = XmlNode(NodeType.ELEMENT, name, file=self.uri, line=self.line)
        self.parent.add_child(element)
        self.current = element
        self._skip_spaces()
        return _State.INSIDE_TAG

    def _close(self) -> _State:
        self._skip_spaces()
        name = self._read_name()
        if self.parent is self.root:
            raise ParseError(f"closing tag </{name}> without an open element")
        if not (self.parent.name or "").startswith(name):
            raise ParseError(f"closing tag mismatch <{self.parent.name}> </{name}>")
        index = self.text.find(">", self.pos)
        if index < 0:
            raise ParseError(f"unterminated closing tag </{name}>")
        self.pos = index + 1
        self.parent = self.parent.parent
        return _State.TEXT

    def _inside_tag(self) -> _State:
        text = self.text
        if text.startswith(">", self.pos):
            self.pos += 1
            self.parent = self.current
            self.current = None
            return _State.TEXT
        if text.startswith("/>", self.pos):
            self.pos += 2
            return _State.TEXT
        start = self.pos
        self._skip_spaces()
        name = self._read_name()
        attribute = self.current.add_attribute(name, None)
        attribute.file = self.uri
        attribute.line = self.line
        self.attribute = attribute
        self._skip_spaces()
        if text.startswith("=", self.pos):
            self.pos += 1
            self._skip_spaces()
            return _State.ATTR_VALUE
        if self.pos == start:
            raise ParseError(f"unexpected character {text[start]!r} in tag <{self.current.name}>")
        return _State.INSIDE_TAG

    def _attribute_value(self) -> _State:
        quote = self.text[self.pos]
        if quote not in "\"'`":
            raise ParseError(f"attribute {self.attribute.name} value is not quoted")
        end = self.text.find(quote, self.pos + 1)
        if end < 0:
            raise ParseError(f"unterminated value of attribute {self.attribute.name}")
        self.attribute.content = unescape(self.text[self.pos + 1:end])
        self.pos = end + 1
        self._skip_spaces()
        return _State.INSIDE_TAG

    def _cdata(self) -> _State:
        index = self.text.find("]]>", self.pos)
        end = len(self.text) if index < 0 else index
        start = self.pos
        self.line += self.text.count("\n", start, end)
        if end > start:
            self._add_text(self.text[start:end], no_escape=True)
            self.pos = end + 3
        return _State.TEXT

    def _doctype(self) -> _State:
        index = self.text.find("]>", self.pos)
        if index < 0:
            raise ParseError("unterminated DOCTYPE")
        self.pos = index + 2
        return _State.TEXT

    def _text(self) -> _State:
        index = self.text.find("<", self.pos)
        if index < 0:
            index = len(self.text)
        start = self.pos
        if index > start:
            self._advance_to(index)
            self._add_text(unescape(self.text[start:index]), no_escape=False)
        return _State.INIT


def _renumber(nodes: list[XmlNode]) -> None:
    position = 1
    for node in nodes:
        if node.type is NodeType.TEXT:
            continue
        node.position = position
        position += 1
        if node.children:
            _renumber(node.children)


def parse_string(text: str, uri: str = "(string)") -> XmlNode:
    """Parse a document held in a string and return its root."""
    if not text:
        raise ParseError("empty string")
    return _Parser(text, uri).parse()


def parse_file(path: Union[str, os.PathLike]) -> XmlNode:
    """Parse a document stored in a file and return its root."""
    filename = os.fspath(path)
    with open(filename, encoding="utf-8") as handle:
        text = handle.read()
    if not text:
        raise ParseError("empty file")
    return _Parser(text, filename).parse()


def add_child_from_string(element: XmlNode, text: Optional[str]) -> None:
    """Parse ``text`` and move its top-level nodes under ``element``."""
    if not text:
        return
    root = parse_string(text)
    for child in list(root.children):
        element.add_child(child)
    root.children.clear()