"""String functions of the expression language, working on plain Python strings."""

from __future__ import annotations

import math
import string
from typing import Optional

_WHITESPACE = frozenset(" \t\r\n")
_URL_SAFE = frozenset((string.ascii_letters + string.digits + "-._~").encode("ascii"))
_JS_ESCAPED = frozenset("'\"\\/")


def _url_encode(text: str) -> str:
    parts: list[str] = []
    for byte in text.encode("utf-8"):
        if byte in _URL_SAFE:
            parts.append(chr(byte))
        else:
            parts.append(f"%{byte:02X}")
    return "".join(parts)


def _js_escape(text: str) -> str:
    parts: list[str] = []
    for char in text:
        if char in _JS_ESCAPED:
            parts.append("\\" + char)
        elif char in "\r\n":
            parts.append("\\n")
        else:
            parts.append(char)
    return "".join(parts)


def str_escape(text: Optional[str], mode: Optional[str] = "js") -> Optional[str]:
    """Escape ``text`` for a JavaScript string (``"js"``) or a URL (``"url"``).

    Any other mode gives ``None``.
    """
    if text is None:
        return None
    if mode == "js":
        return _js_escape(text)
    if mode == "url":
        return _url_encode(text)
    return None


def substring(
    text: Optional[str], start: float, length: Optional[float] = None
) -> Optional[str]:
    """Return the characters of ``text`` from 1-based ``start`` on.

    Both numbers are rounded down; a negative ``length`` gives ``None``.
    """
    if text is None:
        return None
    if length is not None:
        if math.isnan(length):
            return ""
        if not math.isinf(length):
            length = math.floor(length)
        if length < 0:
            return None
    if math.isnan(start):
        return ""
    first = start if math.isinf(start) else math.floor(start)
    end = math.inf if length is None else first + length
    return "".join(
        char for position, char in enumerate(text, 1) if first <= position < end
    )


def translate(
    text: Optional[str], source: Optional[str], replacement: Optional[str]
) -> Optional[str]:
    """Replace characters of ``source`` with those at the same place in ``replacement``.

    Characters of ``source`` with no counterpart are removed. Every character
    of ``source`` is checked in turn against the character as replaced so far.
    """
    if text is None or source is None or replacement is None:
        return None
    out: list[str] = []
    for char in text:
        value: Optional[str] = char
        for index, pattern in enumerate(source):
            if value == pattern:
                value = replacement[index] if index < len(replacement) else None
        if value is not None:
            out.append(value)
    return "".join(out)


def normalize_space(text: Optional[str]) -> Optional[str]:
    """Strip leading and trailing white space and keep one character of each inner run."""
    if text is None:
        return None
    out: list[str] = []
    previous_space = False
    for char in text:
        is_space = char in _WHITESPACE
        if is_space and (previous_space or not out):
            previous_space = True
            continue
        out.append(char)
        previous_space = is_space
    while out and out[-1] in _WHITESPACE:
        out.pop()
    return "".join(out)


def string_length(text: Optional[str]) -> int:
    """Return the number of characters of ``text``; zero for ``None``."""
    return 0 if text is None else len(text)


def substring_before(text: Optional[str], pattern: Optional[str]) -> Optional[str]:
    """Return the part of ``text`` before the first ``pattern``, or ``None``."""
    if text is None or not pattern:
        return None
    index = text.find(pattern)
    return None if index < 0 else text[:index]


def substring_after(text: Optional[str], pattern: Optional[str]) -> Optional[str]:
    """Return the part of ``text`` after the first ``pattern``, or ``None``."""
    if text is None or not pattern:
        return None
    index = text.find(pattern)
    return None if index < 0 else text[index + len(pattern):]


def contains(text: Optional[str], pattern: Optional[str]) -> bool:
    """Tell whether ``pattern`` occurs in ``text``."""
    return text is not None and pattern is not None and pattern in text


def starts_with(text: Optional[str], pattern: Optional[str]) -> bool:
    """Tell whether ``text`` begins with ``pattern``."""
    return text is not None and pattern is not None and text.startswith(pattern)


def concat(*args: Optional[str]) -> Optional[str]:
    """Join the given strings, skipping ``None``; ``None`` if every one is ``None``."""
    present = [arg for arg in args if arg is not None]
    if not present:
        return None
    return "".join(present)


def local_name(name: Optional[str]) -> str:
    """Return ``name`` without its namespace prefix; empty for ``None``."""
    if name is None:
        return ""
    _, sep, rest = name.partition(":")
    return rest if sep else name