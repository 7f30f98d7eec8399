"""Message catalogs read from PO files, with per-language plural rules."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .parser import unescape

logger = logging.getLogger(__name__)


class LocalizationError(Exception):
    """Raised when a catalog cannot be loaded."""


def _cmod(n: int, m: int) -> int:
    r = abs(n) % m
    return -r if n < 0 else r


def _plural_slavic(n: int) -> int:
    if _cmod(n, 10) == 1 and _cmod(n, 100) != 11:
        return 0
    if 2 <= _cmod(n, 10) <= 4 and (_cmod(n, 100) < 10 or _cmod(n, 100) >= 20):
        return 1
    return 2


def _plural_polish(n: int) -> int:
    if n == 1:
        return 0
    if 2 <= _cmod(n, 10) <= 4 and (_cmod(n, 100) < 10 or _cmod(n, 100) >= 20):
        return 1
    return 2


def _plural_two_forms(n: int) -> int:
    return int(n != 1)


_PLURAL_RULES: dict[str, Callable[[int], int]] = {
    "ru_RU": _plural_slavic,
    "en_US": _plural_two_forms,
    "et_EE": _plural_two_forms,
    "pl_PL": _plural_polish,
    "de_DE": _plural_two_forms,
    "es_ES": _plural_two_forms,
    "uk_UA": _plural_slavic,
    "az_AZ": _plural_two_forms,
    "uz_UZ": _plural_two_forms,
}


def plural_index(language: str, n: int) -> int:
    """Return the plural form index for ``n`` in ``language``."""
    try:
        rule = _PLURAL_RULES[language]
    except KeyError:
        raise LocalizationError(f"unknown language: {language}") from None
    return rule(int(n))


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\", "a": "\a", "b": "\b", "f": "\f", "v": "\v"}
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
_KEYWORD = re.compile(r'^(msgctxt|msgid_plural|msgid|msgstr(?:\[(\d+)\])?)\s+(".*")\s*$')
_STRING = re.compile(r'^"(.*)"$')


def _po_string(literal: str, line_number: int) -> str:
    match = _STRING.match(literal.strip())
    if match is None:
        raise LocalizationError(f"line {line_number}: malformed string")
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), match.group(1))


def parse_po(text: str) -> list[tuple[str, str, tuple[str, ...]]]:
    """Parse PO text into ``(msgid, msgstr, plural_forms)`` tuples in file order.

    ``msgstr`` is empty for plural messages; ``plural_forms`` is empty otherwise.
    """
    messages: list[tuple[str, str, tuple[str, ...]]] = []
    entry: dict[str, object] = {}
    target: Optional[tuple[str, Optional[int]]] = None

    def finish() -> None:
        nonlocal entry, target
        if "msgid" in entry:
            plurals = entry.get("plurals", {})
            assert isinstance(plurals, dict)
            forms = tuple(plurals[i] for i in sorted(plurals))
            messages.append((str(entry["msgid"]), str(entry.get("msgstr", "")), forms))
        entry = {}
        target = None

    for line_number, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            finish()
            continue
        if line.startswith("#"):
            continue
        if line.startswith('"'):
            if target is None:
                raise LocalizationError(f"line {line_number}: unexpected string")
            value = _po_string(line, line_number)
            name, index = target
            if index is None:
                entry[name] = str(entry[name]) + value
            else:
                plurals = entry["plurals"]
                assert isinstance(plurals, dict)
                plurals[index] += value
            continue
        match = _KEYWORD.match(line)
        if match is None:
            raise LocalizationError(f"line {line_number}: unexpected line: {line}")
        keyword, index_text, literal = match.groups()
        value = _po_string(literal, line_number)
        if keyword in ("msgctxt", "msgid") and ("msgstr" in entry or "plurals" in entry):
            finish()
        if keyword.startswith("msgstr["):
            index = int(index_text)
            plurals = entry.setdefault("plurals", {})
            assert isinstance(plurals, dict)
            plurals[index] = value
            target = ("plurals", index)
        else:
            entry[keyword] = value
            target = (keyword, None)
    finish()
    return messages


def _header_field(header: str, name: str) -> Optional[str]:
    for line in header.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == name:
            return value.strip()
    return None


@dataclass
class Catalog:
    """The translations of one PO file."""

    language: str
    messages: dict[str, tuple[str, tuple[str, ...]]] = field(default_factory=dict)

    def get(self, msgid: str) -> Optional[str]:
        """Return the translation of ``msgid``, or ``None`` if it is unknown."""
        message = self.messages.get(msgid)
        if message is None:
            logger.debug("unknown message id: %s", msgid)
            return None
        return message[0]

    def get_plural(self, msgid: str, n: int) -> Optional[str]:
        """Return the plural form of ``msgid`` suited to ``n``, or ``None``."""
        message = self.messages.get(msgid)
        if message is None:
            logger.debug("unknown message id: %s", msgid)
            return None
        forms = message[1]
        index = plural_index(self.language, n)
        return forms[index] if 0 <= index < len(forms) else None


class Localization:
    """Loads catalogs, keeping each file's catalog once loaded."""

    def __init__(self) -> None:
        self._cache: dict[str, Catalog] = {}

    def load(self, filename: Union[str, os.PathLike]) -> Catalog:
        """Return the catalog of ``filename``, reading the file the first time."""
        key = os.fspath(filename)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            with open(key, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise LocalizationError(f"couldn't open the PO file: {key}") from exc

        messages = parse_po(text)
        header = next((msgstr for msgid, msgstr, _ in messages if msgid == ""), None)
        if header is None:
            raise LocalizationError("header not found")
        language = _header_field(header, "Language")
        if language is None:
            raise LocalizationError("Language field not found")
        if language not in _PLURAL_RULES:
            raise LocalizationError(f"unknown language: {language}")

        table: dict[str, tuple[str, tuple[str, ...]]] = {}
        for msgid, msgstr, forms in messages:
            table.setdefault(unescape(msgid), (msgstr, forms))

        catalog = Catalog(language, table)
        self._cache[key] = catalog
        return catalog