import math
from urllib.parse import unquote

import pytest

from turboxsl.string_functions import (
    concat,
    contains,
    local_name,
    normalize_space,
    starts_with,
    str_escape,
    string_length,
    substring,
    substring_after,
    substring_before,
    translate,
)


def test_str_escape_js_quotes_and_slashes():
    assert str_escape("a'b", "js") == "a\\'b"
    assert str_escape('"/\\', "js") == '\\"\\/\\\\'


def test_str_escape_js_newlines():
    assert str_escape("a\r\nb") == "a\\n\\nb"


def test_str_escape_default_is_js():
    assert str_escape("x/y") == str_escape("x/y", "js")


def test_str_escape_url_round_trip():
    text = "hello world/ä?&=~"
    encoded = str_escape(text, "url")
    assert unquote(encoded) == text
    assert " " not in encoded


def test_str_escape_url_keeps_safe_characters():
    safe = "Az09-._~"
    assert str_escape(safe, "url") == safe


def test_str_escape_unknown_mode_and_none():
    assert str_escape("abc", "html") is None
    assert str_escape(None, "js") is None


def test_substring_without_length():
    assert substring("12345", 2) == "2345"


def test_substring_with_length():
    assert substring("12345", 2, 3) == "234"


def test_substring_rounds_down():
    assert substring("12345", 2.7, 2.9) == substring("12345", 2, 2)


def test_substring_negative_length_is_none():
    assert substring("12345", 1, -1) is None


def test_substring_none_and_nan():
    assert substring(None, 1) is None
    assert substring("abc", math.nan) == ""


def test_substring_unicode_characters():
    text = "привет"
    assert substring(text, 3) == text[2:]


def test_translate_replaces_characters():
    assert translate("bar", "abc", "ABC") == "BAr"


def test_translate_removes_missing_replacements():
    assert translate("--aaa--", "abc-", "ABC") == "AAA"


def test_translate_none_arguments():
    assert translate(None, "a", "b") is None
    assert translate("a", None, "b") is None
    assert translate("a", "a", None) is None


def test_translate_identity():
    assert translate("hello", "", "") == "hello"


def test_normalize_space_collapses():
    assert normalize_space("  a   b  c  ") == "a b c"


def test_normalize_space_keeps_first_whitespace_of_run():
    assert normalize_space("a\t  b") == "a\tb"


def test_normalize_space_all_whitespace_and_none():
    assert normalize_space(" \n\t ") == ""
    assert normalize_space(None) is None


def test_string_length_counts_characters():
    text = "ёжик"
    assert string_length(text) == len(text)
    assert string_length(None) == 0


def test_substring_before_and_after():
    text = "1999/04/01"
    assert substring_before(text, "/") == "1999"
    assert substring_after(text, "/") == "04/01"


def test_substring_before_after_missing():
    assert substring_before("abc", "x") is None
    assert substring_after("abc", "x") is None
    assert substring_before("abc", "") is None
    assert substring_after(None, "a") is None


def test_substring_before_after_join_back():
    text, pattern = "key=value=more", "="
    assert substring_before(text, pattern) + pattern + substring_after(text, pattern) == text


def test_contains_and_starts_with():
    assert contains("abcdef", "cd") is True
    assert contains("abcdef", "x") is False
    assert contains(None, "a") is False
    assert starts_with("abcdef", "ab") is True
    assert starts_with("abcdef", "bc") is False
    assert starts_with("abc", None) is False


def test_empty_pattern_is_found():
    assert contains("abc", "") is True
    assert starts_with("abc", "") is True


def test_concat_joins():
    assert concat("a", "b", "c") == "abc"


def test_concat_skips_none():
    assert concat(None, "a", None, "b") == "ab"
    assert concat(None, None) is None
    assert concat() is None


def test_local_name():
    assert local_name("xsl:template") == "template"
    assert local_name("template") == "template"
    assert local_name(None) == ""
    assert local_name("a:b:c") == "b:c"