import pytest

from turboxsl.nodes import ROOT_NAME, NodeType, create_element
from turboxsl.parser import (
    ParseError,
    add_child_from_string,
    parse_file,
    parse_string,
    unescape,
)


def test_unescape_named_entities():
    assert unescape("&lt;&gt;&amp;&quot;&apos;") == "<>&\"'"


def test_unescape_numeric_entities():
    assert unescape("&#65;") == chr(65)
    assert unescape("&#x41;&#X42;") == chr(0x41) + chr(0x42)


def test_unescape_unknown_entity_is_kept():
    assert unescape("a&foo;b") == "a&foo;b"


def test_unescape_invalid_numeric_entity():
    assert unescape("&#12x") == "?x"


def test_unescape_without_entities_is_identity():
    assert unescape("plain text") == "plain text"


def test_parse_builds_tree():
    root = parse_string("<a><b>hi</b><c/></a>")
    assert root.name == ROOT_NAME and root.type is NodeType.EMPTY
    [a] = root.children
    assert a.name == "a" and a.parent is root
    assert [n.name for n in a.children] == ["b", "c"]
    b = a.children[0]
    assert b.children[0].type is NodeType.TEXT
    assert b.children[0].content == "hi"


def test_parse_attributes_are_in_reverse_order_and_unescaped():
    root = parse_string("<e one='1' two=\"a&amp;b\" three=`x`/>")
    element = root.children[0]
    assert [a.name for a in element.attributes] == ["three", "two", "one"]
    assert element.get_attribute("two") == "a&b"
    assert element.get_attribute("one") == "1"
    assert all(a.parent is element for a in element.attributes)


def test_parse_text_is_unescaped():
    root = parse_string("<p>1 &lt; 2</p>")
    assert root.children[0].children[0].content == unescape("1 &lt; 2")


def test_parse_cdata_is_raw_and_unescaped_flag():
    root = parse_string("<p><![CDATA[<b>&amp;</b>]]></p>")
    text = root.children[0].children[0]
    assert text.content == "<b>&amp;</b>"
    assert text.no_escape is True


def test_parse_skips_declaration_and_comments():
    root = parse_string('<?xml version="1.0"?><!-- note --><r>x</r>')
    assert [n.name for n in root.children] == ["r"]
    assert root.children[0].children[0].content == "x"


def test_parse_positions_skip_text_nodes():
    root = parse_string("<r><a/>t<b/>u<c/></r>")
    r = root.children[0]
    elements = [n for n in r.children if n.type is NodeType.ELEMENT]
    assert [n.position for n in elements] == [1, 2, 3]
    assert r.position == 1


def test_parse_line_numbers():
    root = parse_string("<a>\n<b/></a>", uri="doc.xml")
    a = root.children[0]
    b = [n for n in a.children if n.type is NodeType.ELEMENT][0]
    assert a.line == 0
    assert b.line == 1
    assert b.file == "doc.xml"


def test_parse_mismatched_close_raises():
    with pytest.raises(ParseError):
        parse_string("<a><b></c></a>")


def test_parse_unknown_instruction_raises():
    with pytest.raises(ParseError):
        parse_string("<!FOO><a/>")


def test_parse_unquoted_attribute_raises():
    with pytest.raises(ParseError):
        parse_string("<a b=c/>")


def test_parse_empty_string_raises():
    with pytest.raises(ParseError):
        parse_string("")


def test_parse_closing_without_open_raises():
    with pytest.raises(ParseError):
        parse_string("<a/></a>")


def test_parse_file(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text("<root><item>v</item></root>", encoding="utf-8")
    root = parse_file(path)
    assert root.file == str(path)
    assert root.children[0].children[0].name == "item"


def test_parse_file_empty_raises(tmp_path):
    path = tmp_path / "empty.xml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ParseError):
        parse_file(path)


def test_parse_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        parse_file(tmp_path / "missing.xml")


def test_add_child_from_string_moves_nodes():
    element = create_element(None, "host")
    add_child_from_string(element, "<x/><y/>")
    assert [n.name for n in element.children] == ["x", "y"]
    assert all(n.parent is element for n in element.children)


def test_add_child_from_string_empty_does_nothing():
    element = create_element(None, "host")
    add_child_from_string(element, "")
    add_child_from_string(element, None)
    assert element.children == []