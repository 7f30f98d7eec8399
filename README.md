# turboxsl

Building blocks for a small XML/XSLT processor, in pure Python with no
third-party dependencies.

## What is inside

- `turboxsl.nodes` — the document tree: `XmlNode` (with `add_child`,
  `append_child`, `unlink`, `add_attribute`, `add_text`, `get_attribute`) and
  `NodeType`; `create_document`, `create_element`, `nodeset_copy`,
  `is_node_parallel`, `string_value`, `compare_strings`, and
  `process_string`, which expands `{expression}` parts of an attribute value
  template through a callback you supply (`{{` and `}}` are literal braces).
- `turboxsl.parser` — a forgiving XML parser: `parse_string`, `parse_file`,
  `add_child_from_string`, and `unescape` for character and entity
  references. Malformed input raises `ParseError`.
- `turboxsl.output` — serialization to XML or HTML text with `serialize` and
  `write_file`, controlled by `OutputSettings` (mode, XML declaration,
  encoding, standalone, doctype) and `OutputMode`; `quote_text` and
  `quote_attribute` do the escaping. In HTML mode `img`, `meta`, `hr`, `br`,
  `link` and `input` are written without a closing tag and the content of
  `script` is not escaped.
- `turboxsl.sync` — `SharedCounter`, a counter starting at one whose `wait`
  blocks until it reaches zero, and `ConcurrentDictionary`, an insert-only
  dictionary with locked `add` and unlocked `find`.
- `turboxsl.task_graph` — `TaskGraph`, which records serial and parallel edges
  between tasks (each thread has its own current task, set with
  `set_current`), and builds (`to_graphml`) or writes (`save`) a GraphML
  document; `edge_name` labels an edge from an instruction and its `fork`
  attribute.
- `turboxsl.localization` — PO files: `parse_po`, `Catalog` (`get`,
  `get_plural`), `Localization.load` which caches each file's catalog, and
  `plural_index` with rules for `ru_RU`, `uk_UA`, `pl_PL`, `en_US`, `et_EE`,
  `de_DE`, `es_ES`, `az_AZ` and `uz_UZ`. Problems raise `LocalizationError`.
- `turboxsl.group_rights` — `RightsRegistry`: `define_group` assigns actions
  to a group of a library, `user_rights` returns the actions a set of groups
  grants. An unknown library raises `UnknownLibraryError`; unknown groups are
  skipped.
- `turboxsl.digest` — `md5_digest`, `signature_to_string`,
  `signature_from_string` and `md5_hex`.
- `turboxsl.string_functions` — expression-language string functions on
  plain strings: `str_escape` (`"js"` or `"url"` mode), `substring`,
  `translate`, `normalize_space`, `string_length`, `substring_before`,
  `substring_after`, `contains`, `starts_with`, `concat`, `local_name`.
- `turboxsl.formatting` — `format_number` with `DecimalFormat` (raising
  `FormatError` for patterns it cannot handle, such as percent or a pattern
  separator), `url_encode`, `veristat_url` and `localize` for `{name}`
  placeholders.

## Example

```python
from turboxsl.parser import parse_string
from turboxsl.output import OutputMode, OutputSettings, serialize

doc = parse_string("<p class='x'>a &amp; b<br/></p>")
print(serialize(doc, OutputSettings(mode=OutputMode.HTML)))
# <p class="x">a &amp; b<br></p>
```

```python
from turboxsl.formatting import format_number

format_number(1234.5, "#,##0.00")   # '1,234.50'
```

## What it does not do

There is no XPath expression evaluator and no XSLT transformation engine:
the package has no way to compile or run a stylesheet, so `process_string`
takes the evaluation as a callback. It has no task runner either;
`TaskGraph` and `SharedCounter` only record and coordinate work that your
own code schedules. There is no command-line program.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```