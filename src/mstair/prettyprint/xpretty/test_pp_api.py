# File: src/mstair/prettyprint/xpretty/test_pp_api.py
"""
End-to-end tests for pp(), pp_chain(), pformat() and PrettyPrinter.

This module validates that rendering:

- Lays out sequences, mappings and composites one item per line
- Prints scalars by textual conversion and short strings inline
- Wraps long strings inside triple quotes
- Reports cycles once, with a single marker at the outer occurrence
- Raises instead of recursing without bound
- Never changes the defaults as a side effect of a call
"""

from __future__ import annotations

import contextvars
import dataclasses
import enum
import io
import logging
from collections import OrderedDict, deque
from decimal import Decimal
from pathlib import PurePosixPath
from typing import Any, NamedTuple

import pytest

from mstair.prettyprint.xpretty import model, pp_api, renderer
from mstair.prettyprint.xpretty.model import (
    FieldAccessError,
    PrettyConfig,
    PrettyConfigError,
    RenderDepthError,
)
from mstair.prettyprint.xpretty.pp_api import (
    PrettyPrinter,
    default_config_context,
    get_default_config,
    pformat,
    pp,
    pp_chain,
    reset_default_config,
    set_default_config,
)


JSON_LITERALS = ("null", "true", "false")


# == Fixtures ==


@pytest.fixture(autouse=True)
def fresh_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give each test its own defaults, built from an environment without PRETTYPRINT_* or .env."""
    monkeypatch.setattr(model, "fs_load_dotenv", lambda *a, **k: False)
    for name in ("PRETTYPRINT_INDENT", "PRETTYPRINT_WRAP_WIDTH", "PRETTYPRINT_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(pp_api, "_default_config", contextvars.ContextVar("test_defaults"))


@dataclasses.dataclass
class Point:
    x: int
    y: int
    label: str = dataclasses.field(default="", repr=False)


class Node:
    def __init__(self, name: str) -> None:
        self.name = name
        self.next: Node | None = None


class Fork:
    def __init__(self) -> None:
        self.a: Any = None
        self.b: Any = None


class Empty:
    pass


class HalfSlotted:
    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = 1


class Color(enum.Enum):
    RED = 1


class Pair(NamedTuple):
    left: int
    right: int


@pytest.fixture
def long_text() -> str:
    words = [f"word{i}" for i in range(40)] + ["x" * 95] + ["tail", "end"]
    return " ".join(words)


# == Layout ==


@pytest.mark.unit
def test_sequence_example_with_json_literals() -> None:
    buf = io.StringIO()
    pp([1, "ab", None], indent=2, write_to=buf, literals=JSON_LITERALS)
    assert buf.getvalue() == '[\n  1,\n  "ab",\n  null\n]\n'


@pytest.mark.unit
def test_mapping_example() -> None:
    assert pformat({"a": 1}) == '{\n  "a" -> 1\n}'


@pytest.mark.unit
def test_nested_containers_indent_relative_to_parent() -> None:
    expected = '{\n  "a" -> [\n    1,\n    None\n  ],\n  "b" -> {}\n}'
    assert pformat({"a": [1, None], "b": {}}) == expected


@pytest.mark.unit
def test_composite_fields_in_declaration_order() -> None:
    assert pformat(Point(1, 2, label="hidden")) == "Point(\n  x = 1,\n  y = 2\n)"


@pytest.mark.unit
def test_composite_nested_in_sequence() -> None:
    node = Node("a")
    expected = '[\n  Node(\n    name = "a",\n    next = None\n  )\n]'
    assert pformat([node]) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ([], "[]"),
        ({}, "{}"),
        ((), "[]"),
        (set(), "[]"),
        (Empty(), "Empty()"),
        (object(), "object()"),
    ],
)
def test_empty_blocks_collapse(value: Any, expected: str) -> None:
    assert pformat(value) == expected


@pytest.mark.unit
def test_indent_width_is_configurable() -> None:
    assert pformat([[1]], indent=4) == "[\n    [\n        1\n    ]\n]"


@pytest.mark.unit
def test_other_collections_render_as_sequences() -> None:
    assert pformat(deque([1, 2])) == "[\n  1,\n  2\n]"
    assert pformat(Pair(3, 4)) == "[\n  3,\n  4\n]"
    assert pformat(range(2)) == "[\n  0,\n  1\n]"
    assert pformat(OrderedDict(k=None)) == '{\n  "k" -> None\n}'


@pytest.mark.unit
def test_mapping_keys_are_rendered_recursively() -> None:
    assert pformat({(1,): "v"}) == '{\n  [\n    1\n  ] -> "v"\n}'


# == Scalars and text ==


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (42, "42"),
        (2.5, "2.5"),
        (Decimal("1.10"), "1.10"),
        (None, "None"),
        (True, "True"),
        (False, "False"),
        (Color.RED, "Color.RED"),
        (PurePosixPath("/tmp/x"), "/tmp/x"),
        (b"ab", "b'ab'"),
    ],
)
def test_scalars_use_textual_conversion(value: Any, expected: str) -> None:
    assert pformat(value) == expected


@pytest.mark.unit
def test_literals_replace_none_true_false() -> None:
    assert pformat([None, True, False, 0], literals=JSON_LITERALS) == (
        "[\n  null,\n  true,\n  false,\n  0\n]"
    )


@pytest.mark.unit
def test_short_text_is_quoted_inline() -> None:
    text = "y" * 80
    assert pformat(text) == f'"{text}"'
    assert pformat('say "hi"') == '"say "hi""'


@pytest.mark.unit
def test_long_text_is_wrapped_in_triple_quotes(long_text: str) -> None:
    result = pformat(long_text)
    assert result.startswith('"""\n')
    assert result.endswith('\n"""')

    lines = [line.removeprefix("  ") for line in result.splitlines()[1:-1]]
    assert " ".join(lines) == long_text
    assert all(len(line) <= 80 or " " not in line for line in lines)
    assert "x" * 95 in lines


@pytest.mark.unit
def test_long_text_inside_container_indents_with_it(long_text: str) -> None:
    result = pformat([long_text])
    lines = result.splitlines()
    assert lines[1] == '  """'
    assert all(line.startswith("    ") for line in lines[2:-2])
    assert lines[-2] == '  """'


# == Cycles ==


@pytest.mark.unit
def test_self_reference_is_reported_once() -> None:
    node = Node("a")
    node.next = node
    result = pformat(node)
    assert result.count("cyclic reference detected for") == 1
    assert result.count("[$id=") == 1
    assert result == (
        f'Node(\n  name = "a",\n  next = cyclic reference detected for {id(node)}\n)[$id={id(node)}]'
    )


@pytest.mark.unit
def test_repeated_back_references_share_one_marker() -> None:
    node = Fork()
    node.a = node
    node.b = node
    result = pformat(node)
    assert result.count("cyclic reference detected for") == 2
    assert result.count("[$id=") == 1
    assert result == (
        "Fork(\n"
        f"  a = cyclic reference detected for {id(node)},\n"
        f"  b = cyclic reference detected for {id(node)}\n"
        f")[$id={id(node)}]"
    )


@pytest.mark.unit
def test_deep_back_references_mark_only_the_ancestor() -> None:
    node = Fork()
    node.a = [node, {"again": node}]
    result = pformat(node)
    assert result.count("cyclic reference detected for") == 2
    assert result.count("[$id=") == 1
    assert result.endswith(f")[$id={id(node)}]")


@pytest.mark.unit
def test_indirect_cycle_through_containers() -> None:
    items: list[Any] = []
    holder = {"items": items}
    items.append(holder)
    result = pformat(items)
    assert result.count("cyclic reference detected for") == 1
    assert result.endswith(f"][$id={id(items)}]")


@pytest.mark.unit
def test_shared_value_in_siblings_is_not_a_cycle() -> None:
    shared = [1]
    result = pformat([shared, shared])
    assert "cyclic" not in result
    assert result.count("1") == 2


@pytest.mark.unit
def test_repeated_strings_are_not_tracked() -> None:
    text = "same"
    assert "cyclic" not in pformat([text, [text]])


# == Errors ==


@pytest.mark.unit
def test_nesting_beyond_max_depth_raises() -> None:
    value: list[Any] = []
    for _ in range(10):
        value = [value]
    with pytest.raises(RenderDepthError) as exc_info:
        pformat(value, max_depth=5)
    assert isinstance(exc_info.value, RecursionError)
    assert pformat(value, max_depth=11).count("[") == 11


@pytest.mark.unit
def test_unreadable_field_aborts_render() -> None:
    with pytest.raises(FieldAccessError, match=r"HalfSlotted\.b"):
        pformat({"k": HalfSlotted()})


@pytest.mark.unit
def test_unwritable_destination_is_rejected() -> None:
    with pytest.raises(TypeError, match="write"):
        pp([1], write_to=42)  # type: ignore[arg-type]


@pytest.mark.unit
@pytest.mark.parametrize(
    "changes",
    [{"indent": 0}, {"wrap_width": -1}, {"max_depth": 0}, {"literals": ("a", "b")}, {"color": 1}],
)
def test_invalid_options_raise_config_error(changes: dict[str, Any]) -> None:
    with pytest.raises(PrettyConfigError):
        pformat([1], **changes)
    with pytest.raises(ValueError):
        PrettyPrinter(**changes)


# == Output destinations ==


@pytest.mark.unit
def test_pp_writes_to_stdout_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    pp({"a": 1})
    assert capsys.readouterr().out == '{\n  "a" -> 1\n}\n'


@pytest.mark.unit
def test_pp_appends_to_list_destination() -> None:
    chunks: list[str] = []
    pp([], write_to=chunks)
    assert "".join(chunks) == "[]\n"
    assert chunks[-1] == "\n"


@pytest.mark.unit
def test_pp_chain_returns_value_unchanged() -> None:
    buf = io.StringIO()
    value = [1, 2]
    assert pp_chain(value, write_to=buf) is value
    assert buf.getvalue() == "[\n  1,\n  2\n]\n"


# == Logging ==


@pytest.mark.unit
def test_render_logs_are_prefixed_with_the_top_level_type(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger=renderer.__name__)

    def rendered_messages() -> list[str]:
        return [r.getMessage() for r in caplog.records if r.name == renderer.__name__]

    pformat([Point(1, 2)])
    assert rendered_messages() == ["[pp list] > rendering Point at depth 2"]

    caplog.clear()
    pformat(Point(1, 2))
    assert rendered_messages() == ["[pp Point] > rendering Point at depth 1"]


# == Defaults ==


@pytest.mark.unit
def test_per_call_options_do_not_change_defaults() -> None:
    before = get_default_config()
    pp([1], indent=4, write_to=io.StringIO(), wrap_width=10)
    assert get_default_config() == before
    assert before.indent == 2
    assert before.write_to is None
    assert pformat([1]) == "[\n  1\n]"


@pytest.mark.unit
def test_set_default_config_applies_to_later_calls() -> None:
    buf = io.StringIO()
    config = set_default_config(indent=3, write_to=buf)
    assert config.indent == 3
    pp([1])
    assert buf.getvalue() == "[\n   1\n]\n"
    assert reset_default_config().indent == 2


@pytest.mark.unit
def test_default_config_context_is_scoped() -> None:
    with default_config_context(literals=JSON_LITERALS) as config:
        assert config.literals == JSON_LITERALS
        assert pformat(None) == "null"
    assert pformat(None) == "None"


@pytest.mark.unit
def test_defaults_come_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRETTYPRINT_INDENT", "4")
    monkeypatch.setenv("PRETTYPRINT_WRAP_WIDTH", "wide")
    config = get_default_config()
    assert config.indent == 4
    assert config.wrap_width == 80


@pytest.mark.unit
def test_pretty_printer_ignores_context_defaults() -> None:
    printer = PrettyPrinter(indent=4)
    with default_config_context(indent=3):
        assert printer.pformat([1]) == "[\n    1\n]"
        assert PrettyPrinter().pformat([1]) == "[\n  1\n]"


@pytest.mark.unit
def test_pretty_printer_methods_share_its_config() -> None:
    buf = io.StringIO()
    printer = PrettyPrinter(PrettyConfig(write_to=buf, literals=JSON_LITERALS))
    assert printer.pp_chain(None) is None
    printer.pp([True])
    assert buf.getvalue() == "null\n[\n  true\n]\n"


@pytest.mark.unit
def test_wrap_width_option_changes_threshold() -> None:
    result = pformat("aa bb cc", wrap_width=6)
    assert result == '"""\n  aa bb\n  cc\n"""'
    assert pformat("aa bb cc", wrap_width=5) == '"""\n  aa\n  bb\n  cc\n"""'
    assert pformat("aa bb cc") == '"aa bb cc"'


# End of file: src/mstair/prettyprint/xpretty/test_pp_api.py
