from __future__ import annotations

from typing import Any, List

import pytest

from vim_multimap.directives import (
    DirectiveFields,
    DirectiveParser,
    tokenize,
    unquote,
)
from vim_multimap.keymaps import InvalidLabelError, MappingBuilder, RecordingSink

LEAVE = "<C-C>"
RESTORE = "<C-\\><C-G>"


class CapturingBuilder(MappingBuilder):
    """Records builder calls instead of expanding them."""

    def __init__(self) -> None:
        super().__init__(RecordingSink())
        self.menu_calls: List[tuple[Any, ...]] = []
        self.mapping_calls: List[tuple[Any, ...]] = []

    def create_menu_item(self, *args: Any, **kwargs: Any) -> None:
        assert not kwargs
        self.menu_calls.append(args)

    def create_mapping(self, *args: Any, **kwargs: Any) -> None:
        assert not kwargs
        self.mapping_calls.append(args)


def make_parser() -> tuple[DirectiveParser, RecordingSink]:
    sink = RecordingSink()
    return DirectiveParser(MappingBuilder(sink)), sink


def test_tokenize_full_line() -> None:
    fields = tokenize('10 &File.Save "Save file" "Ctrl-S" :w<CR>')

    assert fields == DirectiveFields(
        special="",
        menu_path="&File.Save",
        label="Save file",
        help="Ctrl-S",
        rhs=":w<CR>",
        count="10",
    )


def test_tokenize_special_and_single_quotes() -> None:
    fields = tokenize("<silent> Edit.Copy 'It''s' \"y\" \"+y")

    assert fields.special == "<silent>"
    assert fields.menu_path == "Edit.Copy"
    assert fields.label == "It's"
    assert fields.help == "y"
    assert fields.rhs == '"+y'


def test_tokenize_escaped_space_and_backslash_quotes() -> None:
    fields = tokenize('Tools\\ Menu.Run "Run \\"it\\"" :make<CR>')

    assert fields.menu_path == "Tools\\ Menu.Run"
    assert fields.label == 'Run "it"'
    assert fields.help == ""
    assert fields.rhs == ":make<CR>"


def test_tokenize_without_quoted_fields() -> None:
    fields = tokenize("  &File   :w<CR>  ")

    assert fields.menu_path == "&File"
    assert fields.label == ""
    assert fields.rhs == ":w<CR>"


def test_tokenize_key_notation_is_not_special() -> None:
    fields = tokenize("<F2> :w<CR>")

    assert fields.special == ""
    assert fields.menu_path == "<F2>"


@pytest.mark.parametrize("line", ["", "   ", "<silent>", "12 <silent>  "])
def test_tokenize_degrades_to_empty_fields(line: str) -> None:
    fields = tokenize(line)

    assert fields.menu_path == ""
    assert fields.label == ""
    assert fields.help == ""
    assert fields.rhs == ""


def test_tokenize_unterminated_quote_stays_in_rhs() -> None:
    fields = tokenize("&Edit \"unterminated :normal! yy<CR>")

    assert fields.label == ""
    assert fields.rhs == "\"unterminated :normal! yy<CR>"


@pytest.mark.parametrize(
    ("token", "expected"),
    [("'a''b'", "a'b"), ('"a\\"b"', 'a"b'), ('"a\\\\b"', "a\\b"), ("x", "x")],
)
def test_unquote(token: str, expected: str) -> None:
    assert unquote(token) == expected


def test_parse_directive_matches_direct_builder_call() -> None:
    builder = CapturingBuilder()
    parser = DirectiveParser(builder)

    parser.parse_directive('10 &File.Save "Save file" "Ctrl-S" :w<CR>')

    assert builder.menu_calls == [
        ("&File.Save", ":w<CR>", "Save file", ".10", "Ctrl-S", "noremenu")
    ]


def test_parse_directive_expands_to_commands() -> None:
    parser, sink = make_parser()

    parser.parse_directive('10 &File.Save "Save file" "Ctrl-S" :w<CR>')

    assert sink.lines == ["noremenu .10 &File.Save.Save\\ file<Tab>Ctrl-S :w<CR>"]


def test_parse_directive_caller_priority_wins_over_count() -> None:
    builder = CapturingBuilder()
    parser = DirectiveParser(builder)

    parser.parse_directive('5 A.B.C "Go" :go<CR>', "nvmenu", "20")

    assert builder.menu_calls == [("A.B.C", ":go<CR>", "Go", "..20", "", "nvmenu")]


def test_parse_directive_special_joins_descriptor() -> None:
    parser, sink = make_parser()

    parser.parse_directive('<silent> Build "Make" :make<CR>', "nvnoremenu")

    assert sink.lines == [
        "nnoremenu <silent> Build.Make :make<CR>",
        f"vnoremenu <silent> Build.Make {LEAVE}:make<CR>{RESTORE}",
    ]


def test_parse_directive_bind_maps_help_keys() -> None:
    parser, sink = make_parser()

    parser.parse_directive('&File "Save" "<C-S>" :w<CR>', "noremenu", bind=True)

    assert sink.lines == [
        "noremap <C-S> :w<CR>",
        "noremenu &File.Save<Tab><C-S> :w<CR>",
    ]


def test_parse_directive_bind_without_help_maps_nothing() -> None:
    builder = CapturingBuilder()
    parser = DirectiveParser(builder)

    parser.parse_directive("&File :w<CR>", "menu", bind=True)

    assert builder.menu_calls == [("&File", ":w<CR>", "", "", "", "menu")]


def test_parse_directive_empty_line_surfaces_label_error() -> None:
    parser, sink = make_parser()

    with pytest.raises(InvalidLabelError):
        parser.parse_directive("")

    assert sink.lines == []


@pytest.mark.parametrize(
    ("path", "priority", "expected"),
    [
        ("&File", "10", "10"),
        ("&File.Save", "10", ".10"),
        ("A.B.C", "7", "..7"),
        ("A\\.B", "5", "5"),
        ("A\\\\.B", "5", ".5"),
        ("A.B", "", ""),
    ],
)
def test_submenu_priority(path: str, priority: str, expected: str) -> None:
    parser, _ = make_parser()

    assert parser.submenu_priority(path, priority) == expected


def test_parse_mapping_directive() -> None:
    parser, sink = make_parser()

    fields = parser.parse_mapping_directive("<silent> <F2> :w<CR>", "nvnoremap")

    assert fields.special == "<silent>"
    assert sink.lines == [
        "nnoremap <silent> <F2> :w<CR>",
        f"vnoremap <silent> <F2> {LEAVE}:w<CR>{RESTORE}",
    ]


def test_parse_mapping_directive_escaped_space_lhs() -> None:
    builder = CapturingBuilder()
    parser = DirectiveParser(builder)

    parser.parse_mapping_directive("a\\ b  :echo 'x'<CR>")

    assert builder.mapping_calls == [("a\\ b", ":echo 'x'<CR>", "noremap")]


def test_parse_mapping_directive_without_lhs_creates_nothing() -> None:
    parser, sink = make_parser()

    fields = parser.parse_mapping_directive("   ", "nmap")

    assert fields == DirectiveFields()
    assert sink.lines == []
