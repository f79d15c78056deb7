from __future__ import annotations

import pytest

from vim_multimap.directives import (
    DirectiveKind,
    DirectiveParser,
    DirectiveTable,
    UnknownDirectiveError,
    iter_directive_specs,
)
from vim_multimap.keymaps import MappingBuilder, RecordingSink

INSERT = "<C-\\><C-O>"
LEAVE = "<C-C>"
RESTORE = "<C-\\><C-G>"


def make_table() -> tuple[DirectiveTable, RecordingSink]:
    sink = RecordingSink()
    return DirectiveTable(DirectiveParser(MappingBuilder(sink))), sink


def test_table_covers_catalogue() -> None:
    table, _ = make_table()

    # 66 letter sets x {map, noremap} x {map, menu, menumap}
    assert len(table) == 396
    assert len({spec.name for spec in iter_directive_specs()}) == 396


@pytest.mark.parametrize(
    ("name", "descriptor", "kind"),
    [
        ("Nvinoremap", "nvinoremap", DirectiveKind.MAP),
        ("Nvimenu", "nvimenu", DirectiveKind.MENU),
        ("Anoremenumap", "anoremenu", DirectiveKind.MENU_MAP),
        ("Nmap", "nmap", DirectiveKind.MAP),
        ("Nocvimenumap", "nocvimenu", DirectiveKind.MENU_MAP),
    ],
)
def test_table_specs(name: str, descriptor: str, kind: DirectiveKind) -> None:
    table, _ = make_table()

    spec = table.get(name)

    assert name in table
    assert spec.descriptor == descriptor
    assert spec.kind is kind


def test_unknown_directive() -> None:
    table, _ = make_table()

    with pytest.raises(UnknownDirectiveError) as excinfo:
        table.run("Nxmap", "<F2> :w<CR>")

    assert excinfo.value.name == "Nxmap"
    assert "Nxmap" in str(excinfo.value)
    assert "Nxmap" not in table


def test_run_mapping_directive() -> None:
    table, sink = make_table()

    table.run("Ninoremap", "<F2> :w<CR>")

    assert sink.lines == ["nnoremap <F2> :w<CR>", f"inoremap <F2> {INSERT}:w<CR>"]


def test_run_menu_directive_with_count() -> None:
    table, sink = make_table()

    table.run("Nicnoremenu", '&File "Save" :w<CR>', count="20")

    assert sink.lines == [
        "nnoremenu 20 &File.Save :w<CR>",
        f"inoremenu 20 &File.Save {INSERT}:w<CR>",
        f"cnoremenu 20 &File.Save {LEAVE}:w<CR>{RESTORE}",
    ]


def test_run_menu_with_binding_directive() -> None:
    table, sink = make_table()

    table.run("Nvmenumap", '&Edit "Copy" "<C-C>" "+y')

    assert sink.lines == [
        'nmap <C-C> "+y',
        f'vmap <C-C> {LEAVE}"+y{RESTORE}',
        'nmenu &Edit.Copy<Tab><C-C> "+y',
        f'vmenu &Edit.Copy<Tab><C-C> {LEAVE}"+y{RESTORE}',
    ]


def test_run_all_alias_directive() -> None:
    table, sink = make_table()

    table.run("Anoremap", "<F5> :make<CR>")

    assert [command.name for command in sink.commands] == [
        "nnoremap",
        "vnoremap",
        "inoremap",
        "cnoremap",
        "onoremap",
    ]


def test_spec_canonical_letters() -> None:
    table, _ = make_table()

    assert table.get("Nicvnoremap").canonical_letters == "nvic"
    assert table.get("Amenu").canonical_letters == "nvico"
    assert table.get("Nmenu").canonical_letters == "n"
