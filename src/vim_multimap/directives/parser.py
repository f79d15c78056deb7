"""Tokenizer for free-form menu and mapping directive lines.

A menu directive reads::

    [count] [<special>...] menu.path ["label"] ["help"] rhs

Fields are taken left to right by a cursor; each step matches at the cursor
and advances past the field and the blanks after it. Label and help are
optional quoted strings (``'it''s'`` or ``"say \\"hi\\""``). Tokenizing never
fails: once a required field is missing, it and every field after it are
empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from vim_multimap.keymaps.builders import MappingBuilder
from vim_multimap.runtime.telemetry import record_event, span

_COUNT = re.compile(r"(\d+(?:\.\d+)*)(?=\s)")
# Native map/menu arguments; other <...> tokens belong to the lhs.
_SPECIAL = re.compile(
    r"(?:<(?:buffer|nowait|silent|special|script|expr|unique)>\s*)*", re.IGNORECASE
)
_PATH = re.compile(r"(?:\\ |\S)+")
_QUOTED = re.compile(r"(\"(?:[^\"\\]|\\.)*\"|'(?:[^']|'')*')(?=\s|$)")
_BLANKS = re.compile(r"\s*")
_BACKSLASH_ESCAPE = re.compile(r"\\(.)")
_PRIORITY_LEVEL = "."


@dataclass(frozen=True, slots=True)
class DirectiveFields:
    """Structured fields of one directive line."""

    special: str = ""
    menu_path: str = ""
    label: str = ""
    help: str = ""
    rhs: str = ""
    count: str = ""


class _Cursor:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def take(self, pattern: re.Pattern[str]) -> Optional[re.Match[str]]:
        match = pattern.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = _BLANKS.match(self.text, match.end()).end()
        return match

    def rest(self) -> str:
        remainder = self.text[self.pos :]
        self.pos = len(self.text)
        return remainder


def unquote(token: str) -> str:
    """Strip the outer quotes of ``token`` and resolve its escapes."""

    if len(token) < 2:
        return token
    body = token[1:-1]
    if token[0] == "'":
        return body.replace("''", "'")
    return _BACKSLASH_ESCAPE.sub(r"\1", body)


def _take_quoted(cursor: _Cursor) -> str:
    match = cursor.take(_QUOTED)
    return unquote(match.group(1)) if match else ""


def tokenize(line: str) -> DirectiveFields:
    """Split a menu directive line into its fields."""

    cursor = _Cursor(line.strip())
    count_match = cursor.take(_COUNT)
    count = count_match.group(1) if count_match else ""
    special = cursor.take(_SPECIAL).group(0).strip()  # always matches

    path = cursor.take(_PATH)
    if path is None:
        return DirectiveFields(special=special, count=count)

    label = _take_quoted(cursor)
    help_text = _take_quoted(cursor)
    return DirectiveFields(
        special=special,
        menu_path=path.group(0),
        label=label,
        help=help_text,
        rhs=cursor.rest(),
        count=count,
    )


def _descriptor(mode: str, special: str) -> str:
    return " ".join(part for part in (mode, special) if part)


class DirectiveParser:
    """Turns directive lines into builder calls."""

    def __init__(
        self, builder: MappingBuilder, *, logger_name: str | None = None
    ) -> None:
        self.builder = builder
        self._logger_name = logger_name

    def submenu_priority(self, menu_path: str, priority: str) -> str:
        """Prefix ``priority`` with one empty level per separator in ``menu_path``.

        Keeps a numeric priority attached to the same menu level however deep
        the submenu is. Priority levels are always written with ``.``, whatever
        the menu separator. An empty priority stays empty.
        """

        if not priority:
            return ""
        sep = re.escape(self.builder.settings.menu_separator)
        # A separator counts unless an odd run of backslashes precedes it.
        depth = len(re.findall(rf"(?<!\\)(?:\\\\)*{sep}", menu_path))
        return _PRIORITY_LEVEL * depth + priority

    def parse_directive(
        self,
        line: str,
        mode: str = "",
        priority: str = "",
        *,
        bind: bool = False,
    ) -> DirectiveFields:
        """Parse a menu directive and create the menu item it describes.

        ``priority`` wins over a count written at the front of ``line``. With
        ``bind=True`` the help text is also mapped to the item's rhs.
        """

        fields = tokenize(line)
        with span(
            "directives::parse_directive",
            logger_name=self._logger_name,
            component="directives",
            metadata={"mode": mode, "menu_path": fields.menu_path},
        ) as handle:
            help_arg = [fields.help] if bind and fields.help else fields.help
            menu_priority = self.submenu_priority(
                fields.menu_path, priority or fields.count
            )
            handle.add_metadata("priority", menu_priority)
            handle.add_metadata("bound", bool(bind and fields.help))
            self.builder.create_menu_item(
                fields.menu_path,
                fields.rhs,
                fields.label,
                menu_priority,
                help_arg,
                _descriptor(
                    mode or self.builder.settings.menu_descriptor, fields.special
                ),
            )
        return fields

    def parse_mapping_directive(self, line: str, mode: str = "") -> DirectiveFields:
        """Parse ``[<special>...] lhs rhs`` and create the mapping.

        A line without an lhs creates nothing.
        """

        cursor = _Cursor(line.strip())
        special = cursor.take(_SPECIAL).group(0).strip()
        lhs = cursor.take(_PATH)
        if lhs is None:
            record_event(
                "directive.missing_lhs",
                level="warning",
                data={"line": line, "mode": mode},
                logger_name=self._logger_name,
            )
            return DirectiveFields(special=special)

        fields = DirectiveFields(
            special=special, menu_path=lhs.group(0), rhs=cursor.rest()
        )
        with span(
            "directives::parse_mapping_directive",
            logger_name=self._logger_name,
            component="directives",
            metadata={"mode": mode, "lhs": fields.menu_path},
        ) as handle:
            handle.add_metadata("special", fields.special or "-")
            self.builder.create_mapping(
                fields.menu_path,
                fields.rhs,
                _descriptor(mode or self.builder.settings.map_descriptor, special),
            )
        return fields


__all__ = ["DirectiveFields", "DirectiveParser", "tokenize", "unquote"]
