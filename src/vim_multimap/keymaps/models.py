"""Value objects passed between the builders, the expander and the sinks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from vim_multimap.modes.modeset import ModeSet

_MODIFIER = re.compile(r"<\w+>")
# Trailing blanks that are not escaped with a backslash.
_TRAILING_BLANKS = re.compile(r"(?<!\\) +$")

KeysInput = Union[str, Iterable[str]]
HelpInput = Union[str, Iterable[str]]


def _as_keys(value: KeysInput) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True, slots=True)
class PrimitiveCommand:
    """One mode-specific command the host editor understands natively."""

    command: str
    lhs: str
    rhs: str

    def __post_init__(self) -> None:
        if not self.command.strip():
            raise ValueError("command cannot be empty")
        object.__setattr__(self, "command", self.command.strip())
        object.__setattr__(self, "lhs", _TRAILING_BLANKS.sub("", self.lhs.lstrip()))

    @property
    def name(self) -> str:
        return self.command.split(None, 1)[0]

    @property
    def modifiers(self) -> tuple[str, ...]:
        return tuple(_MODIFIER.findall(self.command[len(self.name) :]))

    @property
    def mode(self) -> Optional[ModeSet]:
        return ModeSet.for_command(self.name)

    @property
    def recursive(self) -> bool:
        return "nore" not in self.name.lower()

    @property
    def buffer_local(self) -> bool:
        return "<buffer>" in (modifier.lower() for modifier in self.modifiers)

    @property
    def text(self) -> str:
        return f"{self.command} {self.lhs} {self.rhs}"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Binding:
    """Key sequences sharing one right-hand side and descriptor."""

    lhs: tuple[str, ...]
    rhs: str
    descriptor: str = "noremap"

    def __post_init__(self) -> None:
        # A single key sequence may be passed as a plain string.
        object.__setattr__(self, "lhs", _as_keys(self.lhs))


@dataclass(frozen=True, slots=True)
class MenuItem:
    """Menu entry as declared by a caller, before defaults are applied."""

    location: str
    rhs: str
    label: str = ""
    priority: str = ""
    help: HelpInput = ""
    descriptor: str = "noremenu"

    def __post_init__(self) -> None:
        if not isinstance(self.help, str):
            object.__setattr__(self, "help", tuple(self.help))

    @property
    def help_keys(self) -> Optional[tuple[str, ...]]:
        """Key sequences to bind alongside the entry, when help is a collection."""

        if isinstance(self.help, str):
            return None
        return self.help

    @property
    def help_text(self) -> str:
        keys = self.help_keys
        if keys is None:
            return str(self.help)
        return keys[0] if keys else ""


__all__ = ["PrimitiveCommand", "Binding", "MenuItem", "KeysInput", "HelpInput"]
