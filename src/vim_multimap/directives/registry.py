"""Named directives generated from the mode-letter catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from vim_multimap.modes.modeset import ModeSet, canonical_descriptor
from vim_multimap.modes.permutations import mode_letter_catalogue
from vim_multimap.runtime.telemetry import span

from .parser import DirectiveFields, DirectiveParser


class DirectiveKind(str, Enum):
    """What a directive creates."""

    MAP = "map"
    MENU = "menu"
    MENU_MAP = "menumap"


class UnknownDirectiveError(KeyError):
    """Raised when a directive name is not in the table."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown directive '{self.name}'"


@dataclass(frozen=True, slots=True)
class DirectiveSpec:
    """One named directive with its baked-in descriptor."""

    letters: str
    kind: DirectiveKind
    noremap: bool

    @property
    def descriptor(self) -> str:
        family = "map" if self.kind is DirectiveKind.MAP else "menu"
        return f"{self.letters}{'nore' if self.noremap else ''}{family}"

    @property
    def name(self) -> str:
        nore = "nore" if self.noremap else ""
        return f"{self.letters.capitalize()}{nore}{self.kind.value}"

    @property
    def modes(self) -> ModeSet:
        return ModeSet.from_letters(self.letters)

    @property
    def canonical_letters(self) -> str:
        return canonical_descriptor(self.modes)


def iter_directive_specs() -> Iterator[DirectiveSpec]:
    for letters in mode_letter_catalogue():
        for noremap in (False, True):
            for kind in DirectiveKind:
                yield DirectiveSpec(letters=letters, kind=kind, noremap=noremap)


class DirectiveTable:
    """Looks up directives by name and forwards their arguments to the parser."""

    def __init__(
        self, parser: DirectiveParser, *, logger_name: str | None = None
    ) -> None:
        self.parser = parser
        self._logger_name = logger_name
        self._specs: Dict[str, DirectiveSpec] = {
            spec.name: spec for spec in iter_directive_specs()
        }

    @property
    def specs(self) -> Mapping[str, DirectiveSpec]:
        return MappingProxyType(self._specs)

    def get(self, name: str) -> DirectiveSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise UnknownDirectiveError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def run(
        self, name: str, args: str, count: Optional[str] = None
    ) -> DirectiveFields:
        spec = self.get(name)
        with span(
            "directives::run",
            logger_name=self._logger_name,
            component="directives",
            metadata={"directive": name},
        ) as handle:
            handle.add_metadata("descriptor", spec.descriptor)
            if spec.kind is DirectiveKind.MAP:
                return self.parser.parse_mapping_directive(args, spec.descriptor)
            return self.parser.parse_directive(
                args,
                spec.descriptor,
                count or "",
                bind=spec.kind is DirectiveKind.MENU_MAP,
            )


__all__ = [
    "DirectiveKind",
    "DirectiveSpec",
    "DirectiveTable",
    "UnknownDirectiveError",
    "iter_directive_specs",
]
