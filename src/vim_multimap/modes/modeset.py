"""Bitset over the editor modes a descriptor can target."""

from __future__ import annotations

from enum import Flag
from types import MappingProxyType
from typing import Iterator, Mapping, Optional


class ModeSet(Flag):
    """Editor modes, declared in the order expansions are emitted."""

    N = 1
    V = 2
    I = 4
    C = 8
    O = 16

    @classmethod
    def from_letters(cls, letters: str) -> "ModeSet":
        """Parse a run such as ``"nvi"``; ``"a"`` stands for all five modes."""

        result = cls(0)
        for letter in letters.lower():
            if letter == "a":
                result |= ALL_MODES
                continue
            try:
                result |= cls[letter.upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown mode letter '{letter}'") from exc
        return result

    @classmethod
    def for_command(cls, name: str) -> Optional["ModeSet"]:
        """Single mode addressed by a primitive command name, if any."""

        if not name or name.lower().startswith("nore"):
            return None
        return _SINGLE_MODES.get(name[0].lower())

    @property
    def letters(self) -> str:
        return "".join(member.letter for member in self.members())

    @property
    def letter(self) -> str:
        return self.name.lower() if self.name else ""

    def members(self) -> Iterator["ModeSet"]:
        for member in ModeSet.__members__.values():
            if member in self:
                yield member


ALL_MODES = ModeSet.N | ModeSet.V | ModeSet.I | ModeSet.C | ModeSet.O

_SINGLE_MODES: Mapping[str, ModeSet] = MappingProxyType(
    {member.letter: member for member in ModeSet.__members__.values()}
)


def _canonical_table() -> Mapping[ModeSet, str]:
    table = {}
    extras = (ModeSet.V, ModeSet.I, ModeSet.C, ModeSet.O)
    for bits in range(1 << len(extras)):
        modes = ModeSet.N
        for position, member in enumerate(extras):
            if bits & (1 << position):
                modes |= member
        table[modes] = modes.letters
    return MappingProxyType(table)


# Every combination that includes normal mode, mapped to its descriptor prefix.
CANONICAL_DESCRIPTORS: Mapping[ModeSet, str] = _canonical_table()


def canonical_descriptor(modes: ModeSet) -> str:
    try:
        return CANONICAL_DESCRIPTORS[modes]
    except KeyError as exc:
        raise ValueError(f"{modes!r} does not include normal mode") from exc


__all__ = ["ModeSet", "ALL_MODES", "CANONICAL_DESCRIPTORS", "canonical_descriptor"]
