"""Expansion of multi-mode descriptors into primitive commands."""

from __future__ import annotations

import re
from typing import Optional

from vim_multimap.config import DEFAULT_SETTINGS, MultimapSettings
from vim_multimap.modes.modeset import ModeSet

from .models import PrimitiveCommand

_ALL_ALIAS = re.compile(r"^a")
# ``n`` must lead the run; ``nore...`` is a command name, not a mode set.
_MULTI_MODE = re.compile(r"^(?!nore)n[vico]+")


def _wrap(mode: ModeSet, rhs: str, settings: MultimapSettings) -> str:
    if mode is ModeSet.I:
        return f"{settings.insert_prefix}{rhs}"
    return f"{settings.visual_prefix}{rhs}{settings.visual_suffix}"


def is_multi_mode(descriptor: str) -> bool:
    return _MULTI_MODE.match(_ALL_ALIAS.sub("nvico", descriptor, count=1)) is not None


def expand(
    lhs: str,
    rhs: str,
    descriptor: str,
    *,
    settings: Optional[MultimapSettings] = None,
) -> list[PrimitiveCommand]:
    """Expand one binding into the primitive commands its descriptor names.

    The normal-mode command always comes first, then visual, insert,
    command-line and operator-pending in that order, whatever order the
    letters had in ``descriptor``. A descriptor without a leading ``n`` run
    (``"vnoremap"``, ``"n"``, ``"noremenu <silent>"``) yields exactly one
    command with ``rhs`` untouched.
    """

    cfg = settings or DEFAULT_SETTINGS
    descriptor = _ALL_ALIAS.sub("nvico", descriptor, count=1)

    match = _MULTI_MODE.match(descriptor)
    if match is None:
        return [PrimitiveCommand(descriptor, lhs, rhs)]

    run = match.group(0)
    rest = descriptor[len(run) :]
    modes = ModeSet.from_letters(run)

    commands = [PrimitiveCommand(f"n{rest}", lhs, rhs)]
    for mode in modes.members():
        if mode is ModeSet.N:
            continue
        commands.append(
            PrimitiveCommand(f"{mode.letter}{rest}", lhs, _wrap(mode, rhs, cfg))
        )
    return commands


__all__ = ["expand", "is_multi_mode"]
