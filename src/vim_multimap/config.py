"""Expansion settings and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "VIM_MULTIMAP_"


@dataclass(frozen=True, slots=True)
class MultimapSettings:
    """Control codes and defaults used while expanding descriptors."""

    # Leaves visual, command-line and operator-pending mode for normal mode.
    visual_prefix: str = "<C-C>"
    # Restores the mode the binding was invoked from.
    visual_suffix: str = "<C-\\><C-G>"
    # Runs one normal-mode command, then resumes insert.
    insert_prefix: str = "<C-\\><C-O>"
    menu_separator: str = "."
    help_marker: str = "<Tab>"
    map_descriptor: str = "noremap"
    menu_descriptor: str = "noremenu"

    def __post_init__(self) -> None:
        if len(self.menu_separator) != 1:
            raise ValueError("menu_separator must be a single character")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "MultimapSettings":
        """Build settings, overriding any field set as ``VIM_MULTIMAP_<FIELD>``."""

        env = os.environ if environ is None else environ
        overrides = {}
        for item in fields(cls):
            value = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if value is not None:
                overrides[item.name] = value
        return replace(cls(), **overrides)


DEFAULT_SETTINGS = MultimapSettings()


__all__ = ["ENV_PREFIX", "MultimapSettings", "DEFAULT_SETTINGS"]
