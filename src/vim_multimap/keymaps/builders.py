"""Mapping and menu builders that dispatch expansions to a sink."""

from __future__ import annotations

import re
from typing import Optional

from vim_multimap.config import DEFAULT_SETTINGS, MultimapSettings
from vim_multimap.runtime.telemetry import record_event, span

from .expander import expand
from .models import Binding, HelpInput, KeysInput, MenuItem
from .sinks import CommandSink

_LABEL_FROM_RHS = re.compile(r"^:(\w+)(?=\s|$|<(?:cr|enter|return)>)", re.IGNORECASE)
_MENU_FAMILY = re.compile(r"menu(?=\s|$)", re.IGNORECASE)


class InvalidLabelError(ValueError):
    """Raised when a menu item has no label and none can be derived."""

    def __init__(self, location: str, rhs: str) -> None:
        super().__init__(
            f"Menu item under '{location}' needs a label: none given and "
            f"none derivable from '{rhs}'"
        )
        self.location = location
        self.rhs = rhs


def mapping_descriptor(menu_descriptor: str) -> str:
    """Swap the menu family for map: ``"vmenu <silent>"`` -> ``"vmap <silent>"``."""

    name, sep, modifiers = menu_descriptor.partition(" ")
    return _MENU_FAMILY.sub("map", name, count=1) + sep + modifiers


def derive_label(rhs: str) -> str:
    match = _LABEL_FROM_RHS.match(rhs)
    return match.group(1) if match else ""


class MappingBuilder:
    """Programmatic entry points for multi-mode mappings and menu items."""

    def __init__(
        self,
        sink: CommandSink,
        *,
        settings: Optional[MultimapSettings] = None,
        logger_name: str | None = None,
    ) -> None:
        self.sink = sink
        self.settings = settings or DEFAULT_SETTINGS
        self._logger_name = logger_name

    def create_mapping(
        self, lhs: KeysInput, rhs: str, descriptor: Optional[str] = None
    ) -> None:
        """Map every key sequence in ``lhs`` to ``rhs`` in the descriptor's modes.

        Commands are applied in order; a sink failure stops the loop and the
        commands applied before it stay in effect.
        """

        binding = Binding(lhs, rhs, descriptor or self.settings.map_descriptor)
        with span(
            "keymaps::create_mapping",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"descriptor": binding.descriptor, "keys": len(binding.lhs)},
        ) as handle:
            dispatched = 0
            for keys in binding.lhs:
                dispatched += self._dispatch(keys, binding.rhs, binding.descriptor)
            handle.add_metadata("commands", dispatched)

    def create_menu_item(
        self,
        location: str,
        rhs: str,
        label: str = "",
        priority: str = "",
        help: HelpInput = "",
        descriptor: Optional[str] = None,
    ) -> None:
        """Add a menu entry under ``location``, in every mode of ``descriptor``.

        When ``help`` is a list or tuple its entries are also mapped to
        ``rhs`` (with the ``menu`` family swapped for ``map``) and the first
        entry is shown as the right-aligned help text.

        Raises
        ------
        InvalidLabelError
            No ``label`` was given and ``rhs`` does not start with ``:word``.
        """

        item = MenuItem(
            location=location,
            rhs=rhs,
            label=label,
            priority=priority,
            help=help,
            descriptor=descriptor or self.settings.menu_descriptor,
        )
        with span(
            "keymaps::create_menu_item",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"location": item.location, "descriptor": item.descriptor},
        ) as handle:
            menu_label = item.label.replace(" ", "\\ ")

            help_keys = item.help_keys
            if help_keys is not None:
                self.create_mapping(
                    help_keys, item.rhs, mapping_descriptor(item.descriptor)
                )
            help_text = item.help_text

            menu_location = self._normalize_location(item.location)
            if not menu_label:
                menu_label = derive_label(item.rhs)
            menu_priority = f"{item.priority} " if item.priority else ""
            if help_text:
                help_text = f"{self.settings.help_marker}{help_text}"

            if not menu_label:
                handle.add_metadata("missing_label", item.rhs)
                raise InvalidLabelError(item.location, item.rhs)
            handle.add_metadata("label", menu_label)

            lhs = f" {menu_priority}{menu_location}{menu_label}{help_text} "
            dispatched = self._dispatch(lhs, item.rhs, item.descriptor)
            handle.add_metadata("commands", dispatched)

    def _normalize_location(self, location: str) -> str:
        if not location:
            return location
        sep = self.settings.menu_separator
        # Collapse a run of trailing separators, leaving an escaped one alone.
        trailing = re.compile(rf"(?<!\\)((?:\\\\)*){re.escape(sep)}+$")
        location, found = trailing.subn(lambda match: match.group(1) + sep, location)
        return location if found else location + sep

    def _dispatch(self, lhs: str, rhs: str, descriptor: str) -> int:
        commands = expand(lhs, rhs, descriptor, settings=self.settings)
        for command in commands:
            record_event(
                "command.dispatch",
                level="debug",
                data={"command": command.text},
                logger_name=self._logger_name,
            )
            self.sink.apply(command)
        return len(commands)


__all__ = [
    "MappingBuilder",
    "InvalidLabelError",
    "mapping_descriptor",
    "derive_label",
]
