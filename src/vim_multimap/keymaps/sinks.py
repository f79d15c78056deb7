"""Execution sinks that receive expanded primitive commands."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, TextIO

from .models import PrimitiveCommand


class SinkDispatchError(RuntimeError):
    """Raised by a sink that rejects a primitive command."""

    def __init__(self, message: str, *, command: PrimitiveCommand | None = None):
        super().__init__(message)
        self.command = command


class CommandSink(Protocol):
    """Anything able to apply primitive commands one at a time."""

    def apply(self, command: PrimitiveCommand) -> None:
        """Apply ``command`` or raise; no retry is attempted by callers."""
        ...


class RecordingSink:
    """Keeps every applied command in order."""

    def __init__(self) -> None:
        self.commands: List[PrimitiveCommand] = []

    def apply(self, command: PrimitiveCommand) -> None:
        self.commands.append(command)

    @property
    def lines(self) -> List[str]:
        return [command.text for command in self.commands]


class StreamSink:
    """Writes each command as one line of Vim script."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def apply(self, command: PrimitiveCommand) -> None:
        if "\n" in command.text:
            raise SinkDispatchError(
                "command spans more than one line", command=command
            )
        self._stream.write(command.text + "\n")


class CallbackSink:
    """Hands the rendered command text to a host callable."""

    def __init__(
        self,
        execute: Callable[[str], object],
        *,
        accept: Optional[Callable[[PrimitiveCommand], bool]] = None,
    ) -> None:
        self._execute = execute
        self._accept = accept

    def apply(self, command: PrimitiveCommand) -> None:
        if self._accept is not None and not self._accept(command):
            raise SinkDispatchError(
                f"command rejected: {command.text}", command=command
            )
        self._execute(command.text)


__all__ = [
    "CommandSink",
    "RecordingSink",
    "StreamSink",
    "CallbackSink",
    "SinkDispatchError",
]
