"""Command stream builder: ordered accumulation of normalized commands."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pathnorm.svg.commands import Command, Point


@dataclass(frozen=True)
class CommandStream:
    """Result of one parse: the commands plus the pen position they leave behind."""

    commands: tuple[Command, ...] = ()
    # None when the input contained no commands
    current_point: Point | None = None
    subpath_start: Point | None = None

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __getitem__(self, index):
        return self.commands[index]

    @property
    def letters(self) -> str:
        return "".join(cmd.letter for cmd in self.commands)


@dataclass
class CommandStreamBuilder:
    """Collects commands in emission order. No filtering, no rewriting."""

    _commands: list[Command] = field(default_factory=list)

    def append(self, command: Command) -> None:
        self._commands.append(command)

    def extend(self, commands: Iterable[Command]) -> None:
        self._commands.extend(commands)

    @property
    def last(self) -> Command | None:
        return self._commands[-1] if self._commands else None

    def __len__(self) -> int:
        return len(self._commands)

    def build(self, current_point: Point | None = None, subpath_start: Point | None = None) -> CommandStream:
        return CommandStream(tuple(self._commands), current_point, subpath_start)
