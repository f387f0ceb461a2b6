"""Tokenizer: path-data text -> RawCommand records, one per argument group.

Grammar notes:
  - separators are whitespace and commas, both optional between numbers
    when the split is unambiguous ("1-2", "1.5.5", "10e-1.5")
  - arc flags are single characters and may be glued to the next number
  - extra argument groups repeat the command; extra M groups become L
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from pathnorm.errors import MalformedPathError
from pathnorm.svg.commands import ARITY, RawCommand

_SEPARATORS_RE = re.compile(r"[\s,]*")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_FLAG_RE = re.compile(r"[01]")

# Argument indices inside an A group that hold flags
_ARC_FLAG_SLOTS = (3, 4)


def _skip(text: str, pos: int) -> int:
    return _SEPARATORS_RE.match(text, pos).end()


def _read_arguments(text: str, pos: int, letter: str, source: str) -> tuple[list[float], list[int], int]:
    """Read numbers until the next letter or end of input."""
    args: list[float] = []
    starts: list[int] = []
    while pos < len(text) and not text[pos].isalpha():
        is_flag = letter == "A" and len(args) % ARITY["A"] in _ARC_FLAG_SLOTS
        match = (_FLAG_RE if is_flag else _NUMBER_RE).match(text, pos)
        if match is None:
            what = "arc flag" if is_flag else "number"
            raise MalformedPathError(f"invalid {what} {text[pos:pos + 12]!r}", pos, source)
        args.append(float(match.group()))
        starts.append(pos)
        pos = _skip(text, match.end())
    return args, starts, pos


def tokenize(text: str) -> Iterator[RawCommand]:
    """Yield one RawCommand per argument group, in source order."""
    pos = _skip(text, 0)
    first = True

    while pos < len(text):
        source = text[pos]
        if not source.isalpha():
            raise MalformedPathError("expected a command letter", pos)
        letter = source.upper()
        if letter not in ARITY:
            raise MalformedPathError(f"unrecognized command letter {source!r}", pos, source)
        if first and letter != "M":
            raise MalformedPathError("path data must start with a moveto", pos, source)
        first = False

        relative = source.islower()
        command_pos = pos
        args, starts, pos = _read_arguments(text, _skip(text, pos + 1), letter, source)

        arity = ARITY[letter]
        if arity == 0:
            if args:
                raise MalformedPathError(f"{source} takes no arguments, got {len(args)}", starts[0], source)
            yield RawCommand(letter, relative, (), command_pos)
            continue

        if not args or len(args) % arity:
            raise MalformedPathError(
                f"{source} expects a multiple of {arity} numbers, got {len(args)}",
                command_pos,
                source,
            )

        for i in range(0, len(args), arity):
            group_letter = "L" if letter == "M" and i > 0 else letter
            yield RawCommand(
                group_letter,
                relative,
                tuple(args[i:i + arity]),
                command_pos if i == 0 else starts[i],
            )
