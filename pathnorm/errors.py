"""Error taxonomy for path-data normalization."""

from __future__ import annotations


class MalformedPathError(ValueError):
    """Raised when path-data text cannot be tokenized."""

    def __init__(self, message: str, position: int | None = None, command: str | None = None) -> None:
        self.position = position
        self.command = command
        details = []
        if command is not None:
            details.append(f"command {command!r}")
        if position is not None:
            details.append(f"position {position}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class InvalidArcError(ValueError):
    """Raised when arc radii or rotation are not finite."""
