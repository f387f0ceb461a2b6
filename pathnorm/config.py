"""Configuration: environment-backed settings and the per-call arc policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    # Quadratic segments emitted per elliptical arc
    bezier_steps: int = 8
    log_level: str = "warning"

    model_config = {"env_prefix": "PATHNORM_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


@dataclass(frozen=True)
class ConversionConfig:
    """Arc subdivision policy. Exactly one of the two fields is set."""

    # Fixed number of quadratic segments per arc
    bezier_steps: int | None = None
    # Maximum distance between an arc and its approximation
    tolerance: float | None = None

    def __post_init__(self) -> None:
        if (self.bezier_steps is None) == (self.tolerance is None):
            raise ValueError("ConversionConfig needs exactly one of bezier_steps or tolerance")
        if self.bezier_steps is not None and self.bezier_steps < 1:
            raise ValueError(f"bezier_steps must be a positive integer, got {self.bezier_steps}")
        if self.tolerance is not None and not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")

    @property
    def uses_tolerance(self) -> bool:
        return self.tolerance is not None

    @classmethod
    def default(cls) -> ConversionConfig:
        return cls(bezier_steps=settings.bezier_steps)


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for scripts and applications embedding pathnorm."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
    )
