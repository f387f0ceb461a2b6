"""Path-data parser facade: text -> normalized CommandStream."""

from __future__ import annotations

import logging

from pathnorm.config import ConversionConfig
from pathnorm.svg.builder import CommandStream
from pathnorm.svg.normalizer import normalize
from pathnorm.svg.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_path(text: str, config: ConversionConfig | None = None) -> CommandStream:
    """Parse path data into absolute M/L/C/S/Q/T/Z commands.

    Arcs are approximated by quadratic beziers according to ``config``
    (default: a fixed step count from settings). Raises MalformedPathError or
    InvalidArcError; there is no partial result.
    """
    try:
        stream = normalize(tokenize(text), config)
    except ValueError as e:
        logger.debug("Rejected path data %.40r: %s", text, e)
        raise

    logger.info("Parsed path data: %d commands", len(stream))
    return stream
