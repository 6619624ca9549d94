#!/usr/bin/env python3
"""Output destination handling for dumps."""

from contextlib import contextmanager
from typing import Iterator, Optional, TextIO
import logging
import sys

from .errors import SinkUnavailable

logger = logging.getLogger('statdump.sink')

STDOUT_NAMES = (None, '', '-')


@contextmanager
def open_sink(path: Optional[str] = None) -> Iterator[TextIO]:
    """
    Open the dump output for writing.

    None or '-' writes to stdout, which is flushed but never closed. Any other
    value is a file path, truncated on open and closed on every exit path.

    Raises:
        SinkUnavailable: the file cannot be opened
    """
    if path in STDOUT_NAMES:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    try:
        handle = open(path, 'w')
    except OSError as e:
        raise SinkUnavailable(path, e) from e

    logger.debug(f"writing output to {path}")
    try:
        yield handle
    finally:
        handle.close()
