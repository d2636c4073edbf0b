"""
Reader for ``code;wkt`` SRID tables.

Each line holds an integer code, a semicolon and a WKT definition. Blank
lines, lines starting with ``#`` and lines without a semicolon are skipped.
"""

import logging
import os
from dataclasses import dataclass
from typing import IO, Iterator, Optional, Union

from ..exceptions import ConfigurationError
from .models import CoordinateSystem
from .wkt import from_wkt

logger = logging.getLogger(__name__)

PathOrFile = Union[str, "os.PathLike[str]", IO[str]]


@dataclass(frozen=True)
class SridEntry:
    code: int
    wkt: str


def _parse_lines(lines: IO[str]) -> Iterator[SridEntry]:
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        code, separator, wkt = line.partition(";")
        if not separator:
            continue
        try:
            code = int(code)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid SRID code {code!r} on line {line_number}"
            ) from exc
        yield SridEntry(code, wkt)


def read_srids(source: PathOrFile) -> Iterator[SridEntry]:
    """
    Iterate over the entries of an SRID table.

    Parameters
    ----------
    source : str, path-like or text file
        Table to read

    Yields
    ------
    SridEntry
        ``(code, wkt)`` pairs in file order
    """
    if hasattr(source, "read"):
        yield from _parse_lines(source)
        return
    with open(source, encoding="utf-8") as handle:
        yield from _parse_lines(handle)


def get_coordinate_system(code: int, source: PathOrFile) -> Optional[CoordinateSystem]:
    """Parse the WKT stored for ``code``, or return None if the table lacks it."""
    for entry in read_srids(source):
        if entry.code == code:
            logger.debug("Found SRID %d", code)
            return from_wkt(entry.wkt)
    return None
