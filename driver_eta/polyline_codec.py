"""Encoded polyline helpers (precision 1e5, lat/lon order).

Decoding goes through the ``polyline`` package. Provider payloads are not
always complete, so the input is first framed into whole 5-bit groups: a
trailing group without its terminating character, or a latitude that is not
followed by a longitude, is cut off before decoding. The package itself would
read past the end of such input.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from polyline import decode as polyline_decode
from polyline import encode as polyline_encode

from .errors import TruncatedInput
from .models import Coordinate

LOGGER = logging.getLogger(__name__)

PRECISION = 5

_CHAR_OFFSET = 63
_CONTINUATION_BIT = 0x20
_MAX_CHUNK = 0x3F


def _complete_prefix_length(encoded: str) -> int:
    """Return the length of the longest prefix holding whole lat/lon pairs."""

    complete = 0
    groups = 0
    for index, char in enumerate(encoded):
        chunk = ord(char) - _CHAR_OFFSET
        if chunk < 0 or chunk > _MAX_CHUNK:
            break
        if chunk & _CONTINUATION_BIT:
            continue
        groups += 1
        if groups % 2 == 0:
            complete = index + 1
    return complete


def decode(encoded: str, *, strict: bool = False) -> List[Coordinate]:
    """Decode an encoded polyline string into coordinates.

    Truncated input yields the coordinates decoded before the break. With
    ``strict=True`` a :class:`TruncatedInput` carrying that partial result is
    raised instead.
    """

    if not encoded:
        return []
    usable = _complete_prefix_length(encoded)
    prefix = encoded[:usable]
    points = [
        Coordinate(float(lat), float(lon))
        for lat, lon in (polyline_decode(prefix, PRECISION) if prefix else [])
    ]
    if usable < len(encoded):
        message = (
            f"Polyline truncated after {len(points)} points "
            f"({len(encoded) - usable} trailing characters ignored)"
        )
        if strict:
            raise TruncatedInput(message, points)
        LOGGER.warning(message)
    return points


def encode(points: Sequence[Coordinate]) -> str:
    """Encode coordinates into a polyline string."""

    return polyline_encode(
        [(point.latitude, point.longitude) for point in points], PRECISION
    )


__all__ = ["PRECISION", "decode", "encode"]
