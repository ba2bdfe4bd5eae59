"""Decoder for the encoded polyline format returned by OSRM.

Each coordinate is stored as a delta from the previous one, multiplied by
``1e5``, zig-zag folded so the sign lives in the lowest bit, and split into
5-bit chunks.  Every chunk is offset by 63 to land in printable ASCII; a
chunk with bit ``0x20`` set means more chunks follow for the same value.
"""

from __future__ import annotations

_PRECISION = 1e5
_CHUNK_MASK = 0x1F
_CONTINUE_BIT = 0x20
_ASCII_OFFSET = 63


def _read_value(encoded: str, index: int) -> tuple[int | None, int]:
    """Read one varint starting at *index*.

    Returns ``(value, next_index)``; ``value`` is None when the string ends
    before the terminating chunk.
    """
    result = 0
    shift = 0
    while index < len(encoded):
        chunk = ord(encoded[index]) - _ASCII_OFFSET
        index += 1
        result |= (chunk & _CHUNK_MASK) << shift
        shift += 5
        if chunk < _CONTINUE_BIT:
            # One's complement undoes the sign folding for odd values.
            return (~(result >> 1) if result & 1 else result >> 1), index
    return None, index


def decode_polyline(encoded: str) -> list[tuple[float, float]]:
    """Decode *encoded* into a list of ``(lat, lng)`` tuples.

    A truncated trailing value ends decoding; the points decoded so far are
    returned.
    """
    coords: list[tuple[float, float]] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _read_value(encoded, index)
        if dlat is None:
            break
        dlng, index = _read_value(encoded, index)
        if dlng is None:
            break
        lat += dlat
        lng += dlng
        coords.append((lat / _PRECISION, lng / _PRECISION))

    return coords
