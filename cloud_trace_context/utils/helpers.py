"""Helpers for converting trace identifiers between hex strings and integers."""

from __future__ import annotations

import string
from typing import Optional

_HEX_DIGITS = frozenset(string.hexdigits)


def hex_from_bytes(data: bytes) -> str:
    """
    Encode bytes as a lowercase hex string via their big-endian integer value.

    Leading zero bytes are not preserved, so the result may be shorter than
    ``2 * len(data)`` characters.
    """
    return format(int.from_bytes(data, "big"), "x")


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int128) to hex string.

    Args:
        trace_id: OTel trace_id as int

    Returns:
        32-character hex string
    """
    return format(trace_id, "032x")


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int64) to hex string.

    Args:
        span_id: OTel span_id as int

    Returns:
        16-character hex string
    """
    return format(span_id, "016x")


def parse_hex_id(hex_string: str, max_bits: int) -> Optional[int]:
    """
    Parse a hex identifier, returning None if it is not usable as an OTel id.

    Zero, non-hex and values wider than ``max_bits`` are rejected.
    """
    if not hex_string or not _HEX_DIGITS.issuperset(hex_string):
        return None
    value = int(hex_string, 16)
    if value <= 0 or value.bit_length() > max_bits:
        return None
    return value


def parse_trace_id(hex_string: str) -> Optional[int]:
    return parse_hex_id(hex_string, 128)


def parse_span_id(hex_string: str) -> Optional[int]:
    return parse_hex_id(hex_string, 64)
