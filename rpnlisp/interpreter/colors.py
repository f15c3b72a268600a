"""
Hex color code conversions.

Colors are written as "#rrggbb" (the leading # is optional on input).
Channels are decimal numbers; when joined back into a code each channel is
scaled, clamped to [0, 255], rounded and printed as two hex digits.
"""

import math
from typing import List, Sequence

from .numeric import parse_float, parse_int, round_half_up, to_radix


def hex_to_rgb(code: str) -> List[float]:
    """Split a color code into its channel values."""
    digits = code[1:] if code.startswith('#') else code
    return [parse_int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]


def channel_to_hex(value: float, scale: float = 1.0) -> str:
    scaled = value * scale
    if not math.isnan(scaled):
        scaled = round_half_up(min(max(scaled, 0.0), 255.0))
    text = to_radix(scaled, 16)
    return '0' + text if len(text) == 1 else text


def rgb_to_hex(channels: Sequence[str], scale: float = 1.0) -> str:
    """Join channel tokens into a color code, scaling each by scale."""
    return '#' + ''.join(channel_to_hex(parse_float(c), scale) for c in channels)


def average_colors(codes: Sequence[str]) -> str:
    """Average color codes channel by channel."""
    rgbs = [hex_to_rgb(code) for code in codes]
    width = max((len(rgb) for rgb in rgbs), default=0)
    means = []
    for i in range(width):
        column = [rgb[i] for rgb in rgbs if i < len(rgb)]
        means.append(sum(column) / len(column))
    return '#' + ''.join(channel_to_hex(mean) for mean in means)
