"""Style normalization into typed value descriptors."""

from .normalizer import (
    normalize_color,
    normalize_enum,
    normalize_size,
    normalize_spacing,
    normalize_style,
    normalize_styles,
    parse_size,
    rgb_to_hex,
)

__all__ = [
    "normalize_color",
    "normalize_enum",
    "normalize_size",
    "normalize_spacing",
    "normalize_style",
    "normalize_styles",
    "parse_size",
    "rgb_to_hex"
]
