"""
Style normalization for Figmentor.

Converts loosely-typed design style attributes (bare numbers, ``"32px 20px"``
strings, partially populated mappings, ``{r, g, b}`` colors) into the typed
value descriptors of the page-builder schema. Every function here is pure.
"""

import json
import math
import logging
import re
from typing import Any, Dict, Optional, Tuple

from ..models import TypedValue

TOKEN_PATTERN = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+))\s*([a-zA-Z%]*)')
HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')

BACKGROUND_COLOR = "#FFFFFF"
FOREGROUND_COLOR = "#000000"

COLOR_KEYS = {
    "color": FOREGROUND_COLOR,
    "backgroundColor": BACKGROUND_COLOR,
    "borderColor": FOREGROUND_COLOR,
}

SIZE_KEYS = {
    "fontSize", "borderRadius", "gap",
    "width", "height", "borderWidth", "letterSpacing", "lineHeight",
}

SPACING_KEYS = {"padding", "margin"}

NUMBER_KEYS = {"opacity"}

ENUM_DEFAULTS = {
    "fontWeight": "400",
    "textAlign": "left",
    "flexDirection": "row",
}

TEXT_ALIGN_TOKENS = {
    "left": "left",
    "center": "center",
    "right": "right",
    "justify": "justify",
    "justified": "justify",
}

FLEX_DIRECTION_TOKENS = {
    "horizontal": "row",
    "vertical": "column",
}

FONT_WEIGHT_NAMES = {
    "thin": 100,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
    "black": 900,
}


def kebab_case(key: str) -> str:
    """Convert a camelCase style key to the kebab-case prop name."""
    return re.sub(r'(?<=[a-z0-9])([A-Z])', r'-\1', key).replace('_', '-').lower()


def _clean_number(value: float) -> float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_number(value: Any) -> bool:
    """Whether value is a finite int or float; NaN and infinities are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_non_finite(value: Any) -> bool:
    return isinstance(value, float) and not math.isfinite(value)


def _parse_number(text: str) -> Optional[float]:
    """Read the numeric prefix of a string, None when absent or not finite."""
    match = TOKEN_PATTERN.match(text)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


# ===============================
# COLOR
# ===============================

def rgb_to_hex(color: Any) -> Optional[str]:
    """
    Convert an ``{r, g, b}`` mapping with 0-1 channels to ``#RRGGBB``.

    Returns None when the mapping is malformed.
    """
    if not isinstance(color, dict):
        return None
    channels = []
    for key in ("r", "g", "b"):
        channel = color.get(key, 0)
        if not _is_number(channel):
            return None
        channels.append(min(255, max(0, int(math.floor(channel * 255 + 0.5)))))
    return "#{:02X}{:02X}{:02X}".format(*channels)


def _normalize_hex(value: str) -> Optional[str]:
    match = HEX_PATTERN.match(value.strip())
    if not match:
        return None
    digits = match.group(1).upper()
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return f"#{digits}"


def normalize_color(value: Any, default: str = FOREGROUND_COLOR) -> TypedValue:
    """
    Normalize a hex string or ``{r, g, b}`` mapping into a color descriptor.

    Args:
        value: Raw color attribute
        default: Color used when the value is missing or invalid

    Returns:
        A ``color`` descriptor holding an upper-case hex string
    """
    hex_value = None
    if isinstance(value, str):
        hex_value = _normalize_hex(value)
    elif isinstance(value, dict):
        hex_value = rgb_to_hex(value)

    if hex_value is None:
        if value is not None:
            logging.debug(f"Unreadable color {value!r}, using {default}")
        hex_value = default
    return TypedValue.color(hex_value)


# ===============================
# SIZES
# ===============================

def parse_size(value: Any) -> Tuple[float, str]:
    """
    Read a size attribute into a ``(size, unit)`` pair.

    Accepts a bare number (pixels), a ``{size, unit}`` mapping or a
    unit-suffixed string such as ``"24px"`` or ``"1.5em"``. Anything else
    reads as ``(0, "px")``.
    """
    if _is_number(value):
        return _clean_number(value), "px"

    if isinstance(value, dict):
        size, _ = parse_size(value.get("size"))
        unit = value.get("unit") or "px"
        return size, str(unit)

    if isinstance(value, str):
        number = _parse_number(value)
        if number is not None:
            return _clean_number(number), TOKEN_PATTERN.match(value).group(2) or "px"

    if value is not None:
        logging.debug(f"Unreadable size {value!r}, using 0px")
    return 0, "px"


def normalize_size(value: Any) -> TypedValue:
    """Normalize a size attribute into a ``size`` descriptor."""
    size, unit = parse_size(value)
    return TypedValue.size(size, unit)


# ===============================
# BOX SPACING
# ===============================

SIDES = ("top", "right", "bottom", "left")


def _expand_shorthand(tokens: list) -> Tuple[Any, Any, Any, Any]:
    """Expand 2-4 CSS shorthand tokens to (top, right, bottom, left)."""
    if len(tokens) == 2:
        vertical, horizontal = tokens
        return vertical, horizontal, vertical, horizontal
    if len(tokens) == 3:
        top, horizontal, bottom = tokens
        return top, horizontal, bottom, horizontal
    return tuple(tokens[:4])


def normalize_spacing(value: Any) -> TypedValue:
    """
    Normalize ``padding``/``margin`` into a linked or per-side descriptor.

    A single scalar gives a linked ``size`` descriptor; a multi-token string
    or a ``top/right/bottom/left`` mapping gives an unlinked ``dimensions``
    descriptor.
    """
    if isinstance(value, dict) and any(side in value for side in SIDES):
        sides = [normalize_size(value.get(side)) for side in SIDES]
        return TypedValue.dimensions(*sides)

    if isinstance(value, str):
        tokens = value.split()
        if len(tokens) > 1:
            sides = [normalize_size(token) for token in _expand_shorthand(tokens)]
            return TypedValue.dimensions(*sides)

    return normalize_size(value)


# ===============================
# ENUMERATED STRINGS
# ===============================

def normalize_enum(key: str, value: Any) -> TypedValue:
    """
    Pass an enumerated attribute through as a string descriptor.

    Unset values take the schema default for the key; design-tool tokens
    for alignment and auto-layout direction are translated.
    """
    if value is None or _is_non_finite(value) or (isinstance(value, str) and not value.strip()):
        return TypedValue.string(ENUM_DEFAULTS.get(key, ""))

    if key == "fontWeight" and _is_number(value):
        return TypedValue.string(_clean_number(float(value)))

    text = str(value).strip()
    if key == "textAlign":
        text = TEXT_ALIGN_TOKENS.get(text.lower(), text.lower())
    elif key == "flexDirection":
        text = FLEX_DIRECTION_TOKENS.get(text.lower(), text.lower())
    return TypedValue.string(text)


def _opaque(value: Any) -> TypedValue:
    if isinstance(value, (dict, list)):
        return TypedValue.string(json.dumps(value, sort_keys=True, default=str))
    return TypedValue.string(value)


# ===============================
# DISPATCH
# ===============================

def normalize_style(key: str, value: Any) -> Tuple[str, TypedValue]:
    """
    Normalize one style attribute.

    Args:
        key: Semantic style key, e.g. ``padding`` or ``backgroundColor``
        value: Raw attribute value

    Returns:
        The kebab-case prop name and its typed descriptor
    """
    prop = kebab_case(key)
    if key in COLOR_KEYS:
        return prop, normalize_color(value, COLOR_KEYS[key])
    if key in SIZE_KEYS:
        return prop, normalize_size(value)
    if key in SPACING_KEYS:
        return prop, normalize_spacing(value)
    if key in ENUM_DEFAULTS:
        return prop, normalize_enum(key, value)
    if key in NUMBER_KEYS:
        number = value if _is_number(value) else parse_size(value)[0]
        return prop, TypedValue.number(_clean_number(number))
    return prop, _opaque(value)


def normalize_styles(styles: Optional[Dict[str, Any]],
                     defaults: Optional[Dict[str, Any]] = None) -> Dict[str, TypedValue]:
    """
    Normalize a whole style bag, filling in defaults for absent keys.

    Args:
        styles: Raw styles of one node (may be None)
        defaults: Raw default values applied where a key is absent or None

    Returns:
        Mapping of prop name to typed descriptor
    """
    merged: Dict[str, Any] = dict(defaults or {})
    for key, value in (styles or {}).items():
        if value is None and key in merged:
            continue
        merged[key] = value

    props: Dict[str, TypedValue] = {}
    for key, value in merged.items():
        prop, descriptor = normalize_style(str(key), value)
        props[prop] = descriptor
    return props


# ===============================
# NUMERIC READINGS
# ===============================

def font_size_value(value: Any, default: float = 16) -> float:
    """Read a font size in pixels for classification, ``default`` when absent."""
    if value is None:
        return default
    size, _ = parse_size(value)
    return size


def font_weight_value(value: Any, default: int = 400) -> int:
    """Read a numeric font weight; named weights such as ``bold`` are mapped."""
    if _is_number(value):
        return int(value)
    if isinstance(value, str):
        text = value.strip().lower().replace('-', '').replace(' ', '')
        if text in FONT_WEIGHT_NAMES:
            return FONT_WEIGHT_NAMES[text]
        number = _parse_number(text)
        if number is not None:
            return int(number)
    return default
