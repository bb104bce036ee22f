"""
Heuristic classification of design nodes into widget kinds.

Rules are evaluated in order and the first match wins. The button rule treats
every component instance as a button, so instances that are not buttons are
misclassified too.
"""

from typing import Optional, Tuple

from ..models import ElementKind, SourceNode
from ..styles.normalizer import font_size_value, font_weight_value

TEXT_TYPES = {"TEXT"}
INSTANCE_TYPES = {"INSTANCE"}
CONTAINER_TYPES = {"FRAME", "GROUP", "CONTAINER", "SECTION", "COMPONENT", "COMPONENT_SET", "STACK"}
IMAGE_TYPES = {"IMAGE"}
VECTOR_TYPES = {"VECTOR", "ELLIPSE", "STAR", "LINE", "POLYGON", "BOOLEAN_OPERATION"}

HEADING_NAME_HINTS = ("heading", "title")
BUTTON_NAME_HINTS = ("button", "btn")

HEADING_MIN_FONT_SIZE = 20
HEADING_MIN_FONT_WEIGHT = 600

# (minimum font size, rank), checked top down
HEADER_RANKS = ((32, 1), (28, 2), (24, 3), (20, 4), (18, 5))


def header_rank(font_size: float) -> int:
    """Map a font size in pixels to a heading level 1-6."""
    for threshold, rank in HEADER_RANKS:
        if font_size >= threshold:
            return rank
    return 6


def is_heading(node: SourceNode) -> bool:
    """Whether a text node reads as a heading rather than body text."""
    font_size = font_size_value(node.styles.get("fontSize"))
    font_weight = font_weight_value(node.styles.get("fontWeight"))
    name = node.name.lower()
    return (
        font_size > HEADING_MIN_FONT_SIZE
        or font_weight >= HEADING_MIN_FONT_WEIGHT
        or any(hint in name for hint in HEADING_NAME_HINTS)
    )


def is_button(node: SourceNode) -> bool:
    name = node.name.lower()
    return any(hint in name for hint in BUTTON_NAME_HINTS) or node.type.upper() in INSTANCE_TYPES


def classify(node: SourceNode) -> Tuple[ElementKind, Optional[int]]:
    """
    Classify a source node.

    Args:
        node: The node to classify

    Returns:
        The widget kind and, for headings, the heading rank
    """
    node_type = node.type.upper()

    if node_type in TEXT_TYPES:
        if is_heading(node):
            return ElementKind.HEADING, header_rank(font_size_value(node.styles.get("fontSize")))
        return ElementKind.PARAGRAPH, None

    if is_button(node):
        return ElementKind.BUTTON, None

    if node_type in CONTAINER_TYPES:
        return ElementKind.CONTAINER, None

    if node_type in IMAGE_TYPES:
        return ElementKind.IMAGE, None

    if node_type in VECTOR_TYPES:
        return ElementKind.VECTOR, None

    return ElementKind.BLOCK, None
