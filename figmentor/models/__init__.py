"""Data models for Figmentor."""

from .source import SourceNode, coerce_children
from .target import (
    Document,
    ElementKind,
    StyleDefinition,
    StyleVariant,
    TargetWidget,
    TypedValue,
    ValueKind,
)

__all__ = [
    "SourceNode",
    "coerce_children",
    "Document",
    "ElementKind",
    "StyleDefinition",
    "StyleVariant",
    "TargetWidget",
    "TypedValue",
    "ValueKind"
]
