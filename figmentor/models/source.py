"""
Source node model for Figmentor.

This module defines the design-tree node that every importer must resolve its
data into before conversion. Validation is deliberately lenient: only the
node ``type`` is mandatory, everything else falls back to a default.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def coerce_children(value: Any) -> List[Any]:
    """Read a raw ``children`` value as a list; None and non-lists give no children."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    logging.warning(f"Ignoring non-list children of type {type(value).__name__}")
    return []


class SourceNode(BaseModel):
    """
    One element of the input design tree.

    Mirrors the simplified node shape that importers resolve design data into:
    a coarse ``type`` tag, a human label, optional text content, an open bag
    of visual styles and ordered children.
    """

    id: str = Field(
        default="",
        description="Unique node identifier from the design tool (may contain colons)"
    )

    name: str = Field(
        default="",
        description="Human label of the node, used by the classification heuristics"
    )

    type: str = Field(
        ...,
        description="Coarse kind tag, e.g. TEXT, FRAME, GROUP, INSTANCE, IMAGE"
    )

    content: Optional[str] = Field(
        default=None,
        description="Text payload, present on text leaves"
    )

    styles: Dict[str, Any] = Field(
        default_factory=dict,
        description="Partially-populated bag of visual attributes"
    )

    children: List['SourceNode'] = Field(
        default_factory=list,
        description="Ordered child nodes"
    )

    @field_validator('id', 'name', mode='before')
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator('type', mode='before')
    @classmethod
    def _require_type(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            raise ValueError("node type is required")
        return str(value).strip()

    @field_validator('content', mode='before')
    @classmethod
    def _coerce_content(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator('styles', mode='before')
    @classmethod
    def _coerce_styles(cls, value: Any) -> Dict[str, Any]:
        if isinstance(value, dict):
            return value
        if value is not None:
            logging.warning(f"Ignoring non-mapping styles of type {type(value).__name__}")
        return {}

    @field_validator('children', mode='before')
    @classmethod
    def _coerce_children(cls, value: Any) -> List[Any]:
        return coerce_children(value)

    @property
    def is_leaf(self) -> bool:
        """Whether the node has no children."""
        return not self.children


# Enable forward references for self-referencing model
SourceNode.model_rebuild()
