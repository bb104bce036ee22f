"""
Target document models for Figmentor.

These structures form the single internal page-builder model. Assemblers in
``figmentor.assemblers`` render them into an external schema; nothing here is
tied to one schema generation.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValueKind(str, Enum):
    """Kind tags of typed value descriptors."""

    COLOR = "color"
    SIZE = "size"
    STRING = "string"
    NUMBER = "number"
    CLASSES = "classes"
    LINK = "link"
    DIMENSIONS = "dimensions"


class ElementKind(str, Enum):
    """Widget kinds a source node can be classified into."""

    CONTAINER = "container"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BUTTON = "button"
    BLOCK = "block"
    IMAGE = "image"
    VECTOR = "vector"


class TypedValue(BaseModel):
    """
    A ``{kind, value}`` descriptor telling the renderer how to read a raw value.

    Size values are ``{"size": number, "unit": str}`` mappings. Dimensions
    values map each side (``top``, ``right``, ``bottom``, ``left``) to a size
    descriptor.
    """

    model_config = ConfigDict(use_enum_values=True)

    kind: ValueKind
    value: Any = None

    @classmethod
    def string(cls, value: Any) -> 'TypedValue':
        return cls(kind=ValueKind.STRING, value="" if value is None else str(value))

    @classmethod
    def color(cls, value: str) -> 'TypedValue':
        return cls(kind=ValueKind.COLOR, value=value)

    @classmethod
    def size(cls, size: float = 0, unit: str = "px") -> 'TypedValue':
        return cls(kind=ValueKind.SIZE, value={"size": size, "unit": unit})

    @classmethod
    def number(cls, value: float) -> 'TypedValue':
        return cls(kind=ValueKind.NUMBER, value=value)

    @classmethod
    def classes(cls, class_ids: List[str]) -> 'TypedValue':
        return cls(kind=ValueKind.CLASSES, value=list(class_ids))

    @classmethod
    def link(cls, url: str = "", target: str = "_self") -> 'TypedValue':
        return cls(kind=ValueKind.LINK, value={"url": url, "target": target})

    @classmethod
    def dimensions(cls, top: 'TypedValue', right: 'TypedValue',
                   bottom: 'TypedValue', left: 'TypedValue') -> 'TypedValue':
        return cls(kind=ValueKind.DIMENSIONS, value={
            "top": top,
            "right": right,
            "bottom": bottom,
            "left": left,
        })

    @property
    def is_linked(self) -> bool:
        """True when one size applies to all four sides."""
        return self.kind == ValueKind.SIZE.value

    def side(self, name: str) -> 'TypedValue':
        """
        Get the size descriptor of one side of a spacing descriptor.

        Linked descriptors return themselves for every side.
        """
        if self.kind == ValueKind.DIMENSIONS.value:
            return self.value[name]
        return self


class StyleVariant(BaseModel):
    """Breakpoint/state scoped bundle of style props."""

    breakpoint: str = "desktop"
    state: str = "none"
    props: Dict[str, TypedValue] = Field(default_factory=dict)


class StyleDefinition(BaseModel):
    """A generated style class attached to one widget."""

    id: str
    label: str = "local"
    type: str = "class"
    variants: List[StyleVariant] = Field(default_factory=list)


class TargetWidget(BaseModel):
    """
    One element of the output page-builder tree.
    """

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(
        ...,
        description="Identifier restricted to the target schema's character set"
    )

    element_kind: ElementKind = Field(
        ...,
        description="Container or leaf widget kind"
    )

    header_rank: Optional[int] = Field(
        default=None,
        description="Heading level 1-6, set on headings only"
    )

    settings: Dict[str, TypedValue] = Field(
        default_factory=dict,
        description="Widget settings, each wrapped in a typed descriptor"
    )

    style_block: Dict[str, StyleDefinition] = Field(
        default_factory=dict,
        description="Style classes keyed by generated class identifier"
    )

    children: List['TargetWidget'] = Field(
        default_factory=list,
        description="Ordered child widgets"
    )

    source_id: str = Field(
        default="",
        description="Identifier of the source node this widget was built from"
    )

    def iter_widgets(self) -> Iterator['TargetWidget']:
        """Yield this widget and all descendants depth-first, in order."""
        stack = [self]
        while stack:
            widget = stack.pop()
            yield widget
            stack.extend(reversed(widget.children))

    @property
    def primary_style(self) -> Optional[StyleVariant]:
        """The first variant of the first style class, if any."""
        for definition in self.style_block.values():
            if definition.variants:
                return definition.variants[0]
        return None


class Document(BaseModel):
    """
    Top-level converted page. Built once per conversion and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    version: str = "0.4"
    title: str = "Figma Design"
    document_kind: str = "page"
    content: List[TargetWidget] = Field(default_factory=list)
    settings: Dict[str, Any] = Field(default_factory=dict)

    def iter_widgets(self) -> Iterator[TargetWidget]:
        for widget in self.content:
            yield from widget.iter_widgets()

    def widget_count(self) -> int:
        """Count every widget in the document, at any depth."""
        return sum(1 for _ in self.iter_widgets())


TargetWidget.model_rebuild()
