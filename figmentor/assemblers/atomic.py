"""
Atomic widget assembler.

Renders documents in the class-based "atomic" page-builder schema: every
setting and style prop is a ``{"$$type": kind, "value": value}`` pair, and
each widget carries its own style classes with desktop variants.
"""

from typing import Any, Dict, List

from ..models import Document, ElementKind, StyleDefinition, TargetWidget, TypedValue
from .base import BaseAssembler

WIDGET_TYPES = {
    ElementKind.CONTAINER.value: "e-flexbox",
    ElementKind.HEADING.value: "e-heading",
    ElementKind.PARAGRAPH.value: "e-paragraph",
    ElementKind.BUTTON.value: "e-button",
    ElementKind.BLOCK.value: "e-div-block",
    ElementKind.IMAGE.value: "e-image",
    ElementKind.VECTOR.value: "e-svg",
}

WIDGET_VERSION = "0.0"


def render_value(descriptor: TypedValue) -> Dict[str, Any]:
    """Render a typed descriptor as a ``$$type`` pair, recursing into dimensions."""
    value = descriptor.value
    if isinstance(value, dict):
        value = {
            key: render_value(item) if isinstance(item, TypedValue) else item
            for key, item in value.items()
        }
    elif isinstance(value, list):
        value = list(value)
    return {"$$type": descriptor.kind, "value": value}


def render_style(definition: StyleDefinition) -> Dict[str, Any]:
    return {
        "id": definition.id,
        "label": definition.label,
        "type": definition.type,
        "variants": [
            {
                "meta": {
                    "breakpoint": variant.breakpoint,
                    "state": None if variant.state == "none" else variant.state,
                },
                "props": {name: render_value(prop) for name, prop in variant.props.items()},
            }
            for variant in definition.variants
        ],
    }


class AtomicAssembler(BaseAssembler):
    """Renders documents as nested atomic widgets."""

    name = "atomic"

    def assemble(self, document: Document) -> Dict[str, Any]:
        return {
            "version": document.version,
            "title": document.title,
            "type": document.document_kind,
            "content": [self._render_tree(widget) for widget in document.content],
            "settings": dict(document.settings),
            "page_settings": [],
        }

    def _render_tree(self, root: TargetWidget) -> Dict[str, Any]:
        """Render a widget tree depth-first from an explicit stack."""
        rendered_roots: List[Dict[str, Any]] = []
        stack = [(root, 0, rendered_roots)]
        while stack:
            widget, depth, siblings = stack.pop()
            rendered = self._render_widget(widget, depth)
            siblings.append(rendered)
            for child in reversed(widget.children):
                stack.append((child, depth + 1, rendered["elements"]))
        return rendered_roots[0]

    def _render_widget(self, widget: TargetWidget, depth: int) -> Dict[str, Any]:
        """Render one widget with an empty ``elements`` list."""
        widget_type = WIDGET_TYPES[widget.element_kind]
        rendered: Dict[str, Any] = {"id": widget.id}
        if widget.element_kind == ElementKind.CONTAINER:
            rendered["elType"] = widget_type
        else:
            rendered["elType"] = "widget"
            rendered["widgetType"] = widget_type

        rendered.update({
            "settings": {name: render_value(value) for name, value in widget.settings.items()},
            "elements": [],
            "isInner": depth > 0,
            "styles": {class_id: render_style(style) for class_id, style in widget.style_block.items()},
            "version": WIDGET_VERSION,
            "editor_settings": [],
        })
        return rendered
