"""
Legacy section/column assembler.

Renders documents in the older page-builder schema: a single boxed section
holding one full-width column, with every widget flattened into the column in
depth-first order and plain (untyped) settings.
"""

import hashlib
import logging
from typing import Any, Dict, Optional

from ..models import Document, ElementKind, TargetWidget, TypedValue
from .base import BaseAssembler

SIDES = ("top", "right", "bottom", "left")

WIDGET_TYPES = {
    ElementKind.HEADING.value: "heading",
    ElementKind.PARAGRAPH.value: "paragraph",
    ElementKind.BUTTON.value: "button",
    ElementKind.IMAGE.value: "image",
}


def plain(descriptor: Optional[TypedValue]) -> Any:
    """Unwrap a typed descriptor into the legacy schema's plain value."""
    if descriptor is None:
        return None
    if descriptor.kind == "size":
        return {"unit": descriptor.value["unit"], "size": descriptor.value["size"]}
    return descriptor.value


def box(descriptor: Optional[TypedValue]) -> Optional[Dict[str, Any]]:
    """
    Render a spacing or radius descriptor as a four-sided legacy box.

    A legacy box carries one unit. It is the unit of the top side; sides in
    any other unit are set to 0 and a warning is logged.
    """
    if descriptor is None:
        return None
    unit = descriptor.side("top").value["unit"]
    rendered: Dict[str, Any] = {"unit": unit}
    mismatched = []
    for side in SIDES:
        value = descriptor.side(side).value
        if value["unit"] == unit:
            rendered[side] = value["size"]
        else:
            rendered[side] = 0
            mismatched.append(f"{side}={value['size']}{value['unit']}")
    if mismatched:
        logging.warning(f"Legacy box values use one unit ({unit}); zeroed {', '.join(mismatched)}")
    rendered["isLinked"] = descriptor.is_linked
    return rendered


class LegacyAssembler(BaseAssembler):
    """Renders documents as section > column > widgets."""

    name = "legacy"

    def assemble(self, document: Document) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {
            "version": document.version,
            "title": document.title,
            "type": document.document_kind,
            "content": [],
            "settings": dict(document.settings),
        }

        widgets = list(document.iter_widgets())
        if not widgets:
            return rendered

        seed = "/".join(widget.id for widget in widgets)
        column = {
            "id": self._structural_id("column", seed),
            "elType": "column",
            "settings": {"_column_size": 100},
            "elements": [self._render_widget(widget) for widget in widgets],
        }
        section = {
            "id": self._structural_id("section", seed),
            "elType": "section",
            "settings": {
                "layout": "boxed",
                "gap": "default",
                "background_background": "classic",
                "background_color": "#FFFFFF",
            },
            "elements": [column],
        }
        rendered["content"].append(section)
        return rendered

    @staticmethod
    def _structural_id(kind: str, seed: str) -> str:
        return hashlib.sha1(f"{kind}:{seed}".encode('utf-8')).hexdigest()[:7]

    def _render_widget(self, widget: TargetWidget) -> Dict[str, Any]:
        variant = widget.primary_style
        props = variant.props if variant else {}
        kind = widget.element_kind

        if kind == ElementKind.HEADING:
            settings = {
                "title": plain(widget.settings.get("title")),
                "header_size": plain(widget.settings.get("level")),
                "title_color": plain(props.get("color")),
                "align": plain(props.get("text-align")),
            }
            settings.update(self._typography(props))
        elif kind == ElementKind.PARAGRAPH:
            settings = {
                "text": plain(widget.settings.get("paragraph")),
                "text_color": plain(props.get("color")),
                "align": plain(props.get("text-align")),
            }
            settings.update(self._typography(props))
        elif kind == ElementKind.BUTTON:
            settings = {
                "text": plain(widget.settings.get("text")),
                "size": "md",
                "button_type": "default",
                "text_color": plain(props.get("color")),
                "background_color": plain(props.get("background-color")),
                "border_radius": box(props.get("border-radius")),
            }
            settings.update(self._typography(props))
        elif kind == ElementKind.IMAGE:
            settings = {
                "image": {"url": "", "id": ""},
                "caption": plain(widget.settings.get("alt")),
                "border_radius": box(props.get("border-radius")),
            }
        else:
            settings = self._div_block(props, kind)

        return {
            "id": widget.id,
            "elType": "widget",
            "widgetType": WIDGET_TYPES.get(kind, "div-block"),
            "settings": {key: value for key, value in settings.items() if value is not None},
        }

    @staticmethod
    def _typography(props: Dict[str, TypedValue]) -> Dict[str, Any]:
        return {
            "typography_typography": "custom",
            "typography_font_size": plain(props.get("font-size")),
            "typography_font_weight": plain(props.get("font-weight")),
            "typography_font_family": plain(props.get("font-family")) or "Default",
        }

    @staticmethod
    def _div_block(props: Dict[str, TypedValue], kind: str) -> Dict[str, Any]:
        settings: Dict[str, Any] = {
            "width": plain(props.get("width")),
            "height": plain(props.get("height")),
            "border_radius": box(props.get("border-radius")),
            "padding": box(props.get("padding")),
            "margin": box(props.get("margin")),
        }
        if "background-color" in props:
            settings["background_background"] = "classic"
            settings["background_color"] = plain(props["background-color"])
        if kind == ElementKind.CONTAINER:
            settings["display"] = "flex"
            settings["flex_direction"] = plain(props.get("flex-direction"))
            settings["gap"] = plain(props.get("gap"))
        return settings
