"""
Tree mapper for Figmentor.

This module walks a source node tree, classifies every node, builds the
widget settings and style class through the style normalizer, and assembles
the resulting widgets into a Document.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..config import config, get_option
from ..exceptions import ConversionError
from ..models import (
    Document,
    ElementKind,
    SourceNode,
    StyleDefinition,
    StyleVariant,
    TargetWidget,
    TypedValue,
    coerce_children,
)
from ..styles.normalizer import normalize_styles
from .classifier import classify
from .identifiers import IdGenerator, format_path

NodeInput = Union[SourceNode, Dict[str, Any]]

_TEXT_DEFAULTS = {
    "color": None,
    "fontSize": 16,
    "fontWeight": None,
    "textAlign": None,
}

# Raw style defaults per widget kind; None means "use the normalizer default"
KIND_DEFAULTS: Dict[str, Dict[str, Any]] = {
    ElementKind.CONTAINER.value: {
        "backgroundColor": None,
        "padding": 0,
        "gap": 0,
        "flexDirection": None,
    },
    ElementKind.HEADING.value: _TEXT_DEFAULTS,
    ElementKind.PARAGRAPH.value: _TEXT_DEFAULTS,
    ElementKind.BUTTON.value: {
        "color": None,
        "backgroundColor": None,
        "fontSize": 16,
        "fontWeight": 500,
        "borderRadius": 0,
        "padding": 0,
    },
    ElementKind.BLOCK.value: {
        "backgroundColor": None,
        "padding": 0,
    },
    ElementKind.IMAGE.value: {
        "borderRadius": 0,
    },
    ElementKind.VECTOR.value: {
        "borderRadius": 0,
    },
}


def validate_nodes(nodes: Any) -> List[SourceNode]:
    """
    Check the structure of a whole input before anything is converted.

    Args:
        nodes: List of source nodes (mappings or SourceNode instances)

    Returns:
        The validated SourceNode list

    Raises:
        ConversionError: If the input is not a list, or any node at any depth
            is not a mapping or lacks its type

    Nodes are validated one at a time from an explicit stack, so nesting
    depth is unbounded.
    """
    if not isinstance(nodes, (list, tuple)):
        raise ConversionError(f"Expected a list of source nodes, got {type(nodes).__name__}")

    validated: List[SourceNode] = []
    stack = [(raw, validated, (index,)) for index, raw in enumerate(nodes)]
    stack.reverse()
    while stack:
        raw, siblings, path = stack.pop()
        node, raw_children = _validate_node(raw, path)
        siblings.append(node)
        for index in reversed(range(len(raw_children))):
            stack.append((raw_children[index], node.children, path + (index,)))
    return validated


def _validate_node(raw: Any, path: Tuple[int, ...]) -> Tuple[SourceNode, List[Any]]:
    """Validate one node without its children; return it with its raw children."""
    if isinstance(raw, SourceNode):
        return raw, []
    if not isinstance(raw, dict):
        raise ConversionError(
            f"Source node at {format_path(path)} is a {type(raw).__name__}, expected a mapping"
        )
    fields = {key: value for key, value in raw.items() if key != "children"}
    try:
        node = SourceNode.model_validate(fields)
    except ValidationError as e:
        raise ConversionError(
            f"Source node at {format_path(path)} ({raw.get('id', '?')}) is invalid: {e}"
        ) from e
    return node, coerce_children(raw.get("children"))


class TreeMapper:
    """
    Converts source node trees into the internal page-builder model.

    A mapper holds only its options; every call to ``convert`` uses a fresh
    identifier generator, so calls are independent.
    """

    def __init__(self, id_mode: Optional[str] = None, class_prefix: Optional[str] = None,
                 suffix_length: Optional[int] = None):
        """
        Initialize the mapper.

        Args:
            id_mode: "random" or "deterministic" (defaults to config value)
            class_prefix: Style class id prefix (defaults to config value)
            suffix_length: Identifier suffix length (defaults to config value)
        """
        self.id_mode = get_option(id_mode, "conversion.id_mode", "random")
        self.class_prefix = get_option(class_prefix, "conversion.class_prefix", "e-")
        self.suffix_length = int(get_option(suffix_length, "conversion.suffix_length", 7))
        # raises ValueError on an unknown id mode
        self._new_id_generator()

    def _new_id_generator(self) -> IdGenerator:
        return IdGenerator(self.id_mode, self.class_prefix, self.suffix_length)

    def convert(self, nodes: Any, metadata: Optional[Dict[str, Any]] = None) -> Document:
        """
        Convert a list of source nodes into a Document.

        Args:
            nodes: Top-level source nodes
            metadata: Optional metadata; ``name`` becomes the document title

        Returns:
            The converted Document

        Raises:
            ConversionError: If the input is structurally invalid
        """
        source_nodes = validate_nodes(nodes)
        metadata = metadata or {}
        ids = self._new_id_generator()

        content = [
            self._map_tree(node, (index,), ids)
            for index, node in enumerate(source_nodes)
        ]

        document = Document(
            version=config.document_version,
            title=metadata.get("name") or config.default_title,
            content=content,
        )
        logging.info(f"Converted {len(source_nodes)} top-level nodes into {document.widget_count()} widgets")
        return document

    def map_node(self, node: NodeInput, path: Sequence[int] = (0,)) -> TargetWidget:
        """
        Convert one source node and its subtree.

        Args:
            node: A SourceNode or a raw node mapping
            path: Sibling indices from the root to this node

        Returns:
            The widget tree built from the node
        """
        source = validate_nodes([node])[0]
        return self._map_tree(source, tuple(path), self._new_id_generator())

    def _map_tree(self, root: SourceNode, path: Tuple[int, ...], ids: IdGenerator) -> TargetWidget:
        """Map a subtree depth-first from an explicit stack, keeping sibling order."""
        mapped: List[TargetWidget] = []
        stack = [(root, path, mapped)]
        while stack:
            node, node_path, siblings = stack.pop()
            widget = self._map(node, node_path, ids)
            siblings.append(widget)
            for index in reversed(range(len(node.children))):
                stack.append((node.children[index], node_path + (index,), widget.children))
        return mapped[0]

    def _map(self, node: SourceNode, path: Tuple[int, ...], ids: IdGenerator) -> TargetWidget:
        """Build the widget for one node, with an empty children list."""
        kind, rank = classify(node)
        class_id = ids.class_id(node, path)

        settings = self._build_settings(node, kind, rank)
        settings["classes"] = TypedValue.classes([class_id])

        props = normalize_styles(node.styles, KIND_DEFAULTS[kind.value])
        style = StyleDefinition(
            id=class_id,
            variants=[StyleVariant(breakpoint="desktop", state="none", props=props)],
        )

        logging.debug(f"Mapped node {node.id or '?'} ({node.type}) to {kind.value}")
        return TargetWidget(
            id=ids.widget_id(node, path),
            element_kind=kind,
            header_rank=rank,
            settings=settings,
            style_block={class_id: style},
            source_id=node.id,
        )

    @staticmethod
    def _build_settings(node: SourceNode, kind: ElementKind, rank: Optional[int]) -> Dict[str, TypedValue]:
        """Build the content settings of a widget, without its classes."""
        text = node.content or ""
        if kind == ElementKind.HEADING:
            return {
                "title": TypedValue.string(text),
                "level": TypedValue.string(f"h{rank}"),
            }
        if kind == ElementKind.PARAGRAPH:
            return {"paragraph": TypedValue.string(text)}
        if kind == ElementKind.BUTTON:
            return {
                "text": TypedValue.string(node.content or node.name or "Button"),
                "link": TypedValue.link(),
            }
        if kind == ElementKind.IMAGE:
            return {"alt": TypedValue.string(node.name)}
        return {}


def convert_nodes(nodes: Any, metadata: Optional[Dict[str, Any]] = None, **options: Any) -> Document:
    """
    Convert source nodes into a Document with a one-off TreeMapper.

    Args:
        nodes: Top-level source nodes
        metadata: Optional metadata (``name`` is used as title)
        **options: TreeMapper options (id_mode, class_prefix, suffix_length)

    Returns:
        The converted Document
    """
    return TreeMapper(**options).convert(nodes, metadata)
