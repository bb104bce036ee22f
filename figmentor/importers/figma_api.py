"""
Figma REST API importer for Figmentor.

This module fetches a file or node from the Figma REST API and resolves the raw
Figma node tree (fills, strokes, auto-layout, text style) into the simplified
source node grammar understood by the TreeMapper.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import httpx

from ..config import config
from ..exceptions import ImporterError
from .base import BaseImporter

FILE_KEY_PATTERN = re.compile(r'/(?:file|design|proto)/([a-zA-Z0-9]+)')

CONTAINER_PAGE_TYPES = {"DOCUMENT", "CANVAS"}


def parse_figma_url(url: str) -> Tuple[str, Optional[str]]:
    """
    Extract the file key and node id from a Figma URL.

    Args:
        url: A figma.com file/design URL, optionally with ``node-id``

    Returns:
        Tuple of file key and node id (``1-2`` is returned as ``1:2``)

    Raises:
        ImporterError: If no file key can be found
    """
    parsed = urlparse(url)
    match = FILE_KEY_PATTERN.search(parsed.path)
    if not match:
        raise ImporterError(f"Invalid Figma URL, could not extract file key: {url}")

    node_ids = parse_qs(parsed.query).get("node-id")
    node_id = node_ids[0].replace("-", ":") if node_ids else None
    return match.group(1), node_id


def _first_visible(paints: Any, paint_type: Optional[str] = None) -> Optional[Dict[str, Any]]:
    if not isinstance(paints, list):
        return None
    for paint in paints:
        if not isinstance(paint, dict) or paint.get("visible") is False:
            continue
        if paint_type is None or paint.get("type") == paint_type:
            return paint
    return None


class FigmaAPIImporter(BaseImporter):
    """
    Importer for designs served by the Figma REST API.
    """

    def __init__(self, file_key: str, node_id: Optional[str] = None,
                 token: Optional[str] = None, client: Optional[httpx.Client] = None):
        """
        Initialize the Figma importer.

        Args:
            file_key: Figma file key
            node_id: Optional node id (``1:2`` or ``1-2``); the whole file when omitted
            token: Personal access token (defaults to the configured env var)
            client: Optional preconfigured httpx client
        """
        self.file_key = file_key
        self.node_id = node_id.replace("-", ":") if node_id else None
        self.token = token or os.environ.get(config.figma_token_env)
        self.api_base = config.figma_api_base.rstrip('/')
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=config.figma_timeout)
        self._response: Optional[Dict[str, Any]] = None

        logging.info(f"Initialized Figma importer for file {file_key}" + (f" node {self.node_id}" if self.node_id else ""))

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> 'FigmaAPIImporter':
        file_key, node_id = parse_figma_url(url)
        return cls(file_key, node_id, **kwargs)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make an authenticated GET request to the Figma API.

        Raises:
            ImporterError: If the token is missing or the request fails
        """
        if not self.token:
            raise ImporterError(
                f"No Figma access token. Pass one explicitly or set {config.figma_token_env}."
            )
        try:
            response = self.client.get(
                f"{self.api_base}{path}",
                headers={"X-Figma-Token": self.token},
                params=params,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ImporterError(f"Figma request failed with status {e.response.status_code}: {e}") from e
        except httpx.RequestError as e:
            raise ImporterError(f"Failed to connect to Figma: {e}") from e
        except ValueError as e:
            raise ImporterError(f"Figma returned invalid JSON: {e}") from e

    def _fetch(self) -> Dict[str, Any]:
        if self._response is None:
            if self.node_id:
                self._response = self._get(f"/files/{self.file_key}/nodes", {"ids": self.node_id})
            else:
                self._response = self._get(f"/files/{self.file_key}")
        return self._response

    def _raw_roots(self) -> List[Dict[str, Any]]:
        """Locate the raw nodes to convert inside the API response."""
        data = self._fetch()
        if self.node_id:
            nodes = data.get("nodes") or {}
            entry = nodes.get(self.node_id)
            if not entry or not entry.get("document"):
                raise ImporterError(
                    f"Node '{self.node_id}' not found in Figma response. Available nodes: {list(nodes.keys())}"
                )
            roots = [entry["document"]]
        else:
            document = data.get("document")
            if not document:
                raise ImporterError("Document field missing from Figma file response.")
            roots = [document]

        # Unwrap document and page nodes down to their frames
        while roots and all(root.get("type") in CONTAINER_PAGE_TYPES for root in roots):
            roots = [child for root in roots for child in root.get("children") or []]
        return roots

    def get_nodes(self) -> List[Dict[str, Any]]:
        """
        Fetch the design and resolve it into source nodes.

        Returns:
            List of source node mappings
        """
        nodes = []
        for raw in self._raw_roots():
            node = self._build_source_node(raw)
            if node:
                nodes.append(node)
        logging.info(f"Resolved {len(nodes)} top-level nodes from Figma file {self.file_key}")
        return nodes

    def get_metadata(self) -> Dict[str, Any]:
        data = self._fetch()
        return {"name": data.get("name") or self.file_key}

    def _build_source_node(self, raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Recursively convert a raw Figma node and its children into a source node.
        Invisible nodes are skipped.
        """
        if not isinstance(raw, dict) or raw.get("visible") is False:
            return None

        node_type = str(raw.get("type") or "UNKNOWN")
        if node_type != "TEXT" and _first_visible(raw.get("fills"), "IMAGE"):
            node_type = "IMAGE"

        node: Dict[str, Any] = {
            "id": raw.get("id", ""),
            "name": raw.get("name", ""),
            "type": node_type,
            "styles": self._extract_styles(raw, node_type),
        }
        if node_type == "TEXT":
            node["content"] = raw.get("characters", "")

        children = []
        for child in raw.get("children") or []:
            converted = self._build_source_node(child)
            if converted:
                children.append(converted)
        if children:
            node["children"] = children
        return node

    @staticmethod
    def _extract_styles(raw: Dict[str, Any], node_type: str) -> Dict[str, Any]:
        """Flatten Figma paint, text and auto-layout properties into a style bag."""
        styles: Dict[str, Any] = {}

        fill = _first_visible(raw.get("fills"), "SOLID")
        if fill and isinstance(fill.get("color"), dict):
            styles["color" if node_type == "TEXT" else "backgroundColor"] = fill["color"]

        stroke = _first_visible(raw.get("strokes"), "SOLID")
        if stroke and isinstance(stroke.get("color"), dict):
            styles["borderColor"] = stroke["color"]
            if raw.get("strokeWeight") is not None:
                styles["borderWidth"] = raw["strokeWeight"]

        text_style = raw.get("style") or {}
        for source_key, style_key in (
            ("fontSize", "fontSize"),
            ("fontWeight", "fontWeight"),
            ("fontFamily", "fontFamily"),
            ("textAlignHorizontal", "textAlign"),
            ("lineHeightPx", "lineHeight"),
            ("letterSpacing", "letterSpacing"),
        ):
            if text_style.get(source_key) is not None:
                styles[style_key] = text_style[source_key]

        if raw.get("cornerRadius") is not None:
            styles["borderRadius"] = raw["cornerRadius"]

        padding_keys = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")
        if any(raw.get(key) is not None for key in padding_keys):
            styles["padding"] = {
                side: raw.get(key) or 0
                for side, key in zip(("top", "right", "bottom", "left"), padding_keys)
            }

        if raw.get("itemSpacing") is not None:
            styles["gap"] = raw["itemSpacing"]

        if raw.get("layoutMode") in ("HORIZONTAL", "VERTICAL"):
            styles["flexDirection"] = raw["layoutMode"]

        box = raw.get("absoluteBoundingBox") or {}
        for key in ("width", "height"):
            if box.get(key) is not None:
                styles[key] = box[key]

        if raw.get("opacity") is not None and raw["opacity"] != 1:
            styles["opacity"] = raw["opacity"]

        return styles
