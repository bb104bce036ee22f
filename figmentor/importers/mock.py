"""
Mock importer for testing Figmentor.

This module provides a mock design source with a hardcoded landing page for
exercising the conversion pipeline without Figma access.
"""

from typing import Any, Dict, List

from .base import BaseImporter


class MockImporter(BaseImporter):
    """
    Mock importer that returns hardcoded test data.

    Used for testing the conversion pipeline without requiring real data sources.
    """

    def __init__(self):
        """Initialize the mock importer with test data."""
        self._test_nodes = self._create_test_nodes()

    def get_nodes(self) -> List[Dict[str, Any]]:
        """
        Return all hardcoded test nodes.

        Returns:
            List of test source node mappings
        """
        return self._test_nodes

    def get_metadata(self) -> Dict[str, Any]:
        return {"name": "Mock Landing Page"}

    def _create_test_nodes(self) -> List[Dict[str, Any]]:
        """
        Create a hardcoded landing page covering every widget kind.

        Returns:
            List of top-level test nodes
        """
        nodes = []

        # Hero: heading, body copy and call-to-action
        nodes.append({
            "id": "1:2",
            "type": "FRAME",
            "name": "Hero",
            "styles": {
                "backgroundColor": {"r": 0.06, "g": 0.09, "b": 0.16},
                "padding": "64px 32px",
                "gap": 24,
                "flexDirection": "VERTICAL",
            },
            "children": [
                {
                    "id": "1:3",
                    "type": "TEXT",
                    "name": "Hero Title",
                    "content": "Ship designs faster",
                    "styles": {"fontSize": 48, "fontWeight": 700, "color": "#FFFFFF"},
                },
                {
                    "id": "1:4",
                    "type": "TEXT",
                    "name": "Hero body copy",
                    "content": "Turn design frames into editable pages in one step.",
                    "styles": {"fontSize": 18, "fontWeight": 400, "color": {"r": 0.8, "g": 0.84, "b": 0.88}},
                },
                {
                    "id": "1:5",
                    "type": "INSTANCE",
                    "name": "Primary Button",
                    "content": "Get started",
                    "styles": {
                        "backgroundColor": "#2563EB",
                        "color": "#FFFFFF",
                        "borderRadius": "8px",
                        "padding": {"top": 12, "right": 24, "bottom": 12, "left": 24},
                    },
                },
            ],
        })

        # Features: cards with icon, heading and text
        cards = []
        for index, (title, body) in enumerate([
            ("Typed styles", "Every value carries its kind."),
            ("Stable order", "Siblings keep their design order."),
        ]):
            base = 10 + index * 10
            cards.append({
                "id": f"2:{base}",
                "type": "FRAME",
                "name": "Feature card",
                "styles": {"backgroundColor": "#F8FAFC", "borderRadius": 12, "padding": 24},
                "children": [
                    {"id": f"2:{base + 1}", "type": "VECTOR", "name": "Icon", "styles": {"width": 32, "height": 32}},
                    {
                        "id": f"2:{base + 2}",
                        "type": "TEXT",
                        "name": "Card heading",
                        "content": title,
                        "styles": {"fontSize": 22, "fontWeight": 600},
                    },
                    {
                        "id": f"2:{base + 3}",
                        "type": "TEXT",
                        "name": "Card text",
                        "content": body,
                        "styles": {"fontSize": 14, "textAlign": "LEFT"},
                    },
                ],
            })

        nodes.append({
            "id": "2:1",
            "type": "FRAME",
            "name": "Features",
            "styles": {"gap": "32px", "flexDirection": "HORIZONTAL", "padding": 48},
            "children": cards,
        })

        # Footer image and divider
        nodes.append({"id": "3:1", "type": "IMAGE", "name": "Footer logo", "styles": {"width": 120}})
        nodes.append({"id": "3:2", "type": "RECTANGLE", "name": "Divider", "styles": {"height": "1px"}})

        return nodes
