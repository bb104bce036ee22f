"""
Unit tests for the tree mapper.

Tests node classification, identifier generation and whole-tree conversion:
totality over partial input, sibling order, defaults and structural failures.
"""

import unittest

from figmentor.exceptions import ConversionError
from figmentor.mapper import TreeMapper, classify, convert_nodes, header_rank, sanitize_id, validate_nodes
from figmentor.mapper.identifiers import IdGenerator
from figmentor.models import Document, ElementKind, SourceNode, TypedValue


def text_node(name="Text", content="Hello", **styles):
    return {"id": "9:1", "type": "TEXT", "name": name, "content": content, "styles": styles}


def props_of(widget):
    return widget.primary_style.props


class TestClassification(unittest.TestCase):
    """Test the first-match classification rules."""

    def classify_raw(self, raw):
        return classify(SourceNode.model_validate(raw))

    def test_large_text_is_heading_rank_one(self):
        """Test fontSize 32 always gives a rank 1 heading."""
        self.assertEqual(self.classify_raw(text_node(fontSize=32)), (ElementKind.HEADING, 1))
        self.assertEqual(self.classify_raw(text_node(name="body copy", fontSize=32, fontWeight=100)),
                         (ElementKind.HEADING, 1))

    def test_body_copy_is_paragraph(self):
        """Test regular small text is a paragraph."""
        kind, rank = self.classify_raw(text_node(name="body copy", fontSize=14, fontWeight=400))
        self.assertEqual(kind, ElementKind.PARAGRAPH)
        self.assertIsNone(rank)

    def test_bold_text_is_heading(self):
        """Test weight 600 makes a heading even at small sizes."""
        self.assertEqual(self.classify_raw(text_node(fontSize=14, fontWeight=600)), (ElementKind.HEADING, 6))
        self.assertEqual(self.classify_raw(text_node(fontWeight="bold")), (ElementKind.HEADING, 6))

    def test_heading_name_hints(self):
        """Test names containing heading/title are headings, case-insensitively."""
        self.assertEqual(self.classify_raw(text_node(name="Section TITLE"))[0], ElementKind.HEADING)
        self.assertEqual(self.classify_raw(text_node(name="subHeading", fontSize=18)), (ElementKind.HEADING, 5))

    def test_font_size_just_at_threshold(self):
        """Test 20px text is not a heading on size alone."""
        self.assertEqual(self.classify_raw(text_node(fontSize=20))[0], ElementKind.PARAGRAPH)
        self.assertEqual(self.classify_raw(text_node(fontSize="21px")), (ElementKind.HEADING, 4))

    def test_header_ranks(self):
        """Test the font size thresholds of every rank."""
        expected = {40: 1, 32: 1, 30: 2, 28: 2, 24: 3, 20: 4, 19: 5, 18: 5, 17: 6, 10: 6}
        for size, rank in expected.items():
            self.assertEqual(header_rank(size), rank, f"font size {size}")

    def test_buttons(self):
        """Test names with button/btn and component instances are buttons."""
        self.assertEqual(self.classify_raw({"type": "FRAME", "name": "Primary Button"})[0], ElementKind.BUTTON)
        self.assertEqual(self.classify_raw({"type": "RECTANGLE", "name": "cta-btn"})[0], ElementKind.BUTTON)
        self.assertEqual(self.classify_raw({"type": "INSTANCE", "name": "Avatar"})[0], ElementKind.BUTTON)

    def test_text_rules_win_over_button_name(self):
        """Test a text node named like a button stays text."""
        self.assertEqual(self.classify_raw(text_node(name="Button label", fontSize=14))[0], ElementKind.PARAGRAPH)

    def test_containers(self):
        """Test frames, groups and containers are containers."""
        for node_type in ("FRAME", "GROUP", "CONTAINER", "frame"):
            self.assertEqual(self.classify_raw({"type": node_type, "name": "Box"})[0], ElementKind.CONTAINER)

    def test_images_and_vectors(self):
        """Test image and vector types."""
        self.assertEqual(self.classify_raw({"type": "IMAGE"})[0], ElementKind.IMAGE)
        self.assertEqual(self.classify_raw({"type": "VECTOR"})[0], ElementKind.VECTOR)
        self.assertEqual(self.classify_raw({"type": "ELLIPSE"})[0], ElementKind.VECTOR)

    def test_fallback_block(self):
        """Test unknown types fall back to a generic block."""
        self.assertEqual(self.classify_raw({"type": "RECTANGLE", "name": "Divider"}), (ElementKind.BLOCK, None))
        self.assertEqual(self.classify_raw({"type": "SOMETHING_NEW"})[0], ElementKind.BLOCK)


class TestIdentifiers(unittest.TestCase):
    """Test identifier generation."""

    def setUp(self):
        self.node = SourceNode(id="12:34", type="FRAME")

    def test_sanitize_removes_colons(self):
        """Test reserved characters are removed."""
        self.assertEqual(sanitize_id("12:34"), "1234")
        self.assertEqual(sanitize_id("I5:6;7:8"), "I5678")
        self.assertEqual(sanitize_id("a_b-c"), "a_b-c")
        self.assertEqual(sanitize_id(""), "")

    def test_class_id_shape(self):
        """Test prefix, sanitized id and suffix."""
        ids = IdGenerator("random", "e-", 7)
        class_id = ids.class_id(self.node, (0,))
        self.assertTrue(class_id.startswith("e-1234-"))
        self.assertEqual(len(class_id), len("e-1234-") + 7)
        self.assertNotIn(":", class_id)

    def test_deterministic_ids_are_stable(self):
        """Test the deterministic mode depends only on node id and path."""
        first = IdGenerator("deterministic").class_id(self.node, (0, 1))
        second = IdGenerator("deterministic").class_id(self.node, (0, 1))
        other_path = IdGenerator("deterministic").class_id(self.node, (0, 2))
        self.assertEqual(first, second)
        self.assertNotEqual(first, other_path)

    def test_widget_id_fallback(self):
        """Test nodes without a usable id still get an identifier."""
        ids = IdGenerator("deterministic")
        node = SourceNode(id="::", type="FRAME")
        widget_id = ids.widget_id(node, (3,))
        self.assertTrue(widget_id.startswith("w"))
        self.assertEqual(widget_id, IdGenerator("deterministic").widget_id(node, (3,)))

    def test_unknown_mode(self):
        """Test unknown id modes are rejected."""
        with self.assertRaises(ValueError):
            IdGenerator("sequential")
        with self.assertRaises(ValueError):
            TreeMapper(id_mode="sequential")


class TestTreeMapper(unittest.TestCase):
    """Test whole-tree conversion."""

    def setUp(self):
        self.mapper = TreeMapper(id_mode="random")

    def test_end_to_end_heading(self):
        """Test the single heading scenario."""
        document = self.mapper.convert([
            {"id": "1:2", "type": "TEXT", "name": "Title", "content": "Hello",
             "styles": {"fontSize": 32, "fontWeight": 700}}
        ])

        self.assertIsInstance(document, Document)
        self.assertEqual(len(document.content), 1)
        widget = document.content[0]
        self.assertEqual(widget.element_kind, ElementKind.HEADING)
        self.assertEqual(widget.header_rank, 1)
        self.assertEqual(widget.id, "12")
        self.assertEqual(widget.settings["title"].value, "Hello")
        self.assertEqual(widget.settings["level"], TypedValue.string("h1"))
        self.assertEqual(props_of(widget)["font-size"].value, {"size": 32, "unit": "px"})
        self.assertEqual(props_of(widget)["font-weight"].value, "700")

    def test_style_block_shape(self):
        """Test one desktop/none variant keyed by the class listed in settings."""
        widget = self.mapper.convert([text_node()]).content[0]
        self.assertEqual(len(widget.style_block), 1)
        class_id, definition = next(iter(widget.style_block.items()))
        self.assertEqual(widget.settings["classes"].value, [class_id])
        self.assertEqual(widget.settings["classes"].kind, "classes")
        self.assertEqual(definition.id, class_id)
        self.assertEqual(len(definition.variants), 1)
        self.assertEqual(definition.variants[0].breakpoint, "desktop")
        self.assertEqual(definition.variants[0].state, "none")

    def test_container_defaults(self):
        """Test a container without styles gets schema defaults."""
        widget = self.mapper.convert([{"id": "1:1", "type": "FRAME", "name": "Box"}]).content[0]
        props = props_of(widget)
        self.assertEqual(props["background-color"].value, "#FFFFFF")
        self.assertEqual(props["padding"], TypedValue.size(0, "px"))
        self.assertEqual(props["gap"], TypedValue.size(0, "px"))
        self.assertEqual(props["flex-direction"].value, "row")

    def test_fill_color(self):
        """Test an RGB fill on a container."""
        widget = self.mapper.convert([
            {"id": "1:1", "type": "FRAME", "styles": {"backgroundColor": {"r": 1, "g": 0, "b": 0}}}
        ]).content[0]
        self.assertEqual(props_of(widget)["background-color"].value, "#FF0000")

    def test_spacing_is_normalized(self):
        """Test container padding strings become four-sided descriptors."""
        widget = self.mapper.convert([
            {"id": "1:1", "type": "FRAME", "styles": {"padding": "32px 20px", "margin": 24}}
        ]).content[0]
        padding = props_of(widget)["padding"]
        self.assertFalse(padding.is_linked)
        self.assertEqual(padding.side("top").value["size"], 32)
        self.assertEqual(padding.side("right").value["size"], 20)
        self.assertTrue(props_of(widget)["margin"].is_linked)

    def test_button_settings(self):
        """Test button label falls back from content to name."""
        document = self.mapper.convert([
            {"id": "1", "type": "INSTANCE", "name": "Buy", "content": "Buy now"},
            {"id": "2", "type": "FRAME", "name": "Sign up button"},
            {"id": "3", "type": "INSTANCE"},
        ])
        labels = [widget.settings["text"].value for widget in document.content]
        self.assertEqual(labels, ["Buy now", "Sign up button", "Button"])
        self.assertEqual(document.content[0].settings["link"].kind, "link")
        self.assertEqual(props_of(document.content[0])["font-weight"].value, "500")

    def test_paragraph_settings(self):
        """Test paragraph text and text defaults."""
        widget = self.mapper.convert([text_node(name="body copy", content="Lorem", fontSize=14)]).content[0]
        self.assertEqual(widget.element_kind, ElementKind.PARAGRAPH)
        self.assertEqual(widget.settings["paragraph"].value, "Lorem")
        self.assertEqual(props_of(widget)["color"].value, "#000000")
        self.assertEqual(props_of(widget)["text-align"].value, "left")

    def test_every_setting_and_prop_is_typed(self):
        """Test no raw value leaks into settings or props."""
        document = self.mapper.convert([
            {"id": "1", "type": "FRAME", "styles": {"custom": [1, 2], "gap": "8px"}, "children": [
                text_node(fontSize=40), {"id": "3", "type": "IMAGE", "name": "Logo"},
            ]}
        ])
        for widget in document.iter_widgets():
            for value in list(widget.settings.values()) + list(props_of(widget).values()):
                self.assertIsInstance(value, TypedValue)

    def test_sibling_order_preserved(self):
        """Test output order equals input order at every depth."""
        children = [
            {"id": f"2:{i}", "type": "TEXT" if i % 2 else "FRAME", "name": f"n{i}",
             "children": [{"id": f"3:{i}:{j}", "type": "RECTANGLE"} for j in range(3)] if i % 2 == 0 else []}
            for i in range(6)
        ]
        document = self.mapper.convert([{"id": "1:1", "type": "FRAME", "children": children}])
        root = document.content[0]
        self.assertEqual([w.source_id for w in root.children], [c["id"] for c in children])
        for widget, child in zip(root.children, children):
            self.assertEqual([w.source_id for w in widget.children], [c["id"] for c in child["children"]])

    def test_empty_input(self):
        """Test an empty list gives an empty document."""
        document = self.mapper.convert([])
        self.assertEqual(document.content, [])
        self.assertEqual(document.title, "Figma Design")
        self.assertEqual(document.document_kind, "page")

    def test_partial_nodes_are_total(self):
        """Test nodes with missing or junk fields still convert."""
        document = self.mapper.convert([
            {"type": "FRAME"},
            {"type": "TEXT", "styles": None},
            {"type": "GROUP", "styles": "oops", "children": None},
            {"type": "FRAME", "children": {"not": "a list"}},
            {"type": "TEXT", "name": None, "content": 42, "styles": {"fontSize": "huge", "color": "blue"}},
        ])
        self.assertEqual(len(document.content), 5)
        last = document.content[4]
        self.assertEqual(last.settings["paragraph"].value, "42")
        self.assertEqual(props_of(last)["font-size"].value, {"size": 0, "unit": "px"})
        self.assertEqual(props_of(last)["color"].value, "#000000")

    def test_deeply_nested(self):
        """Test a deep chain converts completely, leaf last."""
        node = {"id": "leaf", "type": "TEXT", "content": "deep"}
        for depth in range(600):
            node = {"id": f"d{depth}", "type": "GROUP", "children": [node]}
        document = self.mapper.convert([node])

        self.assertEqual(document.widget_count(), 601)
        widgets = list(document.iter_widgets())
        self.assertEqual(widgets[0].source_id, "d599")
        self.assertEqual(widgets[-1].source_id, "leaf")
        self.assertEqual(widgets[-1].settings["paragraph"].value, "deep")

    def test_deeply_nested_bad_leaf(self):
        """Test a missing type far down a deep chain is still reported."""
        node = {"id": "leaf"}
        for depth in range(600):
            node = {"id": f"d{depth}", "type": "GROUP", "children": [node]}
        with self.assertRaises(ConversionError):
            self.mapper.convert([node])

    def test_non_finite_style_numbers(self):
        """Test NaN and infinite style values fall back to defaults."""
        nan, inf = float("nan"), float("inf")
        document = self.mapper.convert([
            {"id": "1", "type": "TEXT", "styles": {"fontWeight": nan}},
            {"id": "2", "type": "TEXT", "styles": {"fontWeight": inf, "fontSize": inf}},
            {"id": "3", "type": "FRAME", "styles": {"backgroundColor": {"r": nan}, "padding": nan, "opacity": inf}},
        ])

        first, second, frame = document.content
        self.assertEqual(first.element_kind, ElementKind.PARAGRAPH)
        self.assertEqual(props_of(first)["font-weight"].value, "400")
        self.assertEqual(second.element_kind, ElementKind.PARAGRAPH)
        self.assertEqual(props_of(second)["font-weight"].value, "400")
        self.assertEqual(props_of(second)["font-size"].value, {"size": 0, "unit": "px"})
        self.assertEqual(props_of(frame)["background-color"].value, "#FFFFFF")
        self.assertEqual(props_of(frame)["padding"], TypedValue.size(0, "px"))
        self.assertEqual(props_of(frame)["opacity"].value, 0)

    def test_metadata_title(self):
        """Test the metadata name becomes the title."""
        self.assertEqual(self.mapper.convert([], {"name": "Landing"}).title, "Landing")

    def test_repeated_runs_same_shape(self):
        """Test two runs agree on everything except generated ids."""
        nodes = [{"id": "1:1", "type": "FRAME", "children": [text_node(fontSize=24), text_node(fontSize=12)]}]

        def shape(widget):
            return (
                widget.id,
                widget.element_kind,
                widget.header_rank,
                {k: v for k, v in widget.settings.items() if k != "classes"},
                props_of(widget),
                [shape(child) for child in widget.children],
            )

        first = self.mapper.convert(nodes)
        second = self.mapper.convert(nodes)
        self.assertEqual([shape(w) for w in first.content], [shape(w) for w in second.content])

    def test_deterministic_runs_identical(self):
        """Test deterministic mode reproduces the whole document."""
        nodes = [{"id": "1:1", "type": "FRAME", "children": [text_node(), {"type": "VECTOR"}]}]
        mapper = TreeMapper(id_mode="deterministic")
        self.assertEqual(mapper.convert(nodes).model_dump(), mapper.convert(nodes).model_dump())

    def test_map_node(self):
        """Test converting a single subtree."""
        widget = self.mapper.map_node({"id": "5:5", "type": "FRAME", "children": [text_node()]})
        self.assertEqual(widget.element_kind, ElementKind.CONTAINER)
        self.assertEqual(len(widget.children), 1)

    def test_convert_nodes_helper(self):
        """Test the module-level helper."""
        document = convert_nodes([text_node()], {"name": "Helper"}, id_mode="deterministic")
        self.assertEqual(document.title, "Helper")
        self.assertEqual(document.widget_count(), 1)


class TestStructuralFailures(unittest.TestCase):
    """Test the failures that abort a conversion."""

    def test_not_a_list(self):
        """Test non-list input is rejected."""
        with self.assertRaises(ConversionError):
            convert_nodes({"id": "1", "type": "FRAME"})
        with self.assertRaises(ConversionError):
            convert_nodes("nodes")

    def test_missing_type(self):
        """Test a node without type is rejected."""
        with self.assertRaises(ConversionError):
            convert_nodes([{"id": "1", "name": "No type"}])
        with self.assertRaises(ConversionError):
            convert_nodes([{"id": "1", "type": "   "}])

    def test_missing_type_deep_in_tree(self):
        """Test a nested node without type aborts the whole conversion."""
        nodes = [{"id": "1", "type": "FRAME", "children": [{"id": "2", "type": "GROUP", "children": [{"id": "3"}]}]}]
        with self.assertRaises(ConversionError):
            convert_nodes(nodes)

    def test_non_mapping_node(self):
        """Test list items that are not mappings are rejected."""
        with self.assertRaises(ConversionError):
            validate_nodes([{"type": "FRAME"}, "TEXT"])
        with self.assertRaises(ConversionError):
            validate_nodes([{"type": "FRAME", "children": ["TEXT"]}])

    def test_source_node_instances_accepted(self):
        """Test prebuilt SourceNode objects pass validation."""
        nodes = validate_nodes([SourceNode(type="FRAME"), {"type": "TEXT"}])
        self.assertEqual([node.type for node in nodes], ["FRAME", "TEXT"])


if __name__ == '__main__':
    unittest.main(verbosity=2)
