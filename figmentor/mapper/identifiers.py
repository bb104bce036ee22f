"""
Identifier generation for converted widgets.

Widget ids are source ids stripped of characters the page builder rejects.
Style class ids add a prefix and a short suffix, which is either random or
derived from the node id and its path from the root so that repeated
conversions of the same input agree.
"""

import hashlib
import re
import uuid
from typing import Sequence

from ..models import SourceNode

INVALID_ID_CHARS = re.compile(r'[^A-Za-z0-9_-]')

ID_MODES = ("random", "deterministic")


def sanitize_id(raw: str) -> str:
    """Remove every character not allowed in target identifiers (e.g. colons)."""
    return INVALID_ID_CHARS.sub('', raw or '')


def format_path(path: Sequence[int]) -> str:
    """Render a path of sibling indices as ``0.2.1``."""
    return '.'.join(str(index) for index in path)


class IdGenerator:
    """
    Generates widget and style class identifiers for one conversion.

    Each conversion gets its own generator; no sequence state is shared
    between conversions.
    """

    def __init__(self, mode: str = "random", class_prefix: str = "e-", suffix_length: int = 7):
        """
        Args:
            mode: "random" for uuid4 suffixes, "deterministic" for hashed suffixes
            class_prefix: Prefix of every style class id
            suffix_length: Number of hex characters in each suffix
        """
        if mode not in ID_MODES:
            raise ValueError(f"Unknown id mode '{mode}', expected one of {', '.join(ID_MODES)}")
        self.mode = mode
        self.class_prefix = class_prefix
        self.suffix_length = max(1, min(int(suffix_length), 32))

    def suffix(self, node: SourceNode, path: Sequence[int], salt: str = "") -> str:
        """Short hex suffix for a node at the given path."""
        if self.mode == "deterministic":
            seed = f"{node.id}/{format_path(path)}{salt}"
            return hashlib.sha1(seed.encode('utf-8')).hexdigest()[:self.suffix_length]
        return uuid.uuid4().hex[:self.suffix_length]

    def widget_id(self, node: SourceNode, path: Sequence[int]) -> str:
        """Identifier of the widget built from node."""
        sanitized = sanitize_id(node.id)
        if sanitized:
            return sanitized
        return f"w{self.suffix(node, path, salt='#widget')}"

    def class_id(self, node: SourceNode, path: Sequence[int]) -> str:
        """Identifier of the style class attached to the widget built from node."""
        return f"{self.class_prefix}{sanitize_id(node.id)}-{self.suffix(node, path)}"
