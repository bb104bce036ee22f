"""Recursive conversion of source node trees into widget trees."""

from .classifier import classify, header_rank
from .identifiers import IdGenerator, sanitize_id
from .tree_mapper import TreeMapper, convert_nodes, validate_nodes

__all__ = [
    "classify",
    "header_rank",
    "IdGenerator",
    "sanitize_id",
    "TreeMapper",
    "convert_nodes",
    "validate_nodes"
]
