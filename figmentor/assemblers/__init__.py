"""Document assemblers rendering the internal model into page-builder schemas."""

from .base import BaseAssembler
from .atomic import AtomicAssembler
from .legacy import LegacyAssembler
from .registry import AssemblerRegistry, assembler_registry, render_document

__all__ = [
    "BaseAssembler",
    "AtomicAssembler",
    "LegacyAssembler",
    "AssemblerRegistry",
    "assembler_registry",
    "render_document"
]
