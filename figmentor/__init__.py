"""
Figmentor: converts design trees into page-builder documents.

Maps Figma-style node trees onto typed page-builder widgets, normalizing
spacing, color and typography along the way.
"""

__version__ = "0.1.0"
__author__ = "Figmentor Project"

# Import main components
from .exceptions import FigmentorError, ConversionError, ImporterError
from .models import SourceNode, TargetWidget, Document, TypedValue, ElementKind
from .mapper import TreeMapper, convert_nodes
from .assemblers import assembler_registry, render_document
from .importers import BaseImporter, MockImporter, FileImporter, FigmaAPIImporter

__all__ = [
    "FigmentorError",
    "ConversionError",
    "ImporterError",
    "SourceNode",
    "TargetWidget",
    "Document",
    "TypedValue",
    "ElementKind",
    "TreeMapper",
    "convert_nodes",
    "assembler_registry",
    "render_document",
    "BaseImporter",
    "MockImporter",
    "FileImporter",
    "FigmaAPIImporter"
]
