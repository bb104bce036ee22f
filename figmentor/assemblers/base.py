"""
Base assembler interface for Figmentor.

This module defines the abstract interface that all document assemblers must
implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..models import Document


class BaseAssembler(ABC):
    """
    Abstract base class for all document assemblers.

    Each assembler renders the internal Document model into one external
    page-builder schema (atomic class-based widgets, legacy section/column
    nesting, ...) as plain JSON-compatible data.
    """

    name: str = ""

    @abstractmethod
    def assemble(self, document: Document) -> Dict[str, Any]:
        """
        Render a document into the assembler's schema.

        Args:
            document: The converted Document

        Returns:
            JSON-compatible dictionary in the external schema
        """
        pass
