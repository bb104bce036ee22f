"""
Assembler Registry for Figmentor.

This module keeps the registry of available document assemblers, keyed by
schema name. Registering a new assembler makes its schema available to the
CLI and to ``render_document``.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import config
from ..exceptions import ConversionError
from ..models import Document
from .atomic import AtomicAssembler
from .base import BaseAssembler
from .legacy import LegacyAssembler


class AssemblerRegistry:
    """
    Registry of all available document assemblers.
    """

    def __init__(self):
        """Initialize the registry with the default assemblers."""
        self._assemblers: Dict[str, BaseAssembler] = {}
        self._register_default_assemblers()

    def _register_default_assemblers(self):
        """Register the assemblers shipped with Figmentor."""
        self.register_assembler(AtomicAssembler())
        self.register_assembler(LegacyAssembler())

    def register_assembler(self, assembler: BaseAssembler) -> None:
        """
        Register an assembler under its name, replacing any previous one.

        Args:
            assembler: The assembler to register
        """
        if not assembler.name:
            raise ValueError("Assemblers must define a non-empty name")
        self._assemblers[assembler.name] = assembler

    def get_assembler(self, name: str) -> Optional[BaseAssembler]:
        """
        Get an assembler by schema name.

        Args:
            name: The schema name

        Returns:
            The assembler, or None if not found
        """
        return self._assemblers.get(name)

    def list_assemblers(self) -> List[str]:
        """
        Get a list of all registered schema names.

        Returns:
            List of schema names
        """
        return list(self._assemblers.keys())


# Global assembler registry instance
assembler_registry = AssemblerRegistry()


def render_document(document: Document, schema: Optional[str] = None,
                    registry: Optional[AssemblerRegistry] = None) -> Dict[str, Any]:
    """
    Render a document with the assembler registered for a schema.

    Args:
        document: The converted Document
        schema: Schema name (defaults to config value)
        registry: Registry to look the assembler up in (defaults to the global one)

    Returns:
        The rendered document

    Raises:
        ConversionError: If no assembler is registered for the schema
    """
    schema = schema or config.schema
    registry = registry or assembler_registry
    assembler = registry.get_assembler(schema)
    if assembler is None:
        raise ConversionError(
            f"Unknown output schema '{schema}'. Available: {', '.join(registry.list_assemblers())}"
        )
    logging.info(f"Rendering document '{document.title}' with the {schema} assembler")
    return assembler.assemble(document)
