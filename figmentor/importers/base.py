"""
Base importer interface for Figmentor.

This module defines the abstract interface that all design-data importers must
implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseImporter(ABC):
    """
    Abstract base class for all design-data importers.

    Each importer resolves data from a specific source (Figma REST API, exported
    JSON/YAML files, ...) into the source node grammar consumed by the
    TreeMapper: mappings with id, name, type, content, styles and children.
    """

    @abstractmethod
    def get_nodes(self) -> List[Dict[str, Any]]:
        """
        Retrieve the top-level source nodes.

        Returns:
            List of source node mappings
        """
        pass

    @abstractmethod
    def get_metadata(self) -> Dict[str, Any]:
        """
        Retrieve top-level metadata of the design.

        Returns:
            Mapping with an optional ``name`` used as document title
        """
        pass
