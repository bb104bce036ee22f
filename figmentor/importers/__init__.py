"""Design-data importers for various sources."""

from .base import BaseImporter
from .mock import MockImporter
from .file import FileImporter
from .figma_api import FigmaAPIImporter, parse_figma_url

__all__ = ["BaseImporter", "MockImporter", "FileImporter", "FigmaAPIImporter", "parse_figma_url"]
