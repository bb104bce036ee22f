"""
File importer for Figmentor.

Reads source nodes previously exported to a JSON or YAML file. The file holds
either a bare list of nodes or a mapping with ``nodes`` (or ``blocks``) and an
optional ``name``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..exceptions import ImporterError
from .base import BaseImporter

YAML_SUFFIXES = {".yaml", ".yml"}


class FileImporter(BaseImporter):
    """
    Importer for source nodes stored on disk.
    """

    def __init__(self, path: str):
        """
        Initialize the file importer.

        Args:
            path: Path to a .json, .yaml or .yml file
        """
        self.path = Path(path)
        self._data: Optional[Any] = None
        logging.info(f"Initialized file importer for: {self.path}")

    def _load(self) -> Any:
        if self._data is not None:
            return self._data

        if not self.path.is_file():
            raise ImporterError(f"Design file not found: {self.path}")

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                if self.path.suffix.lower() in YAML_SUFFIXES:
                    self._data = yaml.safe_load(f)
                else:
                    self._data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ImporterError(f"Failed to parse design file {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ImporterError(f"Design file {self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise ImporterError(f"Failed to read design file {self.path}: {e}") from e

        logging.info(f"Loaded design data from {self.path}")
        return self._data

    def get_nodes(self) -> List[Dict[str, Any]]:
        data = self._load()
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            nodes = data.get("nodes", data.get("blocks"))
            if isinstance(nodes, list):
                return nodes
        raise ImporterError(f"{self.path} holds neither a node list nor a mapping with 'nodes'")

    def get_metadata(self) -> Dict[str, Any]:
        data = self._load()
        if isinstance(data, dict) and data.get("name"):
            return {"name": str(data["name"])}
        return {"name": self.path.stem}
