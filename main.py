#!/usr/bin/env python3
"""
Figmentor - Design to Page-Builder Converter

Main entry point for Figmentor. This orchestrator coordinates the pipeline
from design-data import through tree conversion to the written document.
"""

import json
import logging
import sys
import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from figmentor import __version__
from figmentor.assemblers import assembler_registry, render_document
from figmentor.config import config
from figmentor.exceptions import FigmentorError
from figmentor.importers import BaseImporter, FigmaAPIImporter, FileImporter, MockImporter
from figmentor.mapper import TreeMapper


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def get_output_path(title: str, output_dir: Optional[str] = None) -> str:
    """
    Determine the output file path for a converted document.

    Args:
        title: The document title

    Returns:
        Path of the JSON file the document is written to
    """
    # Create a safe filename from the title
    safe_name = title.strip().replace(' ', '_').replace('/', '_').replace('\\', '_')
    # Remove any characters that might be problematic in filenames
    safe_name = ''.join(c for c in safe_name if c.isalnum() or c in '_-')

    directory = output_dir or config.output_directory
    return f"{directory}/{safe_name or 'document'}.json"


def build_importer(importer_name: str, input_path: Optional[str] = None,
                   figma_url: Optional[str] = None) -> BaseImporter:
    """
    Create the importer selected on the command line.

    Raises:
        ValueError: If the arguments the importer needs are missing
    """
    if importer_name == "mock":
        return MockImporter()
    if importer_name == "file":
        if not input_path:
            raise ValueError("--input is required for the file importer")
        return FileImporter(input_path)
    if importer_name == "figma":
        if not figma_url:
            raise ValueError("--figma-url is required for the figma importer")
        return FigmaAPIImporter.from_url(figma_url)
    raise ValueError(f"Unknown importer: {importer_name}")


def write_document(rendered: Dict[str, Any], output_path: str) -> None:
    """
    Write a rendered document as pretty-printed JSON.

    Args:
        rendered: The rendered document
        output_path: Where the file should be created
    """
    file_path = Path(output_path)

    # Create the directory if it doesn't exist
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(rendered, f, indent=2, ensure_ascii=False)

    logging.info(f"Wrote document: {output_path}")


def run_conversion(importer: BaseImporter, schema: Optional[str] = None,
                   deterministic_ids: bool = False, title: Optional[str] = None,
                   output_path: Optional[str] = None) -> str:
    """
    Execute the pipeline: import -> convert -> render -> write.

    Returns:
        Path of the written document
    """
    logging.info("Starting Figmentor conversion...")

    nodes = importer.get_nodes()
    metadata = dict(importer.get_metadata())
    if title:
        metadata["name"] = title
    logging.info(f"Retrieved {len(nodes)} top-level nodes from {type(importer).__name__}")

    mapper = TreeMapper(id_mode="deterministic" if deterministic_ids else None)
    document = mapper.convert(nodes, metadata)

    rendered = render_document(document, schema)

    output_path = output_path or get_output_path(document.title)
    write_document(rendered, output_path)

    logging.info(f"Conversion completed. {document.widget_count()} widgets written.")
    return output_path


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Figmentor - Design to Page-Builder Converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                        # Convert the built-in mock design
  python main.py --importer file --input design.json    # Convert exported source nodes
  python main.py --importer figma --figma-url "https://www.figma.com/design/KEY/Name?node-id=1-2"
  python main.py --schema legacy --deterministic-ids    # Legacy section/column output, stable ids
        """
    )

    parser.add_argument(
        "--importer",
        choices=["mock", "file", "figma"],
        default="mock",
        help="Design data importer to use (default: mock)"
    )

    parser.add_argument(
        "--input",
        type=str,
        help="Path to a JSON/YAML file of source nodes (file importer)"
    )

    parser.add_argument(
        "--figma-url",
        type=str,
        help="Figma file or node URL (figma importer)"
    )

    parser.add_argument(
        "--schema",
        choices=assembler_registry.list_assemblers(),
        default=None,
        help=f"Output schema (default: {config.schema})"
    )

    parser.add_argument(
        "--deterministic-ids",
        action="store_true",
        help="Derive style class ids from node ids and paths instead of random suffixes"
    )

    parser.add_argument(
        "--title",
        type=str,
        help="Document title (defaults to the design name)"
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Output file path (default: <output_dir>/<title>.json)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Figmentor {__version__}"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    logging.info("Figmentor - Design to Page-Builder Converter")

    importer = None
    try:
        importer = build_importer(args.importer, args.input, args.figma_url)
        output_path = run_conversion(
            importer,
            schema=args.schema,
            deterministic_ids=args.deterministic_ids,
            title=args.title,
            output_path=args.output,
        )
        print(f"\nDocument written to {output_path}")

    except KeyboardInterrupt:
        logging.info("Conversion interrupted by user")
        print("\nConversion interrupted.")

    except (FigmentorError, ValueError) as e:
        logging.error(f"Conversion failed: {e}")
        print(f"\nConversion failed: {e}")
        sys.exit(1)

    finally:
        if isinstance(importer, FigmaAPIImporter):
            importer.close()


if __name__ == "__main__":
    main()
