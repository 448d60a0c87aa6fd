"""
Command-line interface for the document-to-Markdown converter.
"""

import os
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Dict, Any, Optional, Union
import inquirer
import yaml
from tqdm import tqdm

from .dispatcher import DocumentDispatcher, EXTENSION_FORMATS
from .errors import ConversionError
from .models import DocumentFormat, SourceFile, MarkdownDocument
from .utils.file_handler import read_bytes, read_file, read_yaml, write_file
from .utils.logger import get_logger, set_log_level, enable_debug_logging
from .validation.config_validator import ConfigValidator

logger = get_logger(__name__)

FORMAT_CHOICES = [document_format.value for document_format in DocumentFormat]

def get_input_files(directory: Union[str, Path], recursive: bool = True) -> List[Path]:
    """
    Scan a directory for files the converter understands.

    Args:
        directory: Directory to scan
        recursive: Whether to descend into subdirectories

    Returns:
        Sorted list of convertible files
    """
    directory = Path(directory)
    if not directory.exists() or not directory.is_dir():
        logger.error(f"Directory does not exist: {directory}")
        return []

    pattern = "**/*" if recursive else "*"
    files = [path for path in directory.glob(pattern)
             if path.is_file() and path.suffix.lower() in EXTENSION_FORMATS]
    return sorted(files)

def expand_paths(paths: List[str], recursive: bool = False) -> List[Path]:
    """Resolve command-line paths into a list of files, expanding directories."""
    files = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            files.extend(get_input_files(path, recursive))
        elif path.exists():
            files.append(path)
        else:
            logger.error(f"Input file or directory not found: {path}")
    return files

def load_config(config_path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """
    Load and validate a YAML configuration file.

    Args:
        config_path: Path to the YAML file, or None for defaults

    Returns:
        Configuration dictionary

    Raises:
        ValueError: If the file contents are not a valid configuration
    """
    if not config_path:
        return {}

    settings = read_yaml(config_path)
    result = ConfigValidator().validate(settings)
    if not result.is_valid:
        raise ValueError("Invalid configuration: " + "; ".join(result.errors))

    logger.debug(f"Loaded configuration from {config_path}")
    return settings

def select_input_files(files: List[Path]) -> List[Path]:
    """
    Display an interactive prompt for the user to tick the files to convert.

    Args:
        files: Files to choose from

    Returns:
        Selected files, empty if cancelled
    """
    if not files:
        logger.error("No convertible files found")
        return []

    choices = [(f"{path} ({path.stat().st_size / 1024:.1f} KB)", str(path)) for path in files]
    questions = [
        inquirer.Checkbox(
            'files',
            message="Select the files to convert (space to tick, enter to confirm)",
            choices=choices
        )
    ]

    answers = inquirer.prompt(questions)
    if not answers:
        return []
    selected = set(answers.get('files', []))
    return [path for path in files if str(path) in selected]

def convert_paths(files: List[Path], output_dir: Optional[Path] = None,
                  format_hint: Optional[str] = None,
                  config: Optional[Dict[str, Any]] = None) -> List[Path]:
    """
    Convert files from disk and write one Markdown file per input.

    Args:
        files: Input files
        output_dir: Directory for the results (default: next to each input)
        format_hint: Format to use instead of detecting it from the extension
        config: Converter configuration

    Returns:
        Paths of the written files
    """
    sources = [SourceFile(name=path.name, data=read_bytes(path), format_hint=format_hint)
               for path in files]
    dispatcher = DocumentDispatcher(config)

    with tqdm(total=len(sources), desc="Converting", unit="file") as progress:
        def on_progress(done: int) -> None:
            progress.n = done
            progress.refresh()

        documents = dispatcher.convert_files(sources, on_progress)

    written = []
    for path, document in zip(files, documents):
        target_dir = output_dir if output_dir else path.parent
        written.append(save_document(document, target_dir))
    return written

def save_document(document: MarkdownDocument, output_dir: Path) -> Path:
    """Write a converted document into a directory."""
    os.makedirs(output_dir, exist_ok=True)
    output_file = Path(output_dir) / document.name
    write_file(document.content, output_file)
    logger.info(f"Output saved to {output_file}")
    return output_file

def convert_command(argv: Optional[List[str]] = None) -> int:
    """Convert files given on the command line."""
    parser = argparse.ArgumentParser(prog="docmark convert",
                                     description="Convert documents to Markdown")

    parser.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to convert"
    )

    parser.add_argument(
        "-o", "--output",
        help="Directory to save Markdown output (default: next to each input)"
    )

    parser.add_argument(
        "--format",
        choices=FORMAT_CHOICES,
        help="Treat every input as this format instead of using its extension"
    )

    parser.add_argument(
        "--recursive",
        action="store_true",
        help="Descend into subdirectories of directory arguments"
    )

    parser.add_argument(
        "--config",
        help="YAML file with converter settings"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    if args.debug:
        enable_debug_logging()
    else:
        set_log_level(logging.INFO)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return 1

    files = expand_paths(args.paths, args.recursive)
    if not files:
        print("No files to convert.")
        return 1

    output_dir = Path(args.output) if args.output else None
    written = convert_paths(files, output_dir, args.format, config)

    failed = [path for path in written if path.name.startswith("ERROR_")]
    print(f"Converted {len(written) - len(failed)} of {len(written)} files")
    return 1 if len(failed) == len(written) else 0

def markup_command(argv: Optional[List[str]] = None) -> int:
    """Split a saved HTML page into slide documents."""
    parser = argparse.ArgumentParser(prog="docmark markup",
                                     description="Convert a saved HTML page, one document per slide")

    parser.add_argument(
        "input",
        help="Path to the saved HTML page"
    )

    parser.add_argument(
        "--source",
        help="Label recorded as the page's source (default: the file name)"
    )

    parser.add_argument(
        "-o", "--output",
        help="Directory to save the documents (default: next to the input)"
    )

    parser.add_argument(
        "--config",
        help="YAML file with converter settings"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    if args.debug:
        enable_debug_logging()
    else:
        set_log_level(logging.INFO)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    try:
        config = load_config(args.config)
        markup = read_file(input_path, config.get('encoding', 'utf-8'))
        documents = DocumentDispatcher(config).convert_markup(markup, args.source or input_path.name)
    except (OSError, ValueError, yaml.YAMLError, ConversionError) as e:
        logger.error(f"Error converting {input_path}: {str(e)}")
        print(f"ERROR: {e}")
        return 1

    output_dir = Path(args.output) if args.output else input_path.parent
    for document in documents:
        save_document(document, output_dir)

    print(f"Wrote {len(documents)} documents to {output_dir}")
    return 0

def main() -> int:
    """Interactive entry point."""
    set_log_level(logging.INFO)
    questions = [
        inquirer.Text(
            'directory',
            message="Directory to scan for documents",
            default="."
        ),
        inquirer.Confirm(
            'recursive',
            message="Include subdirectories?",
            default=True
        ),
    ]
    answers = inquirer.prompt(questions)
    if not answers:
        return 1

    files = select_input_files(get_input_files(answers['directory'], answers['recursive']))
    if not files:
        print("No files selected. Exiting.")
        return 1

    questions = [
        inquirer.Text(
            'output_dir',
            message="Directory for the Markdown files (leave empty to write next to each input)",
            default=""
        ),
    ]
    answers = inquirer.prompt(questions) or {}
    output_dir = answers.get('output_dir', '').strip()

    print(f"\nConverting {len(files)} files")
    written = convert_paths(files, Path(output_dir) if output_dir else None)
    for path in written:
        print(f"  {path}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
