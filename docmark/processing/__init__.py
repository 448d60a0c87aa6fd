"""
docmark - Processing Module

Line classification, table parsing, JSON value trees and the Markdown
cleanup pass shared by the converters.
"""

from .text_cleaner import TextCleaner, cleanup_markdown
from .table_processor import TableProcessor, NumericColumnSummary, render_markdown_table
from .json_tree import JsonKind, JsonValue, parse_json
from .line_processor import LineProcessor
from .text_structure import LineClass, LineKind, ListKind

__all__ = ['TextCleaner', 'cleanup_markdown', 'TableProcessor', 'NumericColumnSummary',
           'render_markdown_table', 'JsonKind', 'JsonValue', 'parse_json',
           'LineProcessor', 'LineClass', 'LineKind', 'ListKind']
