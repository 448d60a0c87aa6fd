"""
Converter modules for transforming each input format into Markdown.
"""

from .csv_converter import CsvConverter
from .docx_converter import DocxConverter
from .html_converter import HtmlConverter, MarkupRule, RuleBasedMarkdownConverter
from .json_converter import JsonConverter
from .text_converter import TextConverter

__all__ = ['CsvConverter', 'DocxConverter', 'HtmlConverter', 'MarkupRule',
           'RuleBasedMarkdownConverter', 'JsonConverter', 'TextConverter']
