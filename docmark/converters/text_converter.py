"""
Converter that infers Markdown structure from unmarked plain text.
"""

import re
from typing import Dict, Any, List, Optional

from ..processing.line_processor import LineProcessor
from ..processing.text_structure import LineContext, LineKind
from ..utils.logger import get_logger

logger = get_logger(__name__)

EXCESS_NEWLINES = re.compile(r'\n{4,}')
BARE_URL = re.compile(r'(?<!\S)(https?://\S+)')
BARE_EMAIL = re.compile(r'(?<!\S)([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})(?!\S)')

class TextConverter:
    """Rebuilds headings, lists, code, quotes and links from plain text."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None, line_processor: Optional[LineProcessor] = None):
        """
        Initialize the text converter.
        
        Args:
            config: Optional configuration options
            line_processor: Line classifier to use (defaults to the standard rules)
        """
        self.config = config or {}
        self.line_processor = line_processor or LineProcessor()
        
    def convert(self, text: str) -> str:
        """
        Convert plain text to Markdown.
        
        Args:
            text: Unmarked text
            
        Returns:
            Markdown string
        """
        lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
        output: List[str] = []
        seen_content = False
        skip_underline = False
        
        for index, line in enumerate(lines):
            if skip_underline:
                # The =/- underline was folded into the heading above it
                skip_underline = False
                continue
            
            stripped = line.strip()
            next_text = lines[index + 1].strip() if index + 1 < len(lines) else ''
            context = LineContext(
                original=line,
                text=stripped,
                next_text=next_text,
                is_first=not seen_content
            )
            if stripped:
                seen_content = True
            
            rendered, line_class = self.line_processor.process(context)
            output.append(rendered)
            
            if line_class.kind is LineKind.HEADER and line_class.underlined:
                skip_underline = True
        
        markdown = '\n'.join(output)
        markdown = EXCESS_NEWLINES.sub('\n\n\n', markdown)
        markdown = link_bare_addresses(markdown)
        
        markdown = markdown.strip()
        return markdown + '\n' if markdown else ''

def link_bare_addresses(text: str) -> str:
    """
    Rewrite bare URLs and e-mail addresses as Markdown links.
    
    Only whitespace-delimited tokens are rewritten; the whitespace around
    them is left as it was.
    """
    text = BARE_URL.sub(r'[\1](\1)', text)
    return BARE_EMAIL.sub(r'[\1](mailto:\1)', text)
