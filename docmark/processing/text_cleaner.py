"""
Normalization pass applied to every generated Markdown document.
"""

import re
from typing import Dict, Any, List, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)

# Fenced code is masked so the prose rules cannot touch it
FENCE_PATTERN = re.compile(r'^(`{3,}|~{3,})[^\n]*\n.*?^\1[ \t]*$', re.MULTILINE | re.DOTALL)
PLACEHOLDER = '\x00FENCE{}\x00'
PLACEHOLDER_PATTERN = re.compile(r'\x00FENCE(\d+)\x00')

# Link targets, autolinks, URLs and inline code keep their punctuation
PROTECTED = r'\]\([^)\s]*\)|<[^<>\s]+>|[A-Za-z][A-Za-z0-9+.-]*://\S+|mailto:\S+|`[^`\n]+`'
SENTENCE_GAP = re.compile(r'(?P<keep>%s)|(?P<punct>[.!?])(?=[A-Z])' % PROTECTED)
CLAUSE_GAP = re.compile(r'(?P<keep>%s)|(?P<punct>[,;:])(?=[A-Za-z])' % PROTECTED)

HEADING_AFTER_TEXT = re.compile(r'(?<=[^\n])\n(#{1,6}[ \t])')
TEXT_AFTER_HEADING = re.compile(r'^(#{1,6}[ \t][^\n]*)\n(?=[^\n])', re.MULTILINE)
TRAILING_WHITESPACE = re.compile(r'[ \t]+$', re.MULTILINE)
EXCESS_NEWLINES = re.compile(r'\n{4,}')


class TextCleaner:
    """Normalizes spacing and punctuation in generated Markdown."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the cleaner.
        
        Args:
            config: Optional configuration; ``fix_punctuation`` (default True)
                toggles the missing-space repairs.
        """
        self.config = config or {}
        self.fix_punctuation = self.config.get('fix_punctuation', True)
        
    def clean(self, content: str) -> str:
        """
        Clean a Markdown document.
        
        Running the cleaner on its own output returns the same string.
        
        Args:
            content: Markdown text
            
        Returns:
            Cleaned Markdown ending with exactly one newline, or an empty
            string when there is nothing left after trimming
        """
        cleaned = content.replace('\r\n', '\n').replace('\r', '\n')
        # NUL delimits fence placeholders below and is not valid Markdown text
        cleaned = cleaned.replace('\x00', '\ufffd')
        
        # Remove trailing whitespace first so whitespace-only lines count as blank
        cleaned = TRAILING_WHITESPACE.sub('', cleaned)
        cleaned = EXCESS_NEWLINES.sub('\n\n\n', cleaned)
        
        fences: List[str] = []
        cleaned = FENCE_PATTERN.sub(lambda m: self._mask(m, fences), cleaned)
        
        # Ensure proper spacing around headers
        cleaned = HEADING_AFTER_TEXT.sub(r'\n\n\1', cleaned)
        cleaned = TEXT_AFTER_HEADING.sub(r'\1\n\n', cleaned)
        
        if self.fix_punctuation:
            cleaned = SENTENCE_GAP.sub(self._insert_gap, cleaned)
            cleaned = CLAUSE_GAP.sub(self._insert_gap, cleaned)
        
        cleaned = PLACEHOLDER_PATTERN.sub(lambda m: fences[int(m.group(1))], cleaned)
        
        cleaned = cleaned.strip()
        if not cleaned:
            return ''
        return cleaned + '\n'
    
    @staticmethod
    def _mask(match, fences: List[str]) -> str:
        fences.append(match.group(0))
        return PLACEHOLDER.format(len(fences) - 1)
    
    @staticmethod
    def _insert_gap(match) -> str:
        if match.group('keep'):
            return match.group('keep')
        return match.group('punct') + ' '


def cleanup_markdown(content: str) -> str:
    """Clean Markdown content with the default settings."""
    return TextCleaner().clean(content)
