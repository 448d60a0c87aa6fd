"""
Rule-based classification and rendering of plain-text lines.

Each rule pairs a predicate with a renderer. Rules are tried in order and
the first predicate that returns a line class wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .text_structure import (
    BLANK,
    CODE,
    PARAGRAPH,
    QUOTE,
    LineClass,
    LineContext,
    ListKind,
)

ALL_CAPS = re.compile(r'^[A-Z\s\d\-.:]+$')
UNDERLINE = re.compile(r'^(?:=+|-+)$')
NUMBERED_HEADING = re.compile(r'^\d+\.\s+[A-Z]')
HEADER_KEYWORDS = re.compile(
    r'^(?:Chapter|Section|Part|Article|Introduction|Conclusion|Summary|Overview|Background)\s+',
    re.IGNORECASE
)
TOP_LEVEL_KEYWORDS = re.compile(r'^(?:Chapter|Part)\s+', re.IGNORECASE)
SECTION_KEYWORD = re.compile(r'^Section\s+', re.IGNORECASE)

LIST_MARKERS = (
    (ListKind.BULLET, re.compile(r'^([-*•])\s+')),
    (ListKind.ORDERED, re.compile(r'^(\d+)\.\s+')),
    (ListKind.LETTERED, re.compile(r'^([a-zA-Z])\.\s+')),
    (ListKind.ROMAN, re.compile(r'^([ivxlcdm]+)\.\s+', re.IGNORECASE)),
)

CODE_PUNCTUATION = re.compile(r'[{}();]')
CODE_KEYWORDS = re.compile(r'\b(?:function|var|let|const|if|else|for|while|class|def|import|export)\b')
STARTS_UPPER = re.compile(r'^[A-Z]')
QUOTE_PREFIXES = ('>', 'Quote:', '"', "'", '“', '‘')

@dataclass(frozen=True)
class LineRule:
    """A named (predicate, renderer) pair."""
    name: str
    classify: Callable[[LineContext], Optional[LineClass]]
    render: Callable[[LineContext, LineClass], str]

def _is_all_caps(text: str) -> bool:
    # A line without letters or digits (e.g. "-----") is not a caps heading
    return (len(text) > 3 and text == text.upper() and bool(ALL_CAPS.match(text))
            and any(char.isalnum() for char in text))

def header_level(context: LineContext) -> int:
    """
    Pick the heading level for a line already classified as a header.
    
    Level 1 for the first non-blank line or a Chapter/Part line, level 2
    for short all-caps lines and Section lines, level 3 otherwise.
    """
    text = context.text
    if context.is_first or TOP_LEVEL_KEYWORDS.match(text):
        return 1
    if (len(text) < 30 and text == text.upper()) or SECTION_KEYWORD.match(text):
        return 2
    return 3

def classify_header(context: LineContext) -> Optional[LineClass]:
    text = context.text
    underlined = bool(context.next_text and UNDERLINE.match(context.next_text))
    
    if (_is_all_caps(text)
            or underlined
            or (NUMBERED_HEADING.match(text) and text == text.upper())
            or HEADER_KEYWORDS.match(text)):
        return LineClass.header(header_level(context), underlined=underlined)
    return None

def render_header(context: LineContext, line_class: LineClass) -> str:
    return '#' * line_class.level + ' ' + context.text

def classify_list(context: LineContext) -> Optional[LineClass]:
    for list_kind, pattern in LIST_MARKERS:
        if pattern.match(context.text):
            return LineClass.list_item(list_kind)
    return None

def render_list(context: LineContext, line_class: LineClass) -> str:
    text = context.text
    if line_class.list_kind is ListKind.ORDERED:
        return text
    if line_class.list_kind is ListKind.BULLET and text[0] in '-*':
        return text
    
    # Bullet symbols, letters and roman numerals become '-' items
    pattern = dict(LIST_MARKERS)[line_class.list_kind]
    return '- ' + pattern.sub('', text, count=1)

def classify_code(context: LineContext) -> Optional[LineClass]:
    if context.original.startswith('    '):
        return CODE
    if CODE_PUNCTUATION.search(context.text) and not STARTS_UPPER.match(context.text):
        return CODE
    if CODE_KEYWORDS.search(context.text):
        return CODE
    return None

def render_code(context: LineContext, line_class: LineClass) -> str:
    return '    ' + context.text

def classify_quote(context: LineContext) -> Optional[LineClass]:
    if context.text.startswith(QUOTE_PREFIXES):
        return QUOTE
    return None

def render_quote(context: LineContext, line_class: LineClass) -> str:
    return '> ' + re.sub(r'^>\s*', '', context.text)

def classify_paragraph(context: LineContext) -> Optional[LineClass]:
    return PARAGRAPH

def render_paragraph(context: LineContext, line_class: LineClass) -> str:
    return context.text

DEFAULT_RULES: Tuple[LineRule, ...] = (
    LineRule('header', classify_header, render_header),
    LineRule('list', classify_list, render_list),
    LineRule('code', classify_code, render_code),
    LineRule('quote', classify_quote, render_quote),
    LineRule('paragraph', classify_paragraph, render_paragraph),
)

class LineProcessor:
    """Classifies and renders non-blank lines of unmarked text."""
    
    def __init__(self, rules: Sequence[LineRule] = DEFAULT_RULES):
        self.rules = tuple(rules)
        
    def process(self, context: LineContext) -> Tuple[str, LineClass]:
        """
        Classify a line and render it as Markdown.
        
        Args:
            context: The line and its surroundings
            
        Returns:
            Tuple of rendered line and its classification
        """
        if not context.text:
            return '', BLANK
        
        for rule in self.rules:
            line_class = rule.classify(context)
            if line_class is not None:
                return rule.render(context, line_class), line_class
        
        return context.text, PARAGRAPH
    
    def classify(self, context: LineContext) -> LineClass:
        """Return only the classification of a line."""
        return self.process(context)[1]
