"""
Line classes produced by plain-text structure inference.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

class LineKind(Enum):
    HEADER = 'header'
    LIST = 'list'
    CODE = 'code'
    QUOTE = 'quote'
    PARAGRAPH = 'paragraph'
    BLANK = 'blank'

class ListKind(Enum):
    BULLET = 'bullet'
    ORDERED = 'ordered'
    LETTERED = 'lettered'
    ROMAN = 'roman'

@dataclass(frozen=True)
class LineClass:
    """Classification of one input line."""
    kind: LineKind
    level: int = 0  # 1-6 for headers, 0 otherwise
    list_kind: Optional[ListKind] = None
    underlined: bool = False  # header whose next line is a =/- underline

    @classmethod
    def header(cls, level: int, underlined: bool = False) -> 'LineClass':
        if not 1 <= level <= 6:
            raise ValueError(f"Header level must be between 1 and 6, got {level}")
        return cls(LineKind.HEADER, level=level, underlined=underlined)

    @classmethod
    def list_item(cls, list_kind: ListKind) -> 'LineClass':
        return cls(LineKind.LIST, list_kind=list_kind)

BLANK = LineClass(LineKind.BLANK)
CODE = LineClass(LineKind.CODE)
QUOTE = LineClass(LineKind.QUOTE)
PARAGRAPH = LineClass(LineKind.PARAGRAPH)

@dataclass(frozen=True)
class LineContext:
    """A line plus the neighbourhood the classification rules look at."""
    original: str  # untrimmed
    text: str  # trimmed
    next_text: str = ''  # trimmed following line
    is_first: bool = False  # first non-blank line of the document
