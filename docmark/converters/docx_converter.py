"""
Converter for word-processing document markup (the body part of a DOCX file).
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Union

from ..errors import MalformedInputError
from ..utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_DOCUMENT = 'No readable content found in DOCX file'
HEADING_STYLE = re.compile(r'[Hh]eading\s*(\d+)')
DISABLED_VALUES = {'0', 'false', 'off'}

@dataclass
class RunFormatting:
    """Bold and italic flags of a single run."""
    bold: bool = False
    italic: bool = False

def _local(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]

def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None

def _attr(element: ET.Element, name: str) -> Optional[str]:
    for key, value in element.attrib.items():
        if _local(key) == name:
            return value
    return None

class DocxConverter:
    """Turns paragraphs and runs of DOCX body markup into Markdown."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        
    def convert(self, markup: Union[str, bytes]) -> str:
        """
        Convert document body markup to Markdown.
        
        Args:
            markup: Contents of ``word/document.xml``
            
        Returns:
            Paragraphs separated by blank lines, or a placeholder line when
            no paragraph has text
            
        Raises:
            MalformedInputError: If the markup is not well-formed XML
        """
        if isinstance(markup, str):
            markup = markup.encode('utf-8')
        try:
            root = ET.fromstring(markup)
        except ET.ParseError as e:
            raise MalformedInputError(f"Failed to parse document markup: {str(e)}") from e
        
        paragraphs = [element for element in root.iter() if _local(element.tag) == 'p']
        logger.debug(f"Found {len(paragraphs)} paragraphs")
        
        rendered = [self.render_paragraph(paragraph) for paragraph in paragraphs]
        rendered = [text for text in rendered if text]
        
        if not rendered:
            return EMPTY_DOCUMENT + '\n'
        return '\n\n'.join(rendered) + '\n'
    
    def render_paragraph(self, paragraph: ET.Element) -> str:
        """
        Render one paragraph, including its heading marker.
        
        Args:
            paragraph: A ``w:p`` element
            
        Returns:
            Markdown text of the paragraph (empty if it holds no text)
        """
        level = self.heading_level(paragraph)
        
        runs = []
        for run in paragraph.iter():
            if _local(run.tag) != 'r':
                continue
            text = self._run_text(run)
            if text:
                runs.append((text, self.run_formatting(run)))
        
        full_text = ''
        for index, (text, formatting) in enumerate(runs):
            full_text += self._apply_formatting(text, formatting)
            
            # Keep words apart that were split across run boundaries
            if index + 1 < len(runs) and full_text and not full_text[-1].isspace():
                if not runs[index + 1][0][0].isspace():
                    full_text += ' '
        
        full_text = re.sub(r'\s+', ' ', full_text).strip()
        
        if level > 0 and full_text:
            return '#' * level + ' ' + full_text
        return full_text
    
    def heading_level(self, paragraph: ET.Element) -> int:
        """
        Work out the heading level of a paragraph.
        
        ``HeadingN`` styles give level N, ``Subtitle`` gives 2 and other
        ``Title`` styles give 1; otherwise an outline level L gives L + 1.
        
        Returns:
            Heading level from 1 to 6, or 0 for body text
        """
        properties = _child(paragraph, 'pPr')
        if properties is None:
            return 0
        
        style = _child(properties, 'pStyle')
        if style is not None:
            value = _attr(style, 'val')
            if value:
                match = HEADING_STYLE.search(value)
                if match:
                    return min(int(match.group(1)), 6)
                if 'Subtitle' in value:
                    return 2
                if 'Title' in value:
                    return 1
        
        outline = _child(properties, 'outlineLvl')
        if outline is not None:
            try:
                level = int(_attr(outline, 'val') or 0)
            except ValueError:
                return 0
            return min(level + 1, 6)
        
        return 0
    
    def run_formatting(self, run: ET.Element) -> RunFormatting:
        """Read bold/italic from a run's properties."""
        formatting = RunFormatting()
        properties = _child(run, 'rPr')
        if properties is None:
            return formatting
        
        bold = _child(properties, 'b')
        if bold is not None and (_attr(bold, 'val') or '').lower() not in DISABLED_VALUES:
            formatting.bold = True
        
        italic = _child(properties, 'i')
        if italic is not None and (_attr(italic, 'val') or '').lower() not in DISABLED_VALUES:
            formatting.italic = True
        
        return formatting
    
    def _run_text(self, run: ET.Element) -> str:
        pieces: List[str] = []
        for node in run.iter():
            name = _local(node.tag)
            if name == 't':
                pieces.append(node.text or '')
            elif name == 'tab':
                pieces.append('\t')
            elif name in ('br', 'cr'):
                pieces.append('\n')
        return ''.join(pieces)
    
    def _apply_formatting(self, text: str, formatting: RunFormatting) -> str:
        core = text.strip()
        if not core or not (formatting.bold or formatting.italic):
            return text
        
        marker = ('**' if formatting.bold else '') + ('*' if formatting.italic else '')
        leading = text[:len(text) - len(text.lstrip())]
        trailing = text[len(text.rstrip()):]
        return f"{leading}{marker}{core}{marker}{trailing}"
