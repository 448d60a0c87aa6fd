"""
Converter for HTML (and tag-based XML) content.

The transform is markdownify's MarkdownConverter with a fixed table of
rules layered over it. Rules are handed to the converter when it is built
and are never registered afterwards.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Dict, Any, Iterable, List, Optional, Tuple

import markdownify
from bs4 import BeautifulSoup, Tag

from ..errors import AccessBlockedError, EmptyResultError
from ..models import MarkdownDocument
from ..processing.table_processor import escape_cell, render_markdown_table
from ..utils.logger import get_logger

logger = get_logger(__name__)

@dataclass(frozen=True)
class MarkupRule:
    """Replacement rendering for one family of tags."""
    tags: Tuple[str, ...]
    render: Callable[['RuleBasedMarkdownConverter', Tag, str], str]

# Runs of spaces between words; leading indentation and hard breaks survive
INNER_WHITESPACE = re.compile(r'(?<=\S)(?:[ \t]{2,}|\t)(?=\S)')
LANGUAGE_CLASS = re.compile(r'^language-(\w+)$')

def _in_code(el: Tag) -> bool:
    return el.find_parent(['pre', 'code']) is not None

def _in_cell(el: Tag) -> bool:
    return el.find_parent(['td', 'th']) is not None

def _block(content: str) -> str:
    return '\n\n' + content + '\n\n' if content else ''

def render_text_container(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    """Collapse whitespace in p/div/span text; code contexts pass through."""
    if _in_code(el):
        return text
    collapsed = text
    if el.find(['pre', 'code', 'table']) is None:
        collapsed = INNER_WHITESPACE.sub(' ', text)
    if el.name == 'span':
        return collapsed
    collapsed = collapsed.strip()
    if _in_cell(el):
        return ' ' + collapsed + ' ' if collapsed else ''
    return _block(collapsed)

def render_line_break(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    """Soft break inside list items and code, hard break elsewhere."""
    if _in_cell(el):
        return ' '
    if el.find_parent(['li', 'pre']) is not None:
        return '\n'
    return '  \n'

def _cell_text(cell: Tag) -> str:
    return escape_cell(' '.join(cell.get_text(' ').split()))

def render_table(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    """
    Walk the table row by row.
    
    The first row holding a <th> is the header row; without one the first
    row is used as the header.
    """
    rows = []
    for row in el.find_all('tr'):
        cells = row.find_all(['th', 'td'])
        if cells:
            rows.append(cells)
    if not rows:
        return ''
    
    header_index = next(
        (index for index, cells in enumerate(rows) if any(cell.name == 'th' for cell in cells)),
        0
    )
    header = [_cell_text(cell) for cell in rows[header_index]]
    data_rows = [
        [_cell_text(cell) for cell in cells]
        for index, cells in enumerate(rows) if index != header_index
    ]
    return _block('\n'.join(render_markdown_table(header, data_rows)))

def render_list(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    """Render direct <li> children, indenting continuation lines under the marker."""
    ordered = el.name == 'ol'
    start = 1
    if ordered:
        try:
            start = int(el.get('start', 1))
        except ValueError:
            start = 1
    indent = '   ' if ordered else '  '
    
    lines = []
    for offset, item in enumerate(el.find_all('li', recursive=False)):
        content = converter.convert_soup(item).strip()
        item_lines = content.split('\n')
        prefix = f"{start + offset}. " if ordered else f"{converter.bullet} "
        lines.append(prefix + item_lines[0])
        lines.extend(indent + line if line.strip() else '' for line in item_lines[1:])
    
    if not lines:
        return ''
    if el.find_parent('li') is not None:
        return '\n' + '\n'.join(lines) + '\n'
    return _block('\n'.join(lines))

def render_list_item(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    # The enclosing list adds the marker
    return '\n' + text.strip() + '\n'

def _code_language(el: Tag) -> str:
    candidates = [el] + el.find_all('code', limit=1)
    for candidate in candidates:
        for token in candidate.get('class') or []:
            match = LANGUAGE_CLASS.match(token)
            if match:
                return match.group(1)
    return ''

def render_code(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    """Inline code in backticks, <pre> blocks fenced with their language."""
    if el.name == 'code':
        if el.find_parent('pre') is not None:
            return text
        code = el.get_text()
        return '`' + code + '`' if code else ''
    
    code = text.strip('\n')
    return '\n\n```' + _code_language(el) + '\n' + code + '\n```\n\n'

def render_blockquote(converter: 'RuleBasedMarkdownConverter', el: Tag, text: str) -> str:
    content = text.strip()
    if not content:
        return ''
    return _block('\n'.join('> ' + line for line in content.split('\n')))

DEFAULT_RULES: Tuple[MarkupRule, ...] = (
    MarkupRule(('p', 'div', 'span'), render_text_container),
    MarkupRule(('br',), render_line_break),
    MarkupRule(('table',), render_table),
    MarkupRule(('ul', 'ol'), render_list),
    MarkupRule(('li',), render_list_item),
    MarkupRule(('pre', 'code'), render_code),
    MarkupRule(('blockquote',), render_blockquote),
)

class RuleBasedMarkdownConverter(markdownify.MarkdownConverter):
    """
    markdownify converter whose tag handlers come from a rule table.
    
    Each rule is bound as this instance's ``convert_<tag>`` handler during
    construction, taking precedence over markdownify's own handler.
    """
    
    def __init__(self, rules: Iterable[MarkupRule] = DEFAULT_RULES, **options: Any):
        options.setdefault('heading_style', markdownify.ATX)
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', markdownify.ASTERISK)
        super().__init__(**options)
        
        self.bullet = options['bullets'][0]
        self.rules = tuple(rules)
        
        seen = set()
        for rule in self.rules:
            for tag in rule.tags:
                if tag in seen:
                    raise ValueError(f"More than one markup rule for <{tag}>")
                seen.add(tag)
                setattr(self, f"convert_{tag}", partial(self._apply_rule, rule))
    
    def _apply_rule(self, rule: MarkupRule, el: Tag, text: str, *args: Any, **kwargs: Any) -> str:
        # markdownify passes its inline/parent-tag context positionally or by keyword
        return rule.render(self, el, text)

# Phrases that mark a bot-protection page instead of document content
BOT_KEYWORDS = [
    'you appear to be a bot',
    'bot protection',
    'automated access',
    'security check',
    'please verify',
    'captcha',
    'cloudflare'
]

SLIDE_SELECTORS = [
    '.slide',
    '.page',
    '.ds-slide',
    '.presentation-slide',
    '[data-slide]',
    '.slide-content',
    '.page-content'
]

MAIN_SELECTORS = ['main', '.main', '#main']

STRIPPED_TAGS = ['script', 'style', 'noscript']

# Tags the HTML rules understand; any other element name is treated as XML
HTML_TAGS = {
    'a', 'abbr', 'b', 'blockquote', 'body', 'br', 'caption', 'code', 'dd', 'del', 'div', 'dl',
    'dt', 'em', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'head', 'hr', 'html', 'i', 'img', 'kbd',
    'li', 'ol', 'p', 'pre', 's', 'samp', 'span', 'strong', 'sub', 'sup', 'table', 'tbody',
    'td', 'tfoot', 'th', 'thead', 'tr', 'u', 'ul'
}

XML_DECLARATION = re.compile(r'<\?.*?\?>', re.DOTALL)
DOCTYPE = re.compile(r'<!DOCTYPE[^>]*>', re.IGNORECASE)
CDATA = re.compile(r'<!\[CDATA\[(.*?)\]\]>', re.DOTALL)
SELF_CLOSING = re.compile(r'<([A-Za-z_][\w.:-]*)([^<>]*?)\s*/>')
ELEMENT_TAG = re.compile(r'<(/?)([A-Za-z_][\w.:-]*)([^<>]*)>')

def normalize_xml(xml: str) -> str:
    """
    Rewrite tag-based XML so the HTML rules apply to it.
    
    Declarations and doctypes are dropped, CDATA becomes escaped text and
    every element without an HTML meaning becomes a <div>, so leaf values
    end up as separate paragraphs.
    """
    text = XML_DECLARATION.sub('', xml)
    text = DOCTYPE.sub('', text)
    text = CDATA.sub(lambda m: m.group(1).replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;'), text)
    
    def expand(match):
        name = match.group(1)
        if name.lower() in HTML_TAGS:
            return match.group(0)
        return f"<{name}{match.group(2)}></{name}>"
    
    def rename(match):
        closing, name, rest = match.groups()
        if name.lower() in HTML_TAGS:
            return match.group(0)
        if closing:
            return '</div>'
        return f"<div{rest}>"
    
    text = SELF_CLOSING.sub(expand, text)
    return ELEMENT_TAG.sub(rename, text)

class HtmlConverter:
    """Converts HTML and XML content to Markdown."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None, rules: Iterable[MarkupRule] = DEFAULT_RULES):
        """
        Initialize the HTML converter.
        
        Args:
            config: Optional configuration options
            rules: Markup rules layered over the generic transform
        """
        self.config = config or {}
        self.markdown = RuleBasedMarkdownConverter(
            rules=rules,
            bullets=self.config.get('bullet_marker', '-')
        )
        
    def _parse(self, html: str) -> BeautifulSoup:
        soup = BeautifulSoup(html, 'html.parser')
        for tag in soup.find_all(STRIPPED_TAGS):
            tag.decompose()
        return soup
    
    def transform_element(self, element: Tag) -> str:
        """Convert one parsed element (and its children) to Markdown."""
        return self.markdown.convert_soup(element).strip()
    
    def transform(self, html: str) -> str:
        """
        Convert an HTML string to Markdown.
        
        Args:
            html: HTML markup
            
        Returns:
            Markdown without surrounding blank lines
        """
        soup = self._parse(html)
        return self.transform_element(soup.body or soup)
    
    def convert(self, html: str) -> str:
        """Convert an HTML document."""
        return self.transform(html) + '\n'
    
    def convert_xml(self, xml: str) -> str:
        """
        Convert a tag-based XML document.
        
        Falls back to the raw XML in a fenced block if the transform fails.
        """
        try:
            body = self.transform(normalize_xml(xml))
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning(f"XML transform failed, embedding raw content: {str(e)}")
            return '# XML Content\n\n```xml\n' + xml + '\n```\n'
        return '# XML Content\n\n' + body + '\n'
    
    def extract_slides(self, soup: BeautifulSoup) -> List[Tag]:
        """
        Find the segments of a slide-deck page.
        
        Tries the known slide selectors in priority order, then any <div>
        whose class or id mentions "slide" or "page" (outermost matches
        only), then a main content element.
        
        Args:
            soup: Parsed page
            
        Returns:
            Segment elements in document order; empty if none were found
        """
        for selector in SLIDE_SELECTORS:
            slides = soup.select(selector)
            if slides:
                logger.debug(f"Found {len(slides)} segments with selector {selector}")
                return slides
        
        def is_container(div: Tag) -> bool:
            names = ' '.join(div.get('class') or []).lower() + ' ' + (div.get('id') or '').lower()
            return 'slide' in names or 'page' in names
        
        containers = [div for div in soup.find_all('div') if is_container(div)]
        container_ids = {id(div) for div in containers}
        outermost = [div for div in containers if not any(id(parent) in container_ids for parent in div.parents)]
        if outermost:
            return outermost
        
        for selector in MAIN_SELECTORS:
            main_content = soup.select_one(selector)
            if main_content is not None:
                return [main_content]
        
        return []
    
    def convert_segments(self, html: str, source_label: str,
                         generated_at: Optional[datetime] = None) -> List[MarkdownDocument]:
        """
        Convert a slide-deck page into one document per segment.
        
        Args:
            html: Page markup
            source_label: Where the markup came from (URL or file name)
            generated_at: Timestamp for the full document (defaults to now, UTC)
            
        Returns:
            ``full_presentation.md`` followed by ``slide_NN.md`` documents, or a
            single ``document_content.md`` when no segments were found
            
        Raises:
            AccessBlockedError: If the markup is a bot-protection page
            EmptyResultError: If nothing could be extracted
        """
        lowered = html.lower()
        for keyword in BOT_KEYWORDS:
            if keyword in lowered:
                raise AccessBlockedError(
                    f'Bot protection detected: "{keyword}". Save the page source manually and convert that instead.'
                )
        
        soup = self._parse(html)
        slides = self.extract_slides(soup)
        generated_at = generated_at or datetime.now(timezone.utc)
        documents = []
        
        if slides:
            total = len(slides)
            contents = [self.transform_element(slide) for slide in slides]
            
            for index, content in enumerate(contents, start=1):
                documents.append(MarkdownDocument(
                    name=f"slide_{index:02d}.md",
                    content=f"# Slide {index}\n\n{content}\n\n---\n\n*Source: {source_label}*\n*Slide {index} of {total}*"
                ))
            
            full_document = "\n\n---\n\n".join(
                f"# Slide {index}\n\n{content}" for index, content in enumerate(contents, start=1)
            )
            documents.insert(0, MarkdownDocument(
                name="full_presentation.md",
                content=(f"# Full Presentation\n\n{full_document}\n\n---\n\n"
                         f"*Source: {source_label}*\n*Generated on {generated_at.isoformat()}*")
            ))
        else:
            body = self.transform_element(soup.body or soup)
            if body:
                documents.append(MarkdownDocument(
                    name="document_content.md",
                    content=(f"# Document Content\n\n{body}\n\n---\n\n"
                             f"*Source: {source_label}*\n*Generated on {generated_at.isoformat()}*")
                ))
        
        if not documents:
            raise EmptyResultError("No content found in the HTML")
        
        logger.info(f"Extracted {len(documents)} documents from {source_label}")
        return documents
