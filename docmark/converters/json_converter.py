"""
Converter for JSON documents.

Arrays of objects become tables, other arrays become numbered lists or
frequency counts, and objects become nested heading sections.
"""

import json
from collections import Counter
from typing import Dict, Any, List, Optional

from ..errors import MalformedInputError
from ..processing.json_tree import JsonKind, JsonValue, parse_json
from ..processing.table_processor import escape_cell, render_markdown_table
from ..utils.logger import get_logger

logger = get_logger(__name__)

class JsonConverter:
    """Renders a JSON value tree as Markdown."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the JSON converter.
        
        Args:
            config: Optional configuration options
        """
        self.config = config or {}
        self.summary_threshold = self.config.get('summary_property_threshold', 10)
        self.frequency_threshold = self.config.get('frequency_threshold', 20)
        self.preview_length = self.config.get('preview_length', 50)
        self.long_string_length = self.config.get('long_string_length', 100)
        
        # One renderer per value kind for object properties
        self.property_renderers = {
            JsonKind.NULL: self._render_null_property,
            JsonKind.BOOLEAN: self._render_scalar_property,
            JsonKind.NUMBER: self._render_scalar_property,
            JsonKind.STRING: self._render_string_property,
            JsonKind.ARRAY: self._render_array_property,
            JsonKind.OBJECT: self._render_object_property,
        }
        
    def convert(self, text: str) -> str:
        """
        Convert JSON text to Markdown.
        
        Invalid JSON is not an error: the raw text is embedded in a fenced
        block under an "Invalid JSON Content" heading.
        
        Args:
            text: Raw JSON text
            
        Returns:
            Markdown string
        """
        try:
            root = parse_json(text)
        except MalformedInputError as e:
            logger.warning(f"Invalid JSON, embedding raw content: {e.message}")
            return self._render_invalid(text, e.message)
        
        output = ["# JSON Data", ""]
        
        if root.kind is JsonKind.ARRAY:
            output.append(f"**Type:** Array with {len(root.items)} items")
            output.append("")
            output.extend(self.render_array(root))
        elif root.kind is JsonKind.OBJECT:
            output.append(f"**Type:** Object with {len(root.members)} properties")
            output.append("")
            output.extend(self.render_object(root))
        else:
            output.append(f"**Type:** {root.kind.value}")
            output.append("")
            output.append("**Value:**")
            output.append("```json")
            output.append(json.dumps(root.to_python(), indent=2, ensure_ascii=False))
            output.append("```")
        
        return "\n".join(output) + "\n"
    
    def render_array(self, node: JsonValue) -> List[str]:
        """
        Render an array as a table, a numbered list or item counts.
        
        Args:
            node: Array value
            
        Returns:
            Markdown lines
        """
        if not node.items:
            return ["**Empty array**"]
        
        if all(item.kind is JsonKind.OBJECT for item in node.items):
            return self._render_object_table(node)
        
        output = [f"**Array List** ({len(node.items)} items)", ""]
        
        if len(node.items) > self.frequency_threshold:
            # Counter keeps first-seen order and sorted() is stable, so ties keep it too
            counts = Counter(item.text() for item in node.items)
            output.append("**Item counts:**")
            for item, count in sorted(counts.items(), key=lambda entry: -entry[1]):
                output.append(f"- `{item}`: {count} times")
            return output
        
        for index, item in enumerate(node.items, start=1):
            output.append(f"{index}. {item.text()}")
        return output
    
    def _render_object_table(self, node: JsonValue) -> List[str]:
        """Render an array of objects with one column per distinct key."""
        columns: List[str] = []
        for item in node.items:
            for key in item.keys():
                if key not in columns:
                    columns.append(key)
        
        if not columns:
            return ["**Array of empty objects**"]
        
        rows = []
        for item in node.items:
            present = dict(item.members)
            rows.append([self._table_cell(present.get(key)) for key in columns])
        
        output = [f"**Array Table** ({len(node.items)} items)", ""]
        output.extend(render_markdown_table([escape_cell(key) for key in columns], rows))
        return output
    
    def _table_cell(self, value: Optional[JsonValue]) -> str:
        if value is None or value.kind is JsonKind.NULL:
            return ''
        return escape_cell(value.text())
    
    def render_object(self, node: JsonValue, level: int = 2) -> List[str]:
        """
        Render an object as one heading section per property.
        
        Args:
            node: Object value
            level: Heading level for this object's properties; capped at 6
            
        Returns:
            Markdown lines
        """
        output = []
        
        if len(node.members) > self.summary_threshold:
            output.extend(self._render_property_summary(node))
            output.append("")
            output.append("## Detailed Content")
            output.append("")
        
        for key, value in node.members:
            output.append(f"{'#' * min(level, 6)} {key}")
            output.append("")
            output.extend(self.property_renderers[value.kind](value, level))
        
        return output
    
    def _render_property_summary(self, node: JsonValue) -> List[str]:
        output = ["## Property Summary", ""]
        rows = []
        for key, value in node.members:
            rows.append([escape_cell(key), self._type_tag(value), escape_cell(self._preview(value))])
        output.extend(render_markdown_table(["Property", "Type", "Value Preview"], rows))
        return output
    
    def _type_tag(self, value: JsonValue) -> str:
        if value.kind is JsonKind.ARRAY:
            return f"Array[{len(value.items)}]"
        return value.kind.value
    
    def _preview(self, value: JsonValue) -> str:
        if value.kind is JsonKind.ARRAY:
            return f"[{len(value.items)} items]"
        if value.kind is JsonKind.OBJECT:
            keys = value.keys()
            suffix = '...' if len(keys) > 3 else ''
            return "{" + ", ".join(keys[:3]) + suffix + "}"
        
        text = value.text()
        if len(text) > self.preview_length:
            return text[:self.preview_length] + '...'
        return text
    
    def _render_null_property(self, value: JsonValue, level: int) -> List[str]:
        return ["*null*", ""]
    
    def _render_scalar_property(self, value: JsonValue, level: int) -> List[str]:
        return [value.text(), ""]
    
    def _render_string_property(self, value: JsonValue, level: int) -> List[str]:
        if len(value.value) > self.long_string_length:
            return ["```", value.value, "```", ""]
        return [value.value, ""]
    
    def _render_array_property(self, value: JsonValue, level: int) -> List[str]:
        return self.render_array(value) + [""]
    
    def _render_object_property(self, value: JsonValue, level: int) -> List[str]:
        if not value.members:
            return ["*Empty object*", ""]
        return self.render_object(value, level + 1)
    
    def _render_invalid(self, text: str, message: str) -> str:
        output = [
            "# Invalid JSON Content",
            "",
            f"**Error:** {message}",
            "",
            "**Raw Content:**",
            "```json",
            text,
            "```"
        ]
        return "\n".join(output) + "\n"
