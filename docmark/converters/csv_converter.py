"""
Converter for delimited tabular text.
"""

from typing import Dict, Any, Optional

from ..processing.table_processor import (
    TableProcessor,
    escape_cell,
    format_number,
    render_markdown_table,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

class CsvConverter:
    """Converts delimited text into a Markdown table with numeric summaries."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the converter.
        
        Args:
            config: Optional configuration (delimiter and numeric sampling options)
        """
        self.config = config or {}
        self.table_processor = TableProcessor(self.config)
        
    def convert(self, text: str) -> str:
        """
        Convert delimited text to Markdown.
        
        Args:
            text: Raw delimited text; row 0 is the header
            
        Returns:
            Markdown string
        """
        rows = self.table_processor.parse(text)
        if not rows:
            return "# Empty CSV\n"
        
        header = [escape_cell(cell) or 'Column' for cell in rows[0]]
        data_rows = [[escape_cell(cell) for cell in row] for row in rows[1:]]
        
        output = ["# CSV Data", ""]
        output.append(f"**Rows:** {len(rows)}")
        output.append(f"**Columns:** {len(header)}")
        output.append("")
        output.extend(render_markdown_table(header, data_rows))
        
        numeric_columns = self.table_processor.detect_numeric_columns(rows)
        logger.debug(f"Numeric columns detected: {numeric_columns}")
        
        summaries = [self.table_processor.summarize_column(rows, index) for index in numeric_columns]
        summaries = [summary for summary in summaries if summary is not None]
        
        if summaries:
            output.append("")
            output.append("## Data Summary")
            output.append("")
            for summary in summaries:
                output.append(f"**{header[summary.index]}:**")
                output.append(f"- Count: {summary.count}")
                output.append(f"- Average: {summary.average:.2f}")
                output.append(f"- Min: {format_number(summary.minimum)}")
                output.append(f"- Max: {format_number(summary.maximum)}")
                output.append("")
        
        return "\n".join(output) + "\n"
