"""
Processor for parsing delimited rows and profiling their columns.
"""

import math
from typing import List, Dict, Optional, Any
from dataclasses import dataclass

import numpy as np

@dataclass
class NumericColumnSummary:
    """Statistics for a column whose values are predominantly numbers."""
    index: int
    count: int
    average: float
    minimum: float
    maximum: float

class TableProcessor:
    """Parses delimited text into rows and detects numeric columns."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.delimiter = self.config.get('csv_delimiter', ',')
        self.numeric_threshold = self.config.get('numeric_threshold', 0.7)
        self.sample_rows = self.config.get('numeric_sample_rows', 10)
        
    def parse_line(self, line: str) -> List[str]:
        """
        Split one physical line into trimmed fields.
        
        A double quote toggles quoting, a doubled quote inside a quoted
        field is a literal quote, and the delimiter only separates fields
        outside quotes. Quoted fields never span lines.
        
        Args:
            line: A single line of delimited text
            
        Returns:
            List of field values
        """
        fields = []
        current = []
        in_quotes = False
        i = 0
        
        while i < len(line):
            char = line[i]
            if char == '"':
                if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = not in_quotes
            elif char == self.delimiter and not in_quotes:
                fields.append(''.join(current).strip())
                current = []
            else:
                current.append(char)
            i += 1
        
        fields.append(''.join(current).strip())
        return fields
    
    def parse(self, text: str) -> List[List[str]]:
        """
        Parse delimited text into rows, skipping blank lines.
        
        Args:
            text: Raw delimited text
            
        Returns:
            Parsed rows; the first row is the header
        """
        normalized = text.replace('\r\n', '\n').replace('\r', '\n')
        return [self.parse_line(line) for line in normalized.strip().split('\n') if line.strip()]
    
    def detect_numeric_columns(self, rows: List[List[str]]) -> List[int]:
        """
        Find the columns whose sampled values are mostly numeric.
        
        Args:
            rows: Parsed rows including the header
            
        Returns:
            Indexes of numeric columns in header order
        """
        if len(rows) < 2:
            return []
        
        numeric_columns = []
        sample = rows[1:1 + self.sample_rows]
        
        for col_index in range(len(rows[0])):
            values = [row[col_index] for row in sample if col_index < len(row) and row[col_index].strip()]
            if not values:
                continue
            
            numeric_count = sum(1 for value in values if parse_number(value) is not None)
            if numeric_count / len(values) >= self.numeric_threshold:
                numeric_columns.append(col_index)
        
        return numeric_columns
    
    def summarize_column(self, rows: List[List[str]], col_index: int) -> Optional[NumericColumnSummary]:
        """
        Compute count, average, min and max over every data row of a column.
        
        Args:
            rows: Parsed rows including the header
            col_index: Column to summarize
            
        Returns:
            Summary, or None when no value in the column parses as a number
        """
        parsed = [parse_number(row[col_index]) for row in rows[1:] if col_index < len(row)]
        values = np.array([value for value in parsed if value is not None], dtype=float)
        
        if values.size == 0:
            return None
        
        return NumericColumnSummary(
            index=col_index,
            count=int(values.size),
            average=float(values.mean()),
            minimum=float(values.min()),
            maximum=float(values.max())
        )

def parse_number(value: str) -> Optional[float]:
    """Parse a cell as a finite float, returning None when it is not one."""
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None

def format_number(value: float) -> str:
    """Render a number without a trailing '.0' for integral values."""
    if value.is_integer():
        return str(int(value))
    return repr(value)

def escape_cell(value: str) -> str:
    """Escape pipe characters so a value fits in a Markdown table cell."""
    return value.replace('|', '\\|')

def render_markdown_table(header: List[str], rows: List[List[str]]) -> List[str]:
    """
    Render a Markdown table, padding or truncating rows to the header width.
    
    Args:
        header: Header cells
        rows: Data rows
        
    Returns:
        Table lines
    """
    width = len(header)
    output = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join(["---"] * width) + " |"
    ]
    for row in rows:
        padded_row = list(row[:width]) + [''] * (width - len(row))
        output.append("| " + " | ".join(padded_row) + " |")
    return output
