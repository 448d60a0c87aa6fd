"""
File handling utilities for docmark.
"""

import os
import yaml
from pathlib import Path
from typing import Union, Dict, Any

def read_file(file_path: Union[str, Path], encoding: str = 'utf-8') -> str:
    """
    Read content from a text file.
    
    Args:
        file_path: Path to the file
        encoding: File encoding
        
    Returns:
        File content as string
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
        
    with open(file_path, 'r', encoding=encoding) as f:
        return f.read()

def read_bytes(file_path: Union[str, Path]) -> bytes:
    """
    Read the raw bytes of a file.
    
    Args:
        file_path: Path to the file
        
    Returns:
        File content as bytes
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    
    with open(file_path, 'rb') as f:
        return f.read()
        
def write_file(content: str, file_path: Union[str, Path], encoding: str = 'utf-8') -> None:
    """
    Write content to a text file.
    
    Args:
        content: Content to write
        file_path: Path to the file
        encoding: File encoding
    """
    file_path = Path(file_path)
    
    # Create directory if it doesn't exist
    os.makedirs(file_path.parent, exist_ok=True)
    
    with open(file_path, 'w', encoding=encoding) as f:
        f.write(content)
    
def read_yaml(file_path: Union[str, Path], encoding: str = 'utf-8') -> Dict[str, Any]:
    """
    Read content from a YAML file.
    
    Args:
        file_path: Path to the file
        encoding: File encoding
        
    Returns:
        Parsed YAML content (an empty dict for an empty file)
    """
    content = read_file(file_path, encoding)
    return yaml.safe_load(content) or {}
