"""
docmark - Utilities Module

This module provides utility functions for file handling and logging
used throughout the application.
"""

from .logger import get_logger, set_log_level, enable_debug_logging
from .file_handler import read_file, read_bytes, write_file, read_yaml

__all__ = ['get_logger', 'set_log_level', 'enable_debug_logging', 'read_file', 'read_bytes', 'write_file', 'read_yaml']
