"""
Logging utility for docmark.
"""

import logging
import sys
from typing import Optional

def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger instance.
    
    Args:
        name: Name of the logger (typically __name__)
        level: Optional log level
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    
    if level is not None:
        logger.setLevel(level)
    elif not logger.level:
        logger.setLevel(logging.WARNING)
        
    # Add console handler if logger has no handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        
    return logger

def set_log_level(level: int):
    """
    Set the level of every docmark logger.
    
    Library loggers start at WARNING; the command line raises them to INFO
    so progress is reported.
    
    Args:
        level: Log level to apply
    """
    for name in list(logging.root.manager.loggerDict):
        if name.startswith('docmark'):
            logging.getLogger(name).setLevel(level)

def enable_debug_logging():
    """Enable debug logging for all docmark loggers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    
    for handler in root_logger.handlers:
        handler.setLevel(logging.DEBUG)
    
    set_log_level(logging.DEBUG)
