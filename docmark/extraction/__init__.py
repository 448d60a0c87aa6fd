"""
docmark - Extraction Module

This module unpacks binary containers (word-processing packages) into the
markup the converters work on.
"""

from .docx_package import DocxExtractor, DOCUMENT_PART

__all__ = ['DocxExtractor', 'DOCUMENT_PART']
