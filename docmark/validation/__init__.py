"""
docmark - Validation Module

This module provides validation tools for conversion settings.
"""

from .config_validator import ConfigValidator, ConfigValidationResult, CONFIG_SCHEMA

__all__ = ['ConfigValidator', 'ConfigValidationResult', 'CONFIG_SCHEMA']
