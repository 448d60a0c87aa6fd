"""
Validation of user-supplied conversion settings.
"""

from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass

@dataclass
class ConfigValidationResult:
    """Container for configuration validation results."""
    is_valid: bool
    errors: List[str]

# Setting name -> (accepted types, description of the accepted values)
CONFIG_SCHEMA: Dict[str, Tuple[tuple, str]] = {
    'encoding': ((str,), 'a text encoding name'),
    'csv_delimiter': ((str,), 'a single character'),
    'numeric_threshold': ((int, float), 'a number between 0 and 1'),
    'numeric_sample_rows': ((int,), 'a positive integer'),
    'summary_property_threshold': ((int,), 'a non-negative integer'),
    'frequency_threshold': ((int,), 'a non-negative integer'),
    'preview_length': ((int,), 'a positive integer'),
    'long_string_length': ((int,), 'a non-negative integer'),
    'bullet_marker': ((str,), "one of '-', '*', '+'"),
    'fix_punctuation': ((bool,), 'true or false'),
    'document_part': ((str,), 'a part name inside the DOCX package'),
}

class ConfigValidator:
    """
    Validates a configuration dictionary against the known settings.
    """
    
    def __init__(self, config: Optional[Dict] = None):
        self.config = config or {}
        self.allow_unknown = self.config.get('allow_unknown', False)
        
    def validate(self, settings: Any) -> ConfigValidationResult:
        """
        Validate conversion settings.
        
        Args:
            settings: Parsed configuration (normally loaded from YAML)
            
        Returns:
            ConfigValidationResult containing validation status and errors
        """
        if not isinstance(settings, dict):
            return ConfigValidationResult(
                is_valid=False,
                errors=["Configuration must be a mapping of setting names to values"]
            )
        
        errors = []
        for key, value in settings.items():
            if key not in CONFIG_SCHEMA:
                if not self.allow_unknown:
                    errors.append(f"Unknown setting: {key}")
                continue
            
            types, description = CONFIG_SCHEMA[key]
            # bool is an int subclass but never a valid count
            if isinstance(value, bool) and bool not in types:
                errors.append(f"Setting '{key}' must be {description}")
                continue
            if not isinstance(value, types):
                errors.append(f"Setting '{key}' must be {description}")
                continue
            
            errors.extend(self._check_range(key, value, description))
            
        return ConfigValidationResult(
            is_valid=len(errors) == 0,
            errors=errors
        )
    
    def _check_range(self, key: str, value: Any, description: str) -> List[str]:
        """Check value ranges for settings that need them."""
        valid = True
        if key == 'csv_delimiter':
            valid = len(value) == 1 and value != '"'
        elif key == 'numeric_threshold':
            valid = 0 <= value <= 1
        elif key in ('numeric_sample_rows', 'preview_length'):
            valid = value > 0
        elif key in ('summary_property_threshold', 'frequency_threshold', 'long_string_length'):
            valid = value >= 0
        elif key == 'bullet_marker':
            valid = value in ('-', '*', '+')
        elif key == 'encoding':
            valid = bool(value.strip())
        
        return [] if valid else [f"Setting '{key}' must be {description}"]
