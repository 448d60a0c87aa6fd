"""
Error taxonomy for document conversion.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of per-file conversion failure."""
    UNSUPPORTED_FORMAT = 'UnsupportedFormat'
    MALFORMED_INPUT = 'MalformedInput'
    MISSING_CONTENT_PART = 'MissingContentPart'
    EMPTY_RESULT = 'EmptyResult'
    ACCESS_BLOCKED = 'AccessBlocked'


class ConversionError(Exception):
    """Base class for every error raised while converting a document."""

    kind = ErrorKind.MALFORMED_INPUT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(ConversionError):
    """The input format cannot be converted."""
    kind = ErrorKind.UNSUPPORTED_FORMAT


class MalformedInputError(ConversionError):
    """The input could not be parsed."""
    kind = ErrorKind.MALFORMED_INPUT


class MissingContentError(ConversionError):
    """A word-processing package lacks its document body part."""
    kind = ErrorKind.MISSING_CONTENT_PART


class EmptyResultError(ConversionError):
    """Conversion produced nothing renderable."""
    kind = ErrorKind.EMPTY_RESULT


class AccessBlockedError(ConversionError):
    """The supplied markup is a bot-protection page rather than content."""
    kind = ErrorKind.ACCESS_BLOCKED
