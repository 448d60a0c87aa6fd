"""
Closed value tree for parsed JSON documents.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from ..errors import MalformedInputError


class JsonKind(Enum):
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'


@dataclass(frozen=True)
class JsonValue:
    """
    One node of a JSON document.
    
    Scalars keep their payload in ``value``; arrays keep their elements in
    ``items`` and objects keep their properties, in document order, in
    ``members``.
    """
    kind: JsonKind
    value: Any = None
    items: Tuple['JsonValue', ...] = ()
    members: Tuple[Tuple[str, 'JsonValue'], ...] = ()

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.members)

    def to_python(self) -> Any:
        if self.kind is JsonKind.ARRAY:
            return [item.to_python() for item in self.items]
        if self.kind is JsonKind.OBJECT:
            return {key: member.to_python() for key, member in self.members}
        return self.value

    def compact(self) -> str:
        """Serialize as single-line JSON."""
        return json.dumps(self.to_python(), separators=(',', ':'), ensure_ascii=False)

    def text(self) -> str:
        """Plain string form used in lists, previews and table cells."""
        if self.kind is JsonKind.NULL:
            return 'null'
        if self.kind is JsonKind.BOOLEAN:
            return 'true' if self.value else 'false'
        if self.kind is JsonKind.NUMBER:
            return _format_number(self.value)
        if self.kind is JsonKind.STRING:
            return self.value
        return self.compact()


def _format_number(number: Any) -> str:
    if isinstance(number, float) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return str(number)


def from_python(data: Any) -> JsonValue:
    """Build a value tree from the output of ``json.loads``."""
    if data is None:
        return JsonValue(JsonKind.NULL)
    if isinstance(data, bool):
        return JsonValue(JsonKind.BOOLEAN, data)
    if isinstance(data, (int, float)):
        return JsonValue(JsonKind.NUMBER, data)
    if isinstance(data, str):
        return JsonValue(JsonKind.STRING, data)
    if isinstance(data, list):
        return JsonValue(JsonKind.ARRAY, items=tuple(from_python(item) for item in data))
    if isinstance(data, dict):
        return JsonValue(
            JsonKind.OBJECT,
            members=tuple((str(key), from_python(value)) for key, value in data.items())
        )
    raise TypeError(f"Unsupported JSON value: {type(data).__name__}")


def parse_json(text: str) -> JsonValue:
    """
    Parse JSON text into a value tree.
    
    Raises:
        MalformedInputError: If the text is not valid JSON
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedInputError(str(e)) from e
    return from_python(data)
