import json

import pytest

from docmark.converters.json_converter import JsonConverter
from docmark.errors import MalformedInputError
from docmark.processing.json_tree import JsonKind, parse_json


@pytest.fixture
def converter():
    return JsonConverter()


class TestJsonTree:
    def test_kinds(self):
        root = parse_json('{"n": null, "b": true, "i": 1, "s": "x", "a": [], "o": {}}')
        assert root.kind is JsonKind.OBJECT
        assert root.keys() == ('n', 'b', 'i', 's', 'a', 'o')
        assert [member.kind for _, member in root.members] == [
            JsonKind.NULL, JsonKind.BOOLEAN, JsonKind.NUMBER,
            JsonKind.STRING, JsonKind.ARRAY, JsonKind.OBJECT,
        ]

    def test_text_forms(self):
        root = parse_json('[null, false, 2.0, 2.5, "s", {"a": 1}]')
        assert [item.text() for item in root.items] == ['null', 'false', '2', '2.5', 's', '{"a":1}']

    def test_invalid_json(self):
        with pytest.raises(MalformedInputError):
            parse_json('{bad json')


class TestArrays:
    def test_objects_become_a_table_over_all_keys(self, converter):
        result = converter.convert('[{"a": 1, "b": 2}, {"a": 3, "c": 4}, {"b": 5}]')
        assert '**Type:** Array with 3 items' in result
        assert '**Array Table** (3 items)' in result
        assert '| a | b | c |' in result
        assert '| 1 | 2 |  |' in result
        assert '| 3 |  | 4 |' in result
        assert '|  | 5 |  |' in result

    def test_null_cells_are_empty(self, converter):
        result = converter.convert('[{"a": null, "b": "x"}]')
        assert '|  | x |' in result

    def test_mixed_array_is_a_numbered_list(self, converter):
        result = converter.convert('[1, "two", null, true, {"k": 1}]')
        assert '**Array List** (5 items)' in result
        assert '1. 1' in result
        assert '2. two' in result
        assert '3. null' in result
        assert '4. true' in result
        assert '5. {"k":1}' in result

    def test_long_array_gets_item_counts(self, converter):
        data = ['b'] * 10 + ['a'] * 15
        result = converter.convert(json.dumps(data))
        assert '**Item counts:**' in result
        assert result.index('- `a`: 15 times') < result.index('- `b`: 10 times')
        assert '1. ' not in result

    def test_equal_counts_keep_first_seen_order(self, converter):
        data = ['y', 'x'] * 11
        result = converter.convert(json.dumps(data))
        assert result.index('- `y`: 11 times') < result.index('- `x`: 11 times')

    def test_twenty_items_are_still_listed(self, converter):
        result = converter.convert(json.dumps(list(range(20))))
        assert '**Item counts:**' not in result
        assert '20. 19' in result

    def test_empty_array(self, converter):
        assert '**Empty array**' in converter.convert('[]')

    def test_array_of_empty_objects(self, converter):
        assert '**Array of empty objects**' in converter.convert('[{}, {}]')


class TestObjects:
    def test_properties_become_sections(self, converter):
        data = {
            'outer': {'inner': 'value'},
            'empty': {},
            'nothing': None,
            'flag': False,
            'long': 'x' * 150,
            'tags': ['a', 'b'],
        }
        result = converter.convert(json.dumps(data))
        assert '**Type:** Object with 6 properties' in result
        assert '## outer' in result
        assert '### inner\n\nvalue' in result
        assert '## empty\n\n*Empty object*' in result
        assert '## nothing\n\n*null*' in result
        assert '## flag\n\nfalse' in result
        assert '```\n' + 'x' * 150 + '\n```' in result
        assert '## tags\n\n**Array List** (2 items)' in result

    def test_heading_depth_is_capped(self, converter):
        data = {'l1': {'l2': {'l3': {'l4': {'l5': {'l6': {'l7': 1}}}}}}}
        result = converter.convert(json.dumps(data))
        assert '###### l5' in result
        assert '###### l7' in result
        assert '#######' not in result

    def test_wide_object_gets_property_summary(self, converter):
        data = {f'key{i}': i for i in range(11)}
        data['list'] = [1, 2]
        result = converter.convert(json.dumps(data))
        assert '| Property | Type | Value Preview |' in result
        assert '| list | Array[2] | [2 items] |' in result
        assert '| key0 | number | 0 |' in result
        assert result.index('## Property Summary') < result.index('## Detailed Content')
        assert result.index('## Detailed Content') < result.index('## key0')

    def test_ten_properties_have_no_summary(self, converter):
        data = {f'key{i}': i for i in range(10)}
        assert '## Property Summary' not in converter.convert(json.dumps(data))

    def test_previews_are_truncated(self, converter):
        data = {f'key{i}': i for i in range(10)}
        data['text'] = 'y' * 60
        data['obj'] = {'a': 1, 'b': 2, 'c': 3, 'd': 4}
        result = converter.convert(json.dumps(data))
        assert '| text | string | ' + 'y' * 50 + '... |' in result
        assert '| obj | object | {a, b, c...} |' in result


class TestScalarsAndErrors:
    def test_scalar_root(self, converter):
        result = converter.convert('42')
        assert '**Type:** number' in result
        assert '**Value:**\n```json\n42\n```' in result

    def test_invalid_json_keeps_raw_content(self, converter):
        result = converter.convert('{bad json')
        assert result.startswith('# Invalid JSON Content')
        assert '**Error:**' in result
        assert '```json\n{bad json\n```' in result
