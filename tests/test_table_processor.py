import pytest

from docmark.processing.table_processor import (
    TableProcessor,
    escape_cell,
    format_number,
    parse_number,
    render_markdown_table,
)


@pytest.fixture
def processor():
    return TableProcessor()


def numeric_rows(numeric, text):
    rows = [['value']]
    rows.extend([str(i)] for i in range(numeric))
    rows.extend(['n/a'] for _ in range(text))
    return rows


class TestParseLine:
    def test_quoted_fields(self, processor):
        assert processor.parse_line('a,"b,c","d""e"') == ['a', 'b,c', 'd"e']

    def test_fields_are_trimmed(self, processor):
        assert processor.parse_line(' a , b ,c ') == ['a', 'b', 'c']

    def test_empty_fields_are_kept(self, processor):
        assert processor.parse_line('a,,c,') == ['a', '', 'c', '']

    def test_custom_delimiter(self):
        processor = TableProcessor({'csv_delimiter': '\t'})
        assert processor.parse_line('a\tb,c') == ['a', 'b,c']


class TestParse:
    def test_blank_lines_are_skipped(self, processor):
        rows = processor.parse('h1,h2\r\n\r\n1,2\n\n3,4\n')
        assert rows == [['h1', 'h2'], ['1', '2'], ['3', '4']]

    def test_empty_text(self, processor):
        assert processor.parse('  \n\n') == []


class TestNumericDetection:
    def test_seventy_percent_is_numeric(self, processor):
        assert processor.detect_numeric_columns(numeric_rows(7, 3)) == [0]

    def test_sixty_percent_is_not_numeric(self, processor):
        assert processor.detect_numeric_columns(numeric_rows(6, 4)) == []

    def test_only_the_sample_is_inspected(self, processor):
        # Ten numeric rows fill the sample; the text rows after it are ignored
        assert processor.detect_numeric_columns(numeric_rows(10, 20)) == [0]

    def test_empty_values_are_ignored(self, processor):
        rows = [['a', 'b'], ['1', ''], ['2', ''], ['x', '']]
        assert processor.detect_numeric_columns(rows) == []
        rows = [['a'], ['1'], [''], ['2']]
        assert processor.detect_numeric_columns(rows) == [0]

    def test_header_only(self, processor):
        assert processor.detect_numeric_columns([['a', 'b']]) == []


class TestSummaries:
    def test_summary_uses_parseable_values(self, processor):
        rows = [['n'], ['1'], ['2'], ['x'], ['3']]
        summary = processor.summarize_column(rows, 0)
        assert summary.count == 3
        assert summary.average == pytest.approx(2.0)
        assert summary.minimum == 1
        assert summary.maximum == 3

    def test_summary_covers_rows_beyond_the_sample(self, processor):
        rows = [['n']] + [[str(i)] for i in range(1, 16)]
        summary = processor.summarize_column(rows, 0)
        assert summary.count == 15
        assert summary.maximum == 15

    def test_no_numbers_gives_no_summary(self, processor):
        assert processor.summarize_column([['n'], ['x']], 0) is None


class TestHelpers:
    def test_parse_number(self):
        assert parse_number(' 4.5 ') == 4.5
        assert parse_number('-3') == -3
        assert parse_number('1e3') == 1000
        assert parse_number('abc') is None
        assert parse_number('') is None
        assert parse_number('nan') is None
        assert parse_number('inf') is None

    def test_format_number(self):
        assert format_number(3.0) == '3'
        assert format_number(2.5) == '2.5'

    def test_escape_cell(self):
        assert escape_cell('a|b') == 'a\\|b'

    def test_rows_fit_the_header(self):
        lines = render_markdown_table(['a', 'b'], [['1'], ['1', '2', '3']])
        assert lines == [
            '| a | b |',
            '| --- | --- |',
            '| 1 |  |',
            '| 1 | 2 |',
        ]
