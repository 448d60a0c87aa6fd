import pytest

from docmark import convert, convert_markup
from docmark.dispatcher import detect_format, error_document, markdown_name
from docmark.errors import (
    ConversionError,
    EmptyResultError,
    ErrorKind,
    MalformedInputError,
    MissingContentError,
    UnsupportedFormatError,
)
from docmark.models import ConversionOutcome, DocumentFormat, MarkdownDocument, SourceFile

from .conftest import docx_bytes


class TestDetectFormat:
    @pytest.mark.parametrize('name,expected', [
        ('page.html', DocumentFormat.HTML),
        ('page.HTM', DocumentFormat.HTML),
        ('data.json', DocumentFormat.JSON),
        ('table.csv', DocumentFormat.CSV),
        ('table.tsv', DocumentFormat.CSV),
        ('feed.xml', DocumentFormat.XML),
        ('report.docx', DocumentFormat.WORDPROC),
        ('notes.txt', DocumentFormat.PLAINTEXT),
        ('README', DocumentFormat.PLAINTEXT),
        ('archive.bin', DocumentFormat.PLAINTEXT),
    ])
    def test_by_extension(self, name, expected):
        assert detect_format(name) is expected

    @pytest.mark.parametrize('hint,expected', [
        ('text/html', DocumentFormat.HTML),
        ('application/json', DocumentFormat.JSON),
        ('text/csv', DocumentFormat.CSV),
        ('application/xml', DocumentFormat.XML),
        ('application/vnd.openxmlformats-officedocument.wordprocessingml.document', DocumentFormat.WORDPROC),
        ('plaintext', DocumentFormat.PLAINTEXT),
        (DocumentFormat.CSV, DocumentFormat.CSV),
    ])
    def test_hint_wins_over_extension(self, hint, expected):
        assert detect_format('file.txt', hint) is expected

    def test_legacy_word_files_are_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            detect_format('old.doc')
        with pytest.raises(UnsupportedFormatError):
            detect_format('old', 'application/msword')


class TestHelpers:
    def test_markdown_name(self):
        assert markdown_name('report.final.docx') == 'report.final.md'
        assert markdown_name('README') == 'README.md'

    def test_error_document(self):
        document = error_document('bad.json', ConversionError('boom'))
        assert document.name == 'ERROR_bad.json.md'
        assert document.content == (
            '# Conversion Error\n\n**File:** bad.json\n**Error:** boom\n\n'
            '*This file could not be converted to markdown.*\n'
        )

    def test_outcome_holds_exactly_one_value(self):
        with pytest.raises(ValueError):
            ConversionOutcome(source_name='x')
        with pytest.raises(ValueError):
            ConversionOutcome(source_name='x', document=MarkdownDocument('x.md', ''),
                              error=ConversionError('e'))

    def test_unwrap(self):
        outcome = ConversionOutcome(source_name='x', error=MalformedInputError('bad'))
        with pytest.raises(MalformedInputError):
            outcome.unwrap()


class TestConvertOne:
    def test_success(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('notes.txt', b'HELLO WORLD\n\nBody text.'))
        assert outcome.ok
        assert outcome.unwrap().name == 'notes.md'
        assert outcome.document.content == '# HELLO WORLD\n\nBody text.\n'

    def test_docx_bytes(self, dispatcher, sample_docx):
        outcome = dispatcher.convert_one(SourceFile('report.docx', sample_docx))
        assert outcome.document.content == '## Intro\n\nPlain body text.\n'

    def test_bad_package(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('broken.docx', b'not a zip'))
        assert not outcome.ok
        assert outcome.error.kind is ErrorKind.MALFORMED_INPUT

    def test_missing_part(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('empty.docx', docx_bytes()))
        assert outcome.error.kind is ErrorKind.MISSING_CONTENT_PART

    def test_unexpected_errors_are_captured(self, dispatcher):
        def explode(text):
            raise RuntimeError('kaboom')

        dispatcher.converters[DocumentFormat.JSON] = explode
        outcome = dispatcher.convert_one(SourceFile('a.json', b'{}'))
        assert isinstance(outcome.error, ConversionError)
        assert outcome.error.message == 'kaboom'

    def test_byte_order_mark_is_dropped(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('t.csv', b'\xef\xbb\xbfname,n\nA,1\n'))
        assert '| name | n |' in outcome.document.content

    def test_tsv_uses_tabs(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('t.tsv', b'a\tb\n1\t2\n'))
        assert '| a | b |' in outcome.document.content

    def test_text_input_is_accepted(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('page.html', '<p>Hi</p>'))
        assert outcome.document.content == 'Hi\n'

    def test_output_is_cleaned(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('n.txt', b'first\n\n\n\n\n\nsecond'))
        assert outcome.document.content == 'first\n\n\nsecond\n'


class TestBatch:
    def test_every_input_yields_a_document(self):
        files = [
            SourceFile('good.csv', b'a,b\n1,2\n'),
            SourceFile('legacy.doc', b'\xd0\xcf\x11\xe0'),
            SourceFile('broken.docx', b'nope'),
            SourceFile('data.json', b'{"k": "v"}'),
        ]
        documents = convert(files)
        assert [doc.name for doc in documents] == [
            'good.md', 'ERROR_legacy.doc.md', 'ERROR_broken.docx.md', 'data.md'
        ]
        assert '**File:** legacy.doc' in documents[1].content
        assert documents[1].content.startswith('# Conversion Error')

    def test_progress_callback(self):
        calls = []
        convert([SourceFile('a.txt', b'a'), SourceFile('b.txt', b'b')], on_progress=calls.append)
        assert calls == [0, 1, 2]

    def test_progress_for_empty_batch(self):
        calls = []
        assert convert([], on_progress=calls.append) == []
        assert calls == [0]

    def test_config_reaches_converters(self):
        documents = convert([SourceFile('d.csv', b'a;b\n1;2\n')], config={'csv_delimiter': ';'})
        assert '| a | b |' in documents[0].content

    def test_failures_are_logged(self, caplog):
        with caplog.at_level('ERROR', logger='docmark'):
            convert([SourceFile('broken.docx', b'nope')])
        assert 'broken.docx' in caplog.text


class TestMarkup:
    def test_slides_are_cleaned(self):
        html = '<div class="slide"><p>One</p></div><div class="slide"><p>Two</p></div>'
        documents = convert_markup(html, 'deck')
        assert [doc.name for doc in documents] == ['full_presentation.md', 'slide_01.md', 'slide_02.md']
        assert all(doc.content.endswith('\n') for doc in documents)

    def test_empty_markup(self):
        with pytest.raises(EmptyResultError):
            convert_markup('<html><body></body></html>', 'deck')

    def test_docx_markup(self, dispatcher):
        from .conftest import document_xml, paragraph_xml, run_xml

        markup = document_xml(paragraph_xml(run_xml('Heading'), style='Heading1'))
        document = dispatcher.convert_docx_markup(markup, 'x.docx')
        assert document.name == 'x.md'
        assert document.content == '# Heading\n'

    def test_docx_markup_without_body(self, dispatcher):
        with pytest.raises(MissingContentError) as raised:
            dispatcher.convert_docx_markup(None, 'x.docx')
        assert raised.value.kind is ErrorKind.MISSING_CONTENT_PART

    def test_nul_characters_do_not_break_cleaning(self, dispatcher):
        outcome = dispatcher.convert_one(SourceFile('a.txt', b'x \x00FENCE0\x00 y'))
        assert outcome.ok
        assert outcome.document.name == 'a.md'
