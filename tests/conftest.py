import io
import zipfile

import pytest

from docmark.dispatcher import DocumentDispatcher

W_NS = 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'


def run_xml(text, bold=False, italic=False, preserve=False):
    props = ''
    if bold or italic:
        props = '<w:rPr>' + ('<w:b/>' if bold else '') + ('<w:i/>' if italic else '') + '</w:rPr>'
    space = ' xml:space="preserve"' if preserve else ''
    return f'<w:r>{props}<w:t{space}>{text}</w:t></w:r>'


def paragraph_xml(*runs, style=None, outline=None):
    props = ''
    if style or outline is not None:
        props = '<w:pPr>'
        if style:
            props += f'<w:pStyle w:val="{style}"/>'
        if outline is not None:
            props += f'<w:outlineLvl w:val="{outline}"/>'
        props += '</w:pPr>'
    return f'<w:p>{props}{"".join(runs)}</w:p>'


def document_xml(*paragraphs):
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{"".join(paragraphs)}</w:body></w:document>'
    )


def docx_bytes(document=None, extra_parts=None):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        archive.writestr('[Content_Types].xml', '<Types/>')
        if document is not None:
            archive.writestr('word/document.xml', document)
        for name, content in (extra_parts or {}).items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def dispatcher():
    return DocumentDispatcher()


@pytest.fixture
def sample_docx():
    return docx_bytes(document_xml(
        paragraph_xml(run_xml('Intro'), style='Heading2'),
        paragraph_xml(run_xml('Plain body text.')),
    ))
