import io

import pytest

from engconvert.logger import Logger
from engconvert.text_xml import XmlFormatError, read_text_xml, write_text_xml
from engconvert.textfile import TextFile
from engconvert.textgroup import TextGroup


def _roundtrip(text_file: TextFile) -> TextFile:
    buffer = io.BytesIO()
    write_text_xml(text_file, buffer)
    buffer.seek(0)
    return read_text_xml(buffer, Logger())


def _read(document: str, logger: Logger | None = None) -> TextFile:
    return read_text_xml(io.BytesIO(document.encode("utf-8")), logger or Logger())


def test_roundtrip_preserves_everything():
    original = TextFile(
        name="c3.eng",
        index_with_counts=True,
        groups=[
            TextGroup(0, strings=["Hello", "a < b & c > d", 'quote "x"']),
            TextGroup(3, strings=[]),
            TextGroup(5, strings=["", "Prätorianer ÆØ", "line\nbreak"]),
        ],
    )
    result = _roundtrip(original)
    assert result == original


def test_roundtrip_empty_file():
    original = TextFile(name="empty")
    assert _roundtrip(original) == original


def test_roundtrip_name_with_special_characters():
    original = TextFile(name='a&b<"c">')
    assert _roundtrip(original).name == original.name


def test_written_document_starts_with_declaration():
    buffer = io.BytesIO()
    write_text_xml(TextFile(name="x"), buffer)
    output = buffer.getvalue().decode("utf-8")
    assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert 'indexWithCounts="false"' in output


def test_written_strings_have_sequential_ids():
    buffer = io.BytesIO()
    group = TextGroup(2, strings=["one", "two", "three"])
    write_text_xml(TextFile(groups=[group]), buffer)
    output = buffer.getvalue().decode("utf-8")
    for index, text in enumerate(group.strings):
        assert f'<string id="{index}">{text}</string>' in output


@pytest.mark.parametrize(
    ("value", "expected"),
    [("false", False), ("true", True), ("yes", True)],
)
def test_index_with_counts_attribute(value, expected):
    text_file = _read(f'<strings indexWithCounts="{value}"/>')
    assert text_file.index_with_counts is expected


def test_missing_attributes_keep_defaults():
    text_file = _read("<strings/>")
    assert text_file.name == ""
    assert text_file.index_with_counts is False
    assert text_file.groups == []


def test_wrong_root_element():
    logger = Logger()
    with pytest.raises(XmlFormatError):
        _read("<messages/>", logger)
    assert logger.messages() == ["ERROR: Unable to find root <strings> element"]


def test_malformed_xml():
    with pytest.raises(XmlFormatError):
        _read("<strings><group id='1'></strings>")


def test_strings_out_of_order():
    logger = Logger()
    document = '<strings><group id="4"><string id="1">x</string></group></strings>'
    with pytest.raises(XmlFormatError):
        _read(document, logger)
    assert logger.messages() == ["ERROR: Strings in group 4 are not ordered properly"]


def test_group_without_id():
    with pytest.raises(XmlFormatError):
        _read("<strings><group/></strings>")


def test_string_with_non_integer_id():
    document = '<strings><group id="0"><string id="abc">x</string></group></strings>'
    with pytest.raises(XmlFormatError):
        _read(document)


def test_unexpected_tag_in_root():
    with pytest.raises(XmlFormatError):
        _read('<strings><other id="1"/></strings>')


def test_unexpected_tag_in_group():
    with pytest.raises(XmlFormatError):
        _read('<strings><group id="1"><other/></group></strings>')


def test_read_groups_and_strings():
    document = (
        '<strings name="demo">'
        '<group id="7"><string id="0">first</string><string id="1"/></group>'
        "</strings>"
    )
    text_file = _read(document)
    assert text_file.name == "demo"
    assert [g.id for g in text_file.groups] == [7]
    assert text_file.groups[0].strings == ["first", ""]