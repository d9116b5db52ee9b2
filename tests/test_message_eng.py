import io
import struct

import pytest

from engconvert.encoding import UnsupportedEncodingError
from engconvert.logger import Logger
from engconvert.message_eng import (
    MAX_DATA_SIZE,
    EngFormatError,
    read_message_eng,
    write_message_eng,
)
from engconvert.messageentry import Dialog, Image, MessageEntry, PositionedString, TextString
from engconvert.messagefile import MessageFile

ENCODING = "Windows-1252"


def _sample_file() -> MessageFile:
    entry1 = MessageEntry(
        1,
        type=2,
        subtype=3,
        image=Image(graphic=10, x=-5, y=6),
        dialog=Dialog(x=1, y=2, width=30, height=20),
        urgent=True,
        title=PositionedString(text="Title", x=7, y=8),
        content=TextString(text="Body text\x0e"),
    )
    entry5 = MessageEntry(
        5,
        type=1,
        image2=Image(graphic=99, x=1, y=1),
        subtitle=PositionedString(text="Sub", x=3, y=4),
        video=PositionedString(text="intro.smk", x=0, y=0),
    )
    return MessageFile(name="messages", total_entries=10, entries=[entry5, entry1])


def _write(message_file: MessageFile) -> bytes:
    out = io.BytesIO()
    write_message_eng(message_file, out, ENCODING, Logger())
    return out.getvalue()


def _read(data: bytes, logger: Logger | None = None) -> MessageFile:
    return read_message_eng(io.BytesIO(data), ENCODING, logger or Logger())


def test_round_trip_preserves_entries():
    original = _sample_file()
    result = _read(_write(original))
    assert result.name == "messages"
    assert result.total_entries == 10
    assert [e.id for e in result.entries] == [1, 5]
    first, second = result.entries
    assert first.type == 2 and first.subtype == 3
    assert first.image == Image(graphic=10, x=-5, y=6)
    assert first.dialog == Dialog(x=1, y=2, width=30, height=20)
    assert first.urgent is True
    assert first.title.text == "Title"
    assert (first.title.x, first.title.y) == (7, 8)
    assert first.content.text == "Body text\x0e"
    assert second.urgent is False
    assert second.image2 == Image(graphic=99, x=1, y=1)
    assert second.subtitle.text == "Sub"
    assert second.video.text == "intro.smk"


def test_write_sorts_entries_by_id():
    message_file = _sample_file()
    _write(message_file)
    assert [e.id for e in message_file.entries] == [1, 5]


def test_header_holds_name_total_and_used_count():
    data = _write(_sample_file())
    assert data[:16] == b"messages".ljust(16, b"\0")
    total, used = struct.unpack_from("<2i", data, 16)
    assert total == 10
    assert used == 6


def test_file_size_matches_layout():
    message_file = _sample_file()
    data = _write(message_file)
    strings = b"".join(
        s.encode() + b"\0" for s in ("intro.smk", "Sub", "Title", "Body text\x0e")
    )
    assert len(data) == 24 + 10 * 80 + 16 + len(strings) + 1


def test_first_string_starts_after_data_prefix():
    message_file = _sample_file()
    _write(message_file)
    # Entry 1 is written first; its title is its first non-empty string.
    assert message_file.entries[0].title.offset == 16


def test_empty_strings_get_zero_offset():
    message_file = _sample_file()
    _write(message_file)
    assert message_file.entries[0].video.offset == 0
    assert message_file.entries[0].subtitle.offset == 0


def test_empty_entries_are_skipped_on_read():
    message_file = MessageFile(name="x", total_entries=3, entries=[])
    result = _read(_write(message_file))
    assert result.entries == []
    assert result.total_entries == 3


def test_truncated_index_reads_as_empty():
    data = struct.pack("<16s2i", b"short", 5, 5)
    result = _read(data)
    assert result.name == "short"
    assert result.entries == []


def test_invalid_offset_raises_and_logs():
    data = bytearray(_write(MessageFile(total_entries=1, entries=[
        MessageEntry(0, content=TextString(text="hi"))
    ])))
    struct.pack_into("<i", data, 24 + 76, 5000)
    logger = Logger()
    with pytest.raises(EngFormatError):
        _read(bytes(data), logger)
    assert logger.messages() == [
        "ERROR: Invalid data offset 5000 for content text in entry 0"
    ]


def test_long_name_is_truncated_with_warning():
    logger = Logger()
    out = io.BytesIO()
    name = "a_name_longer_than_sixteen"
    write_message_eng(MessageFile(name=name, total_entries=1), out, ENCODING, logger)
    assert out.getvalue()[:16] == name[:16].encode()
    assert logger.messages() == [
        f"Warning: Name '{name}' is longer than 16 characters and will be truncated"
    ]


def test_oversized_data_part_warns():
    data = struct.pack("<16s2i", b"big", 0, 0) + b"a" * (MAX_DATA_SIZE + 1)
    logger = Logger()
    _read(data, logger)
    assert logger.messages() == [
        "Warning: Data part of the file is too large, max supported is 1 MB"
    ]


def test_unknown_encoding_raises():
    with pytest.raises(UnsupportedEncodingError):
        read_message_eng(io.BytesIO(b""), "no-such-encoding", Logger())


def test_non_ascii_text_round_trip():
    message_file = MessageFile(total_entries=1, entries=[
        MessageEntry(0, title=PositionedString(text="Caf\u00e9", x=1, y=1))
    ])
    result = _read(_write(message_file))
    assert result.entries[0].title.text == "Caf\u00e9"