"""Reading and writing message files in the binary ENG format."""

from __future__ import annotations

import struct
from typing import BinaryIO

from engconvert.encoding import TextCodec, get_codec
from engconvert.logger import Logger
from engconvert.messageentry import (
    Dialog,
    Image,
    MessageEntry,
    PositionedString,
    TextString,
)
from engconvert.messagefile import MessageFile

MAX_DATA_SIZE = 1_000_000
"""Largest supported data part; the original files hold at most about 520 kB."""

_HEADER = struct.Struct("<16s2i")
# type, subtype, (unused), dialog x/y/w/h, image graphic/x/y, image2 graphic/x/y,
# title x/y, subtitle x/y, (unused x/y), video x/y, (padding), urgent,
# video offset, (unused offset), title offset, subtitle offset, content offset
_ENTRY = struct.Struct("<2h2x4h3h3h2h2h4x2h14x2i4x3i")
_EMPTY_ENTRY = bytes(_ENTRY.size)
# Strings in the data part start after this many zero bytes, so offsets are > 0.
_DATA_PREFIX = 16


class EngFormatError(ValueError):
    """Raised when an ENG file refers to data that is not there."""


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _int32(value: int) -> int:
    return ((value + 0x8000_0000) & 0xFFFF_FFFF) - 0x8000_0000


def _c_string(data: bytes, start: int = 0) -> bytes:
    end = data.find(b"\0", start)
    if end < 0:
        end = len(data)
    return data[start:end]


def _parse_entry(entry_id: int, raw: bytes) -> MessageEntry:
    (
        entry_type, subtype,
        dialog_x, dialog_y, dialog_width, dialog_height,
        graphic, image_x, image_y,
        graphic2, image2_x, image2_y,
        title_x, title_y,
        subtitle_x, subtitle_y,
        video_x, video_y,
        urgent,
        video_offset, title_offset, subtitle_offset, content_offset,
    ) = _ENTRY.unpack(raw)
    return MessageEntry(
        entry_id,
        type=entry_type,
        subtype=subtype,
        image=Image(graphic, image_x, image_y),
        image2=Image(graphic2, image2_x, image2_y),
        dialog=Dialog(dialog_x, dialog_y, dialog_width, dialog_height),
        urgent=bool(urgent),
        title=PositionedString(offset=title_offset, x=title_x, y=title_y),
        subtitle=PositionedString(offset=subtitle_offset, x=subtitle_x, y=subtitle_y),
        video=PositionedString(offset=video_offset, x=video_x, y=video_y),
        content=TextString(offset=content_offset),
    )


def read_message_eng(stream: BinaryIO, encoding: str, logger: Logger) -> MessageFile:
    """Read a message file from a binary ENG stream.

    Entries that have all fields zero are left out. Missing bytes count as
    zeros. String offsets outside the data part are logged as errors and
    raise EngFormatError once all entries have been checked.
    """
    codec = get_codec(encoding, logger)
    raw = stream.read()
    head = raw[:_HEADER.size].ljust(_HEADER.size, b"\0")
    raw_name, total, _used = _HEADER.unpack(head)
    message_file = MessageFile(name=codec.decode(_c_string(raw_name)), total_entries=total)

    for entry_id in range(total):
        start = _HEADER.size + entry_id * _ENTRY.size
        if start >= len(raw):
            # Everything past the end reads as zeros, giving only empty entries.
            break
        chunk = raw[start:start + _ENTRY.size].ljust(_ENTRY.size, b"\0")
        entry = _parse_entry(entry_id, chunk)
        if not entry.is_empty():
            message_file.entries.append(entry)

    data = raw[_HEADER.size + max(total, 0) * _ENTRY.size:]
    if len(data) > MAX_DATA_SIZE:
        logger.warn("Data part of the file is too large, max supported is 1 MB")
        data = data[:MAX_DATA_SIZE]
    text_size = len(data)
    # Ignore duplicate trailing NUL bytes.
    while text_size > 1 and data[text_size - 1] == 0 and data[text_size - 2] == 0:
        text_size -= 1
    buffer = data + b"\0"

    failed = False
    for entry in message_file.entries:
        for field_name, target in (
            ("video", entry.video),
            ("title", entry.title),
            ("subtitle", entry.subtitle),
            ("content", entry.content),
        ):
            offset = target.offset
            if not offset:
                continue
            if offset < 0 or offset > text_size:
                logger.error(
                    f"Invalid data offset {offset} for {field_name} text in entry {entry.id}"
                )
                failed = True
                continue
            target.text = codec.decode(_c_string(buffer, offset))
    if failed:
        raise EngFormatError("Message file contains invalid data offsets")
    return message_file


def _store_text(string: TextString, data: bytearray, codec: TextCodec) -> None:
    if not string.text:
        string.offset = 0
    else:
        string.offset = len(data)
        data += codec.encode(string.text) + b"\0"


def _pack_entry(entry: MessageEntry, data: bytearray, codec: TextCodec) -> bytes:
    for string in (entry.video, entry.title, entry.subtitle, entry.content):
        _store_text(string, data, codec)
    shorts = [
        entry.type, entry.subtype,
        entry.dialog.x, entry.dialog.y, entry.dialog.width, entry.dialog.height,
        entry.image.graphic, entry.image.x, entry.image.y,
        entry.image2.graphic, entry.image2.x, entry.image2.y,
        entry.title.x, entry.title.y,
        entry.subtitle.x, entry.subtitle.y,
        entry.video.x, entry.video.y,
    ]
    ints = [
        1 if entry.urgent else 0,
        entry.video.offset,
        entry.title.offset,
        entry.subtitle.offset,
        entry.content.offset,
    ]
    return _ENTRY.pack(*(_int16(v) for v in shorts), *(_int32(v) for v in ints))


def write_message_eng(
    message_file: MessageFile, stream: BinaryIO, encoding: str, logger: Logger
) -> None:
    """Write a message file to a binary ENG stream.

    The entries are sorted by ID in place, and the offsets of their strings
    are updated to where the strings are written.
    """
    codec = get_codec(encoding, logger)
    message_file.entries.sort(key=lambda entry: entry.id)

    name = codec.encode(message_file.name)
    if len(name) > 16:
        logger.warn(
            f"Name '{message_file.name}' is longer than 16 characters and will be truncated"
        )
    header = _HEADER.pack(
        name,
        _int32(message_file.total_entries),
        _int32(message_file.max_entry_id() + 1),
    )

    index = bytearray()
    data = bytearray(_DATA_PREFIX)
    last_written = -1
    for entry in message_file.entries:
        index += _EMPTY_ENTRY * max(0, entry.id - last_written - 1)
        last_written = entry.id
        index += _pack_entry(entry, data, codec)
    index += _EMPTY_ENTRY * max(0, message_file.total_entries - last_written - 1)
    data += b"\0"
    stream.write(header + bytes(index) + bytes(data))