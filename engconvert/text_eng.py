"""Reading and writing text files in the binary ENG format."""

from __future__ import annotations

import struct
from typing import BinaryIO

from engconvert.encoding import get_codec
from engconvert.logger import Logger
from engconvert.textfile import TextFile
from engconvert.textgroup import TextGroup

MAX_INDEX_ENTRIES = 1000
"""Number of entries in the index of every text ENG file."""

MAX_DATA_SIZE = 1_000_000
"""Largest supported data part; the original files hold at most about 250 kB."""

_HEADER = struct.Struct("<16s3i")
_INDEX_ENTRY = struct.Struct("<2i")
_DATA_START = _HEADER.size + MAX_INDEX_ENTRIES * _INDEX_ENTRY.size


def _c_string(data: bytes, start: int) -> bytes:
    end = data.find(b"\0", start)
    if end < 0:
        end = len(data)
    return data[start:end]


def read_text_eng(stream: BinaryIO, encoding: str, logger: Logger) -> TextFile:
    """Read a text file from a binary ENG stream.

    Missing header or index bytes count as zeros. Bad group offsets are
    logged as errors and stop the reading of further strings.
    """
    codec = get_codec(encoding, logger)
    raw = stream.read()
    head = raw[:_DATA_START].ljust(_DATA_START, b"\0")

    # The header counters are recomputed when writing, so only the name is kept.
    raw_name = _HEADER.unpack_from(head)[0]
    text_file = TextFile(name=codec.decode(_c_string(raw_name, 0)))

    index = head[_HEADER.size:]
    for group_id, (offset, used) in enumerate(_INDEX_ENTRY.iter_unpack(index)):
        if used:
            text_file.groups.append(TextGroup(group_id, offset))
            if used > 1:
                text_file.index_with_counts = True

    data = raw[_DATA_START:]
    if len(data) > MAX_DATA_SIZE:
        logger.warn("Data part of the file is too large, max supported is 1 MB")
        data = data[:MAX_DATA_SIZE]
    text_size = len(data)
    # Ignore duplicate trailing NUL bytes.
    while text_size > 1 and data[text_size - 1] == 0 and data[text_size - 2] == 0:
        text_size -= 1
    buffer = data + b"\0"

    groups = text_file.groups
    ends = [group.file_offset for group in groups[1:]] + [text_size]
    for group, end in zip(groups, ends):
        start = group.file_offset
        if start > text_size or end > text_size or start > end or start < 0:
            logger.error(f"Invalid data offset for group {group.id}: {start}-{end}")
            break
        while start < end:
            # Skip NUL padding that some patched files put between strings.
            while start < end and buffer[start] == 0:
                start += 1
            raw_string = _c_string(buffer, start)
            group.add(codec.decode(raw_string))
            start += len(raw_string) + 1
    return text_file


def _empty_entries(last_written: int, next_index: int, offset: int) -> bytes:
    count = max(0, next_index - last_written - 1)
    return _INDEX_ENTRY.pack(offset, 0) * count


def write_text_eng(text_file: TextFile, stream: BinaryIO, encoding: str, logger: Logger) -> None:
    """Write a text file to a binary ENG stream.

    The groups of the file are sorted by ID in place before writing.
    """
    codec = get_codec(encoding, logger)
    text_file.groups.sort(key=lambda group: group.id)

    name = codec.encode(text_file.name)
    if len(name) > 16:
        logger.warn(
            f"Name '{text_file.name}' is longer than 16 characters and will be truncated"
        )

    index = bytearray()
    data = bytearray()
    last_written = -1
    for group in text_file.groups:
        index += _empty_entries(last_written, group.id, len(data))
        last_written = group.id
        count = len(group) if text_file.index_with_counts else 1
        index += _INDEX_ENTRY.pack(len(data), count)
        for string in group.strings:
            data += codec.encode(string) + b"\0"
    index += _empty_entries(last_written, MAX_INDEX_ENTRIES, 0)
    data += b"\0"
    if len(data) % 2:
        data += b"\0"

    header = _HEADER.pack(
        name,
        text_file.max_group_id() + 1,
        text_file.total_strings(),
        text_file.total_words(),
    )
    stream.write(header + bytes(index) + bytes(data))