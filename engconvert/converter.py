"""Detection of file types and conversion between ENG and XML files."""

from __future__ import annotations

import enum
import struct
import xml.etree.ElementTree as ET
from os import PathLike
from typing import BinaryIO, Callable, TypeVar, Union

from engconvert.encoding import UnsupportedEncodingError
from engconvert.logger import Logger
from engconvert.message_eng import EngFormatError, read_message_eng, write_message_eng
from engconvert.message_xml import read_message_xml, write_message_xml
from engconvert.text_eng import read_text_eng, write_text_eng
from engconvert.text_xml import XmlFormatError, read_text_xml, write_text_xml

PathType = Union[str, "PathLike[str]"]
_Document = TypeVar("_Document")

_PROBE_SIZE = 8032


class FileType(enum.Enum):
    """Kinds of language file."""

    MESSAGE = "message"
    TEXT = "text"
    UNKNOWN = "unknown"


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def detect_eng_type(path: PathType, logger: Logger) -> FileType:
    """Guess whether an ENG file holds texts or messages from its header."""
    try:
        with open(path, "rb") as stream:
            head = stream.read(_PROBE_SIZE)
    except OSError as exc:
        logger.error(f"Unable to open input file: {_reason(exc)}")
        return FileType.UNKNOWN
    head = head.ljust(_PROBE_SIZE, b"\0")

    first, second = struct.unpack_from("<2i", head, 16)
    if first in (400, 1000) and first >= second:
        # total entries, used entries
        return FileType.MESSAGE
    if first <= 400 and first <= second:
        # used groups, total strings
        return FileType.TEXT
    zero, nonzero = struct.unpack_from("<2I", head, 24 + 8000)
    if zero == 0 and nonzero != 0:
        return FileType.TEXT
    return FileType.UNKNOWN


def detect_xml_type(path: PathType, logger: Logger) -> FileType:
    """Determine the kind of an XML file from its <strings> or <messages> element."""
    try:
        with open(path, "rb") as stream:
            data = stream.read()
    except OSError as exc:
        logger.error(f"Unable to open input file: {_reason(exc)}")
        return FileType.UNKNOWN

    file_type = FileType.UNKNOWN
    parser = ET.XMLPullParser(events=("start",))
    parser.feed(data)
    try:
        for _event, element in parser.read_events():
            tag = element.tag.rpartition("}")[2]
            if tag == "strings":
                file_type = FileType.TEXT
            elif tag == "messages":
                file_type = FileType.MESSAGE
    except ET.ParseError:
        pass
    return file_type


def _convert(
    input_path: PathType,
    output_path: PathType,
    reader: Callable[[BinaryIO], _Document],
    writer: Callable[[_Document, BinaryIO], None],
    input_format: str,
    output_format: str,
    logger: Logger,
) -> bool:
    try:
        with open(input_path, "rb") as stream:
            document = reader(stream)
    except OSError as exc:
        logger.error(f"Unable to open {input_format} file for reading: {_reason(exc)}")
        return False
    except (XmlFormatError, EngFormatError):
        return False
    except UnsupportedEncodingError as exc:
        logger.error(str(exc))
        return False

    try:
        with open(output_path, "wb") as stream:
            writer(document, stream)
    except OSError as exc:
        logger.error(f"Unable to open {output_format} file for writing: {_reason(exc)}")
        return False
    except UnsupportedEncodingError as exc:
        logger.error(str(exc))
        return False
    return True


def convert_eng_to_xml(
    input_path: PathType, output_path: PathType, encoding: str, logger: Logger
) -> bool:
    """Convert an ENG file to XML; returns whether it succeeded."""
    file_type = detect_eng_type(input_path, logger)
    if file_type is FileType.TEXT:
        logger.info("Determined file type: text")
        return _convert(
            input_path, output_path,
            lambda s: read_text_eng(s, encoding, logger),
            write_text_xml,
            "ENG", "XML", logger,
        )
    if file_type is FileType.MESSAGE:
        logger.info("Determined file type: message")
        return _convert(
            input_path, output_path,
            lambda s: read_message_eng(s, encoding, logger),
            write_message_xml,
            "ENG", "XML", logger,
        )
    logger.error("Unknown input file type")
    return False


def convert_xml_to_eng(
    input_path: PathType, output_path: PathType, encoding: str, logger: Logger
) -> bool:
    """Convert an XML file to ENG; returns whether it succeeded."""
    file_type = detect_xml_type(input_path, logger)
    if file_type is FileType.TEXT:
        logger.info("Determined file type: text")
        return _convert(
            input_path, output_path,
            lambda s: read_text_xml(s, logger),
            lambda doc, s: write_text_eng(doc, s, encoding, logger),
            "XML", "ENG", logger,
        )
    if file_type is FileType.MESSAGE:
        logger.info("Determined file type: message")
        return _convert(
            input_path, output_path,
            lambda s: read_message_xml(s, logger),
            lambda doc, s: write_message_eng(doc, s, encoding, logger),
            "XML", "ENG", logger,
        )
    logger.error("Unknown input file type")
    return False