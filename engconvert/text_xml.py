"""Reading and writing text files in XML form."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import BinaryIO, NoReturn

from engconvert.logger import Logger
from engconvert.textfile import TextFile
from engconvert.textgroup import TextGroup

_INDENT = "    "


class XmlFormatError(ValueError):
    """Raised when an XML document does not have the expected structure."""


def _fail(logger: Logger, message: str) -> NoReturn:
    logger.error(message)
    raise XmlFormatError(message)


def _int_attribute(element: ET.Element, name: str, logger: Logger) -> int:
    value = element.get(name)
    if value is None:
        _fail(logger, f"Missing attribute '{name}' on <{element.tag}>")
    try:
        return int(value.strip())
    except ValueError:
        _fail(logger, f"Attribute '{name}' on <{element.tag}> is not an integer: {value}")


def _read_group(element: ET.Element, logger: Logger) -> TextGroup:
    group_id = _int_attribute(element, "id", logger)
    group = TextGroup(group_id)
    for child in element:
        if child.tag != "string":
            _fail(logger, f"Unexpected tag <{child.tag}> in group {group_id}")
        text_id = _int_attribute(child, "id", logger)
        if text_id != len(group):
            _fail(logger, f"Strings in group {group_id} are not ordered properly")
        group.add("".join(child.itertext()))
    return group


def read_text_xml(stream: BinaryIO, logger: Logger) -> TextFile:
    """Parse a <strings> document; problems are logged and raised as XmlFormatError."""
    try:
        root = ET.parse(stream).getroot()
    except ET.ParseError as exc:
        _fail(logger, f"Invalid XML: {exc}")
    if root.tag != "strings":
        _fail(logger, "Unable to find root <strings> element")

    text_file = TextFile()
    if "name" in root.attrib:
        text_file.name = root.attrib["name"]
    if "indexWithCounts" in root.attrib:
        text_file.index_with_counts = root.attrib["indexWithCounts"] != "false"

    for child in root:
        if child.tag != "group":
            _fail(logger, f"Unexpected tag <{child.tag}>, expected <group>")
        text_file.groups.append(_read_group(child, logger))
    return text_file


def _escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(value: str) -> str:
    return (
        _escape_text(value)
        .replace('"', "&quot;")
        .replace("\n", "&#10;")
        .replace("\r", "&#13;")
        .replace("\t", "&#9;")
    )


def _group_lines(group: TextGroup) -> list[str]:
    if not group.strings:
        return [f'{_INDENT}<group id="{group.id}"/>']
    lines = [f'{_INDENT}<group id="{group.id}">']
    for index, text in enumerate(group.strings):
        prefix = f'{_INDENT * 2}<string id="{index}"'
        if text:
            lines.append(f"{prefix}>{_escape_text(text)}</string>")
        else:
            lines.append(f"{prefix}/>")
    lines.append(f"{_INDENT}</group>")
    return lines


def write_text_xml(text_file: TextFile, stream: BinaryIO) -> None:
    """Write a text file as an indented UTF-8 <strings> document."""
    counts = "true" if text_file.index_with_counts else "false"
    root_open = f'<strings name="{_escape_attr(text_file.name)}" indexWithCounts="{counts}"'
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if text_file.groups:
        lines.append(root_open + ">")
        for group in text_file.groups:
            lines.extend(_group_lines(group))
        lines.append("</strings>")
    else:
        lines.append(root_open + "/>")
    stream.write(("\n".join(lines) + "\n").encode("utf-8"))