"""Reading and writing message files in XML form."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import BinaryIO, NoReturn

from engconvert.logger import Logger
from engconvert.messageentry import (
    Dialog,
    Image,
    MessageEntry,
    PositionedString,
    TextString,
)
from engconvert.messagefile import MessageFile
from engconvert.text_xml import XmlFormatError

_INDENT = "    "
# XML cannot hold this control character, so it is written as a tilde.
_CONTROL_CHAR = "\x0e"


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


def _bool_attribute(element: ET.Element, name: str) -> bool:
    value = element.get(name)
    return value is not None and value.strip().lower() in {"true", "1"}


def _text(element: ET.Element) -> str:
    return "".join(element.itertext())


def _read_image(element: ET.Element, logger: Logger) -> Image:
    return Image(
        graphic=_int_attribute(element, "graphic", logger),
        x=_int_attribute(element, "x", logger),
        y=_int_attribute(element, "y", logger),
    )


def _read_positioned(element: ET.Element, logger: Logger) -> PositionedString:
    x = _int_attribute(element, "x", logger)
    y = _int_attribute(element, "y", logger)
    return PositionedString(text=_text(element), x=x, y=y)


def _read_entry(element: ET.Element, logger: Logger) -> MessageEntry:
    entry_id = _int_attribute(element, "id", logger)
    entry_type = _int_attribute(element, "type", logger)
    subtype = _int_attribute(element, "subtype", logger)
    logger.set_context(f"Message {entry_id}")

    entry = MessageEntry(
        entry_id,
        type=entry_type,
        subtype=subtype,
        urgent=_bool_attribute(element, "urgent"),
    )

    children = list(element)
    if not children or children[0].tag != "dialog":
        _fail(logger, "Unable to find <dialog> element")
    dialog = children[0]
    entry.dialog = Dialog(
        x=_int_attribute(dialog, "x", logger),
        y=_int_attribute(dialog, "y", logger),
        width=_int_attribute(dialog, "width", logger),
        height=_int_attribute(dialog, "height", logger),
    )

    for child in children[1:]:
        tag = child.tag
        if tag == "image":
            entry.image = _read_image(child, logger)
        elif tag == "image2":
            entry.image2 = _read_image(child, logger)
        elif tag == "title":
            entry.title = _read_positioned(child, logger)
        elif tag == "subtitle":
            entry.subtitle = _read_positioned(child, logger)
        elif tag == "video":
            entry.video = _read_positioned(child, logger)
        elif tag == "content":
            entry.content = TextString(text=_text(child).replace("~", _CONTROL_CHAR))
        else:
            logger.error(f"Unexpected tag {tag} in message {entry_id}")
    return entry


def read_message_xml(stream: BinaryIO, logger: Logger) -> MessageFile:
    """Parse a <messages> document; problems are logged and raised as XmlFormatError."""
    try:
        root = ET.parse(stream).getroot()
    except ET.ParseError as exc:
        _fail(logger, f"Invalid XML: {exc}")
    if root.tag != "messages":
        _fail(logger, "Unable to find root <messages> element")

    message_file = MessageFile()
    if "name" in root.attrib:
        message_file.name = root.attrib["name"]
    message_file.total_entries = _int_attribute(root, "entries", logger)

    for child in root:
        if child.tag != "message":
            _fail(logger, f"Unexpected tag <{child.tag}>, expected <message>")
        message_file.entries.append(_read_entry(child, logger))
    logger.set_context("")
    return message_file


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


def _element(indent: str, tag: str, attrs: str, text: str) -> str:
    opening = f"<{tag} {attrs}" if attrs else f"<{tag}"
    if text:
        return f"{indent}{opening}>{_escape_text(text)}</{tag}>"
    return f"{indent}{opening}/>"


def _entry_lines(entry: MessageEntry) -> list[str]:
    inner = _INDENT * 2
    attrs = f'id="{entry.id}" type="{entry.type}" subtype="{entry.subtype}"'
    if entry.urgent:
        attrs += ' urgent="true"'
    lines = [f"{_INDENT}<message {attrs}>"]

    d = entry.dialog
    lines.append(
        f'{inner}<dialog x="{d.x}" y="{d.y}" width="{d.width}" height="{d.height}"/>'
    )
    for tag, image in (("image", entry.image), ("image2", entry.image2)):
        if not image.is_empty():
            lines.append(
                f'{inner}<{tag} graphic="{image.graphic}" x="{image.x}" y="{image.y}"/>'
            )
    for tag, string in (
        ("title", entry.title),
        ("subtitle", entry.subtitle),
        ("video", entry.video),
    ):
        if not string.is_empty():
            lines.append(_element(inner, tag, f'x="{string.x}" y="{string.y}"', string.text))
    if entry.content.text:
        content = entry.content.text.replace(_CONTROL_CHAR, "~")
        lines.append(_element(inner, "content", "", content))
    lines.append(f"{_INDENT}</message>")
    return lines


def write_message_xml(message_file: MessageFile, stream: BinaryIO) -> None:
    """Write a message file as an indented UTF-8 <messages> document."""
    attrs = f'name="{_escape_attr(message_file.name)}" entries="{message_file.total_entries}"'
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if message_file.entries:
        lines.append(f"<messages {attrs}>")
        for entry in message_file.entries:
            lines.extend(_entry_lines(entry))
        lines.append("</messages>")
    else:
        lines.append(f"<messages {attrs}/>")
    stream.write(("\n".join(lines) + "\n").encode("utf-8"))