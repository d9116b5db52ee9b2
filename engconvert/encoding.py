"""Text encodings used for the strings inside ENG files."""

from __future__ import annotations

import codecs
from dataclasses import dataclass

from engconvert.logger import Logger

# Game-specific Chinese encodings that this package has no tables for.
_UNAVAILABLE = frozenset({"c3-tc", "c3-sc"})


class UnsupportedEncodingError(ValueError):
    """Raised when an encoding name cannot be used for ENG files."""


@dataclass
class TextCodec:
    """Encodes and decodes ENG strings, logging characters it cannot map."""

    name: str
    python_name: str
    logger: Logger

    def decode(self, data: bytes) -> str:
        """Decode bytes to text; invalid bytes become U+FFFD and are logged."""
        data = bytes(data)
        pieces: list[str] = []
        pos = 0
        while True:
            try:
                pieces.append(data[pos:].decode(self.python_name))
                break
            except UnicodeDecodeError as exc:
                pieces.append(data[pos:pos + exc.start].decode(self.python_name))
                bad = data[pos + exc.start:pos + exc.end]
                self.logger.warn(f"Invalid character: {bad.hex()}")
                pieces.append("\ufffd")
                pos += exc.end
        return "".join(pieces)

    def encode(self, text: str) -> bytes:
        """Encode text to bytes; unsupported characters become '?' and are logged."""
        pieces: list[bytes] = []
        pos = 0
        while True:
            try:
                pieces.append(text[pos:].encode(self.python_name))
                break
            except UnicodeEncodeError as exc:
                pieces.append(text[pos:pos + exc.start].encode(self.python_name))
                for char in text[pos + exc.start:pos + exc.end]:
                    self.logger.warn(f"Unsupported character: {char}")
                    pieces.append(b"?")
                pos += exc.end
        return b"".join(pieces)


def get_codec(encoding: str, logger: Logger) -> TextCodec:
    """Return the codec for an encoding name such as 'Windows-1252' or 'CP949'."""
    if encoding in _UNAVAILABLE:
        raise UnsupportedEncodingError(f"Encoding not available: {encoding}")
    try:
        info = codecs.lookup(encoding)
    except LookupError as exc:
        raise UnsupportedEncodingError(f"Unknown encoding: {encoding}") from exc
    return TextCodec(name=encoding, python_name=info.name, logger=logger)