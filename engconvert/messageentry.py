"""Data classes for one entry of a message file."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Image:
    """An image reference with its position."""

    graphic: int = 0
    x: int = 0
    y: int = 0

    def is_empty(self) -> bool:
        """An image is empty when it has no graphic."""
        return self.graphic == 0


@dataclass
class Dialog:
    """Position and size of the message dialog."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class TextString:
    """A string and its offset in the data part of the file."""

    offset: int = 0
    text: str = ""

    def is_empty(self) -> bool:
        """A string is empty when it has neither offset nor text."""
        return self.offset == 0 and not self.text


@dataclass
class PositionedString(TextString):
    """A string shown at a position on screen."""

    x: int = 0
    y: int = 0


@dataclass
class MessageEntry:
    """One message with its layout, images and texts."""

    id: int
    type: int = 0
    subtype: int = 0
    image: Image = field(default_factory=Image)
    image2: Image = field(default_factory=Image)
    dialog: Dialog = field(default_factory=Dialog)
    urgent: bool = False
    title: PositionedString = field(default_factory=PositionedString)
    subtitle: PositionedString = field(default_factory=PositionedString)
    video: PositionedString = field(default_factory=PositionedString)
    content: TextString = field(default_factory=TextString)

    def is_empty(self) -> bool:
        """True when images, dialog and all strings are unset."""
        if not self.image.is_empty() or not self.image2.is_empty():
            return False
        d = self.dialog
        if d.x or d.y or d.width or d.height:
            return False
        return all(
            s.is_empty() for s in (self.title, self.subtitle, self.video, self.content)
        )