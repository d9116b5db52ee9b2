"""In-memory representation of a message file."""

from __future__ import annotations

from dataclasses import dataclass, field

from engconvert.messageentry import MessageEntry


@dataclass
class MessageFile:
    """A named list of message entries and the size of its index."""

    name: str = ""
    total_entries: int = 0
    entries: list[MessageEntry] = field(default_factory=list)

    def max_entry_id(self) -> int:
        """ID of the last entry, or 0 when there are no entries."""
        if not self.entries:
            return 0
        return self.entries[-1].id