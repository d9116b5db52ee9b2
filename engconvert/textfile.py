"""In-memory representation of a text (strings) file."""

from __future__ import annotations

from dataclasses import dataclass, field

from engconvert.textgroup import TextGroup


@dataclass
class TextFile:
    """A named collection of string groups."""

    name: str = ""
    groups: list[TextGroup] = field(default_factory=list)
    index_with_counts: bool = False

    def max_group_id(self) -> int:
        """ID of the last group, or 0 when there are no groups."""
        if not self.groups:
            return 0
        return self.groups[-1].id

    def total_strings(self) -> int:
        """Total number of strings over all groups."""
        return sum(len(group) for group in self.groups)

    def total_words(self) -> int:
        """Total number of words over all strings of all groups."""
        return sum(group.total_words() for group in self.groups)