"""Section layout of the compound ``HH:MM:SS`` and ``MM:SS`` time fields."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Section:
    """Half-open run ``[start, end)`` of character positions for one unit."""

    name: str
    start: int
    end: int


@dataclass(frozen=True)
class FieldShape:
    name: str
    sections: Tuple[Section, ...]
    colons: Tuple[int, ...]

    @property
    def width(self) -> int:
        return self.sections[-1].end

    @property
    def last_position(self) -> int:
        """Rightmost cursor position reachable by typing."""
        return self.width - 1

    def section_of(self, pos: int) -> Section:
        # A cursor sitting on a section's right edge (or on the colon after
        # it) still belongs to that section.
        for section in self.sections:
            if pos <= section.end:
                return section
        return self.sections[-1]

    def section_named(self, name: str) -> Section:
        for section in self.sections:
            if section.name == name:
                return section
        raise KeyError(name)

    def range_of(self, section: Section) -> Tuple[int, int]:
        return section.start, section.end

    def _index(self, section: Section) -> int:
        return self.sections.index(section)

    def next_section_start(self, section: Section) -> Optional[int]:
        idx = self._index(section)
        if idx + 1 >= len(self.sections):
            return None
        return self.sections[idx + 1].start

    def prev_section_end(self, section: Section) -> Optional[int]:
        idx = self._index(section)
        if idx == 0:
            return None
        return self.sections[idx - 1].end

    def is_colon(self, pos: int) -> bool:
        return pos in self.colons

    def offset_by(self, extra: int) -> "FieldShape":
        """Layout with ``extra`` more digits in the leading section.

        Hours above 99 widen the first section; everything after it moves
        right by the same amount.
        """
        if extra <= 0:
            return self
        first, *rest = self.sections
        return replace(
            self,
            sections=(replace(first, end=first.end + extra),)
            + tuple(replace(s, start=s.start + extra, end=s.end + extra) for s in rest),
            colons=tuple(c + extra for c in self.colons),
        )


HMS = FieldShape(
    name="HMS",
    sections=(
        Section("hours", 0, 2),
        Section("minutes", 3, 5),
        Section("seconds", 6, 8),
    ),
    colons=(2, 5),
)

MS = FieldShape(
    name="MS",
    sections=(
        Section("minutes", 0, 2),
        Section("seconds", 3, 5),
    ),
    colons=(2,),
)


__all__ = ["FieldShape", "HMS", "MS", "Section"]
