from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class SheetSection:
    """A block of rows inside a sheet.

    ``title`` becomes a merged header row above the block. ``highlights`` are
    (row, column) positions relative to ``rows``, both zero based.
    """

    rows: Sequence[Sequence[Any]]
    title: Optional[str] = None
    highlights: FrozenSet[Tuple[int, int]] = frozenset()
    merge_first_column: bool = False


@dataclass(frozen=True)
class SheetDefinition:
    title: str
    columns: Sequence[str]
    sections: Sequence[SheetSection] = field(default_factory=tuple)
    protected: bool = True


@dataclass(frozen=True)
class AttendanceReport:
    overview: SheetDefinition
    daily_records: SheetDefinition
    salaries: SheetDefinition

    @property
    def sheets(self) -> Tuple[SheetDefinition, ...]:
        return (self.overview, self.daily_records, self.salaries)


class SpreadsheetWriter(Protocol):
    def render(self, sheets: Sequence[SheetDefinition]) -> bytes:
        raise NotImplementedError
