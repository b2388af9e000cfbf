from __future__ import annotations

from collections.abc import Iterable, Iterator

from sshpick.common.models import TargetRecord


class TargetList:
    """Ordered targets plus the selection cursor.

    The cursor stays within ``[0, len)`` while the list is non-empty and is 0
    when it is empty.
    """

    def __init__(self, records: Iterable[TargetRecord] = ()) -> None:
        self._records: list[TargetRecord] = list(records)
        self.cursor = 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TargetRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> TargetRecord:
        return self._records[index]

    @property
    def records(self) -> list[TargetRecord]:
        return list(self._records)

    def move_cursor(self, direction: int) -> None:
        if not self._records:
            return
        step = -1 if direction < 0 else 1
        self.cursor = (self.cursor + step) % len(self._records)

    def set_cursor(self, index: int) -> None:
        self._check_index(index)
        self.cursor = index

    def selected(self) -> TargetRecord | None:
        if not self._records:
            return None
        return self._records[self.cursor]

    def append(self, record: TargetRecord) -> None:
        self._records.append(record)

    def replace_at(self, index: int, record: TargetRecord) -> None:
        self._check_index(index)
        self._records[index] = record

    def remove_at(self, index: int) -> TargetRecord:
        self._check_index(index)
        removed = self._records.pop(index)
        if not self._records:
            self.cursor = 0
        elif self.cursor >= len(self._records):
            self.cursor = len(self._records) - 1
        return removed

    def _check_index(self, index: int) -> None:
        # negative indexes are rejected, not wrapped
        if not 0 <= index < len(self._records):
            raise IndexError(f"target index {index} out of range for {len(self._records)} targets")
