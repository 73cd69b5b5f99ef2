"""Per-line deduplication of inferred statements.

A chain of N links is seen as N nested call nodes that all start on the same
line, each rendering a partial statement. `LongestPerLine` keeps the longest
rendering per line as a proxy for the most complete one. This is a heuristic:
a longer string is not guaranteed to be the more correct inference. Short
mutation chains such as `db.Model(&User{}).Delete()` lose to their
`Model(...)` sub-call, because `SELECT * FROM users` outgrows
`DELETE FROM users`.

Length is measured in UTF-8 bytes, so non-ASCII fragments weigh what they
weigh in the encoded source.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .ordering import sort_ints


def _size(sql: str) -> int:
    return len(sql.encode("utf-8"))


def format_line(path: str, line: int, sql: str) -> str:
    return f"{path}:{line}: {sql}"


@dataclass(slots=True)
class LongestPerLine:
    """Keep the strictly longest candidate per source line; ties keep the first."""

    entries: dict[int, str] = field(default_factory=dict)

    def offer(self, line: int, sql: str) -> bool:
        """Record `sql` for `line` if it beats the current entry.

        Returns:
            True when the candidate was kept
        """
        current = self.entries.get(line)
        if current is not None and _size(sql) <= _size(current):
            return False
        self.entries[line] = sql
        return True

    def __len__(self) -> int:
        return len(self.entries)

    def ordered(self, ascending: bool = True) -> Iterator[tuple[int, str]]:  # noqa: FBT001, FBT002
        """Yield `(line, sql)` pairs sorted by line number."""
        for line in sort_ints(self.entries, ascending):
            yield line, self.entries[line]

    def report(self, path: str, ascending: bool = True) -> list[str]:  # noqa: FBT001, FBT002
        """Formatted `<path>:<line>: <SQL>` strings in line order."""
        return [format_line(path, line, sql) for line, sql in self.ordered(ascending)]
