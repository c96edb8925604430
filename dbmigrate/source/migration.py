"""Migration records, their ordered index and file-name parsing."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from enum import Enum

_MAX_UINT64 = 2**64 - 1


class Direction(str, Enum):
    """Direction of a migration."""

    DOWN = "down"
    UP = "up"


@dataclass(frozen=True)
class Migration:
    """A single migration file found in a source."""

    version: int
    identifier: str = ""
    direction: Direction = Direction.UP
    raw: str = ""


class Migrations:
    """Migrations kept in version order, at most one per version and direction."""

    def __init__(self) -> None:
        self._index: list[int] = []
        self._migrations: dict[int, dict[Direction, Migration]] = {}

    def append(self, m: Migration | None) -> bool:
        """Add a migration; return False if it is ``None`` or a duplicate."""
        if m is None:
            return False
        by_direction = self._migrations.setdefault(m.version, {})
        if m.direction in by_direction:
            return False
        by_direction[m.direction] = m
        self._index = sorted(self._migrations)
        return True

    def first(self) -> int | None:
        """Return the lowest version, or ``None`` if there is none."""
        return self._index[0] if self._index else None

    def prev(self, version: int) -> int | None:
        """Return the version before ``version``, or ``None``."""
        pos = self._find_pos(version)
        if pos >= 1:
            return self._index[pos - 1]
        return None

    def next(self, version: int) -> int | None:
        """Return the version after ``version``, or ``None``."""
        pos = self._find_pos(version)
        if pos >= 0 and pos + 1 < len(self._index):
            return self._index[pos + 1]
        return None

    def up(self, version: int) -> Migration | None:
        """Return the up migration for ``version``, or ``None``."""
        return self._migrations.get(version, {}).get(Direction.UP)

    def down(self, version: int) -> Migration | None:
        """Return the down migration for ``version``, or ``None``."""
        return self._migrations.get(version, {}).get(Direction.DOWN)

    def _find_pos(self, version: int) -> int:
        pos = bisect.bisect_left(self._index, version)
        if pos < len(self._index) and self._index[pos] == version:
            return pos
        return -1


class ParseError(ValueError):
    """Raised when a name does not look like a migration file."""

    def __init__(self, message: str = "no match") -> None:
        super().__init__(message)


REGEX = re.compile(
    rf"^([0-9]+)_(.*)\.({Direction.DOWN.value}|{Direction.UP.value})\.(.*)\Z"
)


def parse(raw: str) -> Migration:
    """Parse a name of the form ``123_name.up.ext`` or ``123_name.down.ext``."""
    match = REGEX.match(raw)
    if match is None:
        raise ParseError()
    version = int(match.group(1))
    if version > _MAX_UINT64:
        raise ValueError(f"version {match.group(1)} is out of range")
    return Migration(
        version=version,
        identifier=match.group(2),
        direction=Direction(match.group(3)),
        raw=raw,
    )


class DuplicateMigrationError(Exception):
    """Raised when two files claim the same version and direction."""

    def __init__(self, migration: Migration, name: str) -> None:
        self.migration = migration
        self.name = name
        super().__init__(f"duplicate migration file: {name}")