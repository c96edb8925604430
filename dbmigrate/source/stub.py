"""In-memory migration source for tests; bodies are the migration identifiers."""

from __future__ import annotations

import errno
import io
from dataclasses import dataclass, field
from typing import Any, TypeVar

from .driver import Driver, register
from .migration import Migration, Migrations

_T = TypeVar("_T")


@dataclass
class Config:
    """Configuration for :class:`Stub`; it has no options."""


@dataclass
class Stub(Driver):
    """A source whose migrations are set directly on ``migrations``."""

    url: str = ""
    instance: Any = None
    migrations: Migrations = field(default_factory=Migrations)
    config: Config = field(default_factory=Config)

    def open(self, url: str) -> "Stub":
        return Stub(url=url)

    def close(self) -> None:
        """Nothing to release."""

    def first(self) -> int:
        return self._found(self.migrations.first(), "first")

    def prev(self, version: int) -> int:
        return self._found(self.migrations.prev(version), f"prev for version {version}")

    def next(self, version: int) -> int:
        return self._found(self.migrations.next(version), f"next for version {version}")

    def read_up(self, version: int) -> tuple[io.BytesIO, str]:
        return self._read(self.migrations.up(version), version, "up")

    def read_down(self, version: int) -> tuple[io.BytesIO, str]:
        return self._read(self.migrations.down(version), version, "down")

    def _read(
        self, migration: Migration | None, version: int, word: str
    ) -> tuple[io.BytesIO, str]:
        found = self._found(migration, f"read {word} version {version}")
        return io.BytesIO(found.identifier.encode()), f"{version}.{word}.stub"

    def _found(self, value: _T | None, op: str) -> _T:
        if value is None:
            raise FileNotFoundError(errno.ENOENT, op, self.url)
        return value


def with_instance(instance: Any, config: Config) -> Stub:
    """Return a stub wrapping ``instance`` with an empty set of migrations."""
    return Stub(instance=instance, config=config)


register("stub", Stub())