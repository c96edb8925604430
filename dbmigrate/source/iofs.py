"""Migration source backed by a read-only file-system tree.

The tree is any object with the path-like interface shared by
:class:`pathlib.Path`, :class:`zipfile.Path` and ``importlib.resources``
traversables: ``joinpath``, ``iterdir``, ``is_dir``, ``is_file``, ``name``
and ``open``. Sources of this kind cannot be opened from a URL.
"""

from __future__ import annotations

import errno
import os
import posixpath
from typing import Any, BinaryIO, Iterable

from .driver import Driver
from .migration import DuplicateMigrationError, Migrations, parse


class PartialDriver(Driver):
    """Everything a tree-backed source needs except ``open``."""

    def __init__(self) -> None:
        self._migrations = Migrations()
        self._fsys: Any = None
        self._root: Any = None
        self._path = ""

    def init(self, fsys: Any, path: str) -> None:
        """Index the migration files found directly under ``path`` in ``fsys``."""
        root = fsys
        for part in path.split("/"):
            if part and part != ".":
                root = root.joinpath(part)
        if not root.is_dir():
            if root.is_file():
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        entries = [(entry.name, entry.is_dir()) for entry in root.iterdir()]
        self._migrations = self._build_migrations(entries)
        self._fsys = fsys
        self._root = root
        self._path = path

    @staticmethod
    def _build_migrations(entries: Iterable[tuple[str, bool]]) -> Migrations:
        migrations = Migrations()
        for name, is_dir in sorted(entries):
            if is_dir:
                continue
            try:
                migration = parse(name)
            except ValueError:
                continue
            if not migrations.append(migration):
                raise DuplicateMigrationError(migration, name)
        return migrations

    def close(self) -> None:
        """Close the underlying tree if it can be closed."""
        closer = getattr(self._fsys, "close", None)
        if callable(closer):
            closer()

    def first(self) -> int:
        version = self._migrations.first()
        if version is None:
            raise self._not_found("first")
        return version

    def prev(self, version: int) -> int:
        found = self._migrations.prev(version)
        if found is None:
            raise self._not_found(f"prev for version {version}")
        return found

    def next(self, version: int) -> int:
        found = self._migrations.next(version)
        if found is None:
            raise self._not_found(f"next for version {version}")
        return found

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        migration = self._migrations.up(version)
        if migration is None:
            raise self._not_found(f"read up for version {version}")
        return self._open(migration.raw), migration.identifier

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        migration = self._migrations.down(version)
        if migration is None:
            raise self._not_found(f"read down for version {version}")
        return self._open(migration.raw), migration.identifier

    def _not_found(self, op: str) -> FileNotFoundError:
        return FileNotFoundError(errno.ENOENT, op, self._path)

    def _open(self, raw: str) -> BinaryIO:
        full = posixpath.join(self._path, raw)
        try:
            return self._open_file(raw, full)
        except OSError as exc:
            # Make sure the failing path is always part of the error.
            if exc.filename is None:
                raise OSError(exc.errno, f"open: {exc.strerror or exc}", full) from exc
            raise

    def _open_file(self, raw: str, full: str) -> BinaryIO:
        return self._root.joinpath(raw).open("rb")


class IoFSDriver(PartialDriver):
    """A tree-backed source created with :func:`new`."""

    def open(self, url: str) -> Driver:
        raise RuntimeError("Open() cannot be called on the iofs passthrough driver")


def new(fsys: Any, path: str) -> IoFSDriver:
    """Return a driver reading migrations from ``path`` inside ``fsys``."""
    driver = IoFSDriver()
    try:
        driver.init(fsys, path)
    except OSError as exc:
        raise OSError(
            exc.errno,
            f"failed to init driver with path {path}: {exc.strerror or exc}",
            exc.filename,
        ) from exc
    return driver