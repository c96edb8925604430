"""Migration source backed by a served file system such as :class:`Directory`.

The file system is any object whose ``open(name)`` takes a slash-separated
name and returns either a binary file or, for a directory, a handle with
``readdir()`` and ``close()``.
"""

from __future__ import annotations

import errno
import os
import posixpath
from typing import Any, BinaryIO

from .driver import Driver
from .iofs import PartialDriver as _TreePartialDriver


class _DirHandle:
    def __init__(self, path: str) -> None:
        self._entries = os.scandir(path)

    def readdir(self) -> list[os.DirEntry]:
        return sorted(self._entries, key=lambda entry: entry.name)

    def close(self) -> None:
        self._entries.close()


class Directory:
    """A file system rooted at a local directory; names cannot escape the root."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = os.fspath(root) or "."

    def open(self, name: str) -> BinaryIO | _DirHandle:
        """Open ``name``: a binary file, or a listing handle for a directory."""
        clean = posixpath.normpath("/" + name).lstrip("/")
        full = os.path.join(self.root, *clean.split("/")) if clean else self.root
        if os.path.isdir(full):
            return _DirHandle(full)
        return open(full, "rb")  # noqa: SIM115


class PartialDriver(_TreePartialDriver):
    """Everything a served-file-system source needs except ``open``."""

    def init(self, fs: Any, path: str) -> None:
        """Index the migration files found directly under ``path`` in ``fs``."""
        root = fs.open(path)
        try:
            readdir = getattr(root, "readdir", None)
            if readdir is None:
                raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
            entries = [(entry.name, entry.is_dir()) for entry in readdir()]
        finally:
            root.close()
        self._migrations = self._build_migrations(entries)
        self._fsys = fs
        self._path = path

    def close(self) -> None:
        """Let go of the file system; it is left open for its owner."""
        self._fsys = None

    def first(self) -> int:
        """Return the lowest version; raise FileNotFoundError if there is none."""
        return super().first()

    def prev(self, version: int) -> int:
        """Return the version before ``version``; raise FileNotFoundError if none."""
        return super().prev(version)

    def next(self, version: int) -> int:
        """Return the version after ``version``; raise FileNotFoundError if none."""
        return super().next(version)

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        """Open the up migration of ``version`` and return it with its identifier."""
        return super().read_up(version)

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        """Open the down migration of ``version`` and return it with its identifier."""
        return super().read_down(version)

    def _open_file(self, raw: str, full: str) -> BinaryIO:
        if self._fsys is None:
            raise ValueError("driver is closed")
        return self._fsys.open(full)


class HttpFSDriver(PartialDriver):
    """A served-file-system source created with :func:`new`."""

    def open(self, url: str) -> Driver:
        raise RuntimeError("Open() cannot be called on the httpfs passthrough driver")


def new(fs: Any, path: str) -> HttpFSDriver:
    """Return a driver reading migrations from ``path`` inside ``fs``."""
    driver = HttpFSDriver()
    driver.init(fs, path)
    return driver