"""Migration source reading embedded assets through a lookup function."""

from __future__ import annotations

import errno
import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable

from .driver import Driver, register
from .migration import Migration, Migrations, parse

AssetFunc = Callable[[str], bytes]


@dataclass
class AssetSource:
    """Asset names and the function that returns an asset's bytes by name."""

    names: list[str] = field(default_factory=list)
    asset_func: AssetFunc | None = None


def resource(names: list[str], asset_func: AssetFunc) -> AssetSource:
    """Bundle asset names and their lookup function into an :class:`AssetSource`."""
    return AssetSource(names=list(names), asset_func=asset_func)


class Bindata(Driver):
    """Reads migrations from an :class:`AssetSource`; create it with :func:`with_instance`."""

    def __init__(self, asset_source: AssetSource | None = None) -> None:
        self.path = "<go-bindata>"
        self.asset_source = asset_source
        self.migrations = Migrations()

    def open(self, url: str) -> Driver:
        raise RuntimeError("bindata sources cannot be opened from a URL; use with_instance")

    def close(self) -> None:
        """Nothing to release."""

    def first(self) -> int:
        version = self.migrations.first()
        if version is None:
            raise self._not_found("first")
        return version

    def prev(self, version: int) -> int:
        found = self.migrations.prev(version)
        if found is None:
            raise self._not_found(f"prev for version {version}")
        return found

    def next(self, version: int) -> int:
        found = self.migrations.next(version)
        if found is None:
            raise self._not_found(f"next for version {version}")
        return found

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        return self._read(self.migrations.up(version), version)

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        return self._read(self.migrations.down(version), version)

    def _read(self, migration: Migration | None, version: int) -> tuple[BinaryIO, str]:
        if migration is None:
            raise self._not_found(f"read version {version}")
        body = self.asset_source.asset_func(migration.raw)
        return io.BytesIO(body), migration.identifier

    def _not_found(self, op: str) -> FileNotFoundError:
        return FileNotFoundError(errno.ENOENT, op, self.path)


def with_instance(instance: Any) -> Bindata:
    """Return a driver for the migrations named in ``instance``, an :class:`AssetSource`."""
    if not isinstance(instance, AssetSource):
        raise TypeError("expects AssetSource")
    driver = Bindata(instance)
    for name in instance.names:
        try:
            migration = parse(name)
        except ValueError:
            continue
        if not driver.migrations.append(migration):
            raise ValueError(f"unable to parse file {name}")
    return driver


register("go-bindata", Bindata())