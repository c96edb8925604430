"""The source driver interface and the global driver registry."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import BinaryIO
from urllib.parse import urlsplit

_drivers: dict[str, "Driver"] = {}
_drivers_lock = threading.RLock()


class Driver(ABC):
    """A read-only source of migrations.

    Lookups that find nothing raise ``FileNotFoundError``.
    """

    @abstractmethod
    def open(self, url: str) -> "Driver":
        """Return a new driver configured from ``url``."""

    @abstractmethod
    def close(self) -> None:
        """Release whatever the driver holds."""

    @abstractmethod
    def first(self) -> int:
        """Return the first available version."""

    @abstractmethod
    def prev(self, version: int) -> int:
        """Return the version before ``version``."""

    @abstractmethod
    def next(self, version: int) -> int:
        """Return the version after ``version``."""

    @abstractmethod
    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        """Return an unread body and identifier for the up migration of ``version``."""

    @abstractmethod
    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        """Return an unread body and identifier for the down migration of ``version``."""


def open(url: str) -> Driver:  # noqa: A001
    """Open a source by dispatching on the scheme of ``url``."""
    scheme = urlsplit(url).scheme
    if not scheme:
        raise ValueError("source driver: invalid URL scheme")
    with _drivers_lock:
        driver = _drivers.get(scheme)
    if driver is None:
        raise ValueError(f"source driver: unknown driver '{scheme}' (forgotten import?)")
    return driver.open(url)


def register(name: str, driver: Driver) -> None:
    """Register ``driver`` under ``name``; each name may be registered once."""
    if driver is None:
        raise ValueError("Register driver is nil")
    with _drivers_lock:
        if name in _drivers:
            raise ValueError(f"Register called twice for driver {name}")
        _drivers[name] = driver


def list_drivers() -> list[str]:
    """Return the names of all registered drivers, sorted."""
    with _drivers_lock:
        return sorted(_drivers)