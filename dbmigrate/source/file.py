"""Migration source reading files from a local directory (``file://`` URLs)."""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .driver import register
from .iofs import PartialDriver


class File(PartialDriver):
    """Reads migrations from the directory named by a ``file://`` URL."""

    def __init__(self, url: str = "", path: str = "") -> None:
        super().__init__()
        self.url = url
        self.path = path

    def open(self, url: str) -> "File":
        directory = parse_url(url)
        driver = File(url, directory)
        driver.init(Path(directory), ".")
        return driver


def parse_url(url: str) -> str:
    """Return the absolute directory a ``file://`` URL points at.

    Host and path are joined so that ``file://./foo`` and ``file://foo`` work;
    an empty location means the current directory.
    """
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    location = host + unquote(parts.path)
    if not location:
        return os.getcwd()
    if location.startswith(".") or not location.startswith("/"):
        return os.path.abspath(location)
    return location


register("file", File())