import os

import pytest

from dbmigrate.source import driver as source_driver
from dbmigrate.source.file import File, parse_url
from dbmigrate.source.migration import DuplicateMigrationError

# version, previous, next, up file, down file ("-" means none)
TABLE = """
0 - - - -
1 - 3 up down
2 - - - -
3 1 4 up -
4 3 5 up down
5 4 7 - down
6 - - - -
7 5 - up down
8 - - - -
9 - - - -
"""
ROWS = [line.split() for line in TABLE.strip().splitlines()]


def populate(directory):
    for version, _, _, *directions in ROWS:
        for direction in directions:
            if direction != "-":
                (directory / f"{version}_foobar.{direction}.sql").write_text(f"{version} {direction}")


def check(d):
    assert d.first() == 1
    for version, before, after, up, down in ROWS:
        number = int(version)
        for step, want in ((d.prev, before), (d.next, after)):
            if want == "-":
                with pytest.raises(FileNotFoundError):
                    step(number)
            else:
                assert step(number) == int(want)
        for direction, mark in (("up", up), ("down", down)):
            reader = getattr(d, f"read_{direction}")
            if mark == "-":
                with pytest.raises(FileNotFoundError):
                    reader(number)
            else:
                handle, identifier = reader(number)
                with handle:
                    assert handle.read() == f"{version} {direction}".encode()
                assert identifier == "foobar"


def test_driver(tmp_path):
    populate(tmp_path)
    check(File().open(f"file://{tmp_path}"))


def test_open_absolute_path(tmp_path):
    (tmp_path / "1_foobar.up.sql").write_text("")
    (tmp_path / "1_foobar.down.sql").write_text("")
    assert os.path.isabs(tmp_path)
    d = File().open(f"file://{tmp_path}")
    assert d.path == str(tmp_path)
    assert d.url == f"file://{tmp_path}"
    assert d.first() == 1


@pytest.mark.parametrize("url", ["file://foo", "file://./foo"])
def test_open_with_relative_path(tmp_path, monkeypatch, url):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "foo").mkdir()
    (tmp_path / "foo" / "1_foobar.up.sql").write_text("")
    d = File().open(url)
    assert d.first() == 1
    assert d.path == str(tmp_path / "foo")


def test_open_defaults_to_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    d = File().open("file://")
    assert d.path == os.getcwd()


def test_open_with_duplicate_version(tmp_path):
    (tmp_path / "1_foo.up.sql").write_text("")
    (tmp_path / "1_bar.up.sql").write_text("")
    with pytest.raises(DuplicateMigrationError):
        File().open(f"file://{tmp_path}")


def test_open_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        File().open(f"file://{tmp_path}/missing")


def test_close_on_empty_directory(tmp_path):
    d = File().open(f"file://{tmp_path}")
    with pytest.raises(FileNotFoundError):
        d.first()
    assert d.close() is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("file:///var/migrations", "/var/migrations"),
        ("file:///var/my%20migrations", "/var/my migrations"),
    ],
)
def test_parse_url(url, expected):
    assert parse_url(url) == expected


def test_registered_under_file_scheme(tmp_path):
    populate(tmp_path)
    d = source_driver.open(f"file://{tmp_path}")
    assert isinstance(d, File)
    assert d.next(1) == 3
    assert "file" in source_driver.list_drivers()