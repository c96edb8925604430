"""Small helpers shared across the package."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


class MultiError(Exception):
    """An error that bundles several errors, skipping any that are ``None``."""

    def __init__(self, *args: BaseException | None) -> None:
        self.errors: list[BaseException] = [e for e in args if e is not None]
        super().__init__(*self.errors)

    def __str__(self) -> str:
        messages = (str(e) for e in self.errors)
        return " and ".join(m for m in messages if m)


def suint(n: int) -> int:
    """Return ``n`` as an unsigned value, refusing negative input."""
    if n < 0:
        raise ValueError(f"suint({n}) expects input >= 0")
    return n


def filter_custom_query(url: str) -> str:
    """Return ``url`` with every query parameter whose name starts with ``x-`` removed.

    The remaining parameters are re-encoded sorted by name.
    """
    parts = urlsplit(url)
    kept: dict[str, list[str]] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if not key.startswith("x-"):
            kept.setdefault(key, []).append(value)
    query = urlencode([(key, value) for key in sorted(kept) for value in kept[key]])
    return urlunsplit(parts._replace(query=query))