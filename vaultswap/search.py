"""Search secret keys and values for a substring."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError


class SecretReader(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...


@dataclass
class Result:
    """A single match, or a failure to read a path."""

    path: str
    key: str = ""
    value: str = ""
    error: Exception | None = None


class Searcher:
    """Finds keys or string values containing a query, ignoring case."""

    def __init__(self, client: SecretReader) -> None:
        self.client = client

    def search_path(self, path: str, query: str, keys_only: bool = False) -> list[Result]:
        """Return the key/value pairs at path that match query."""
        try:
            data = self.client.read_secret(path)
        except VaultError as exc:
            return [Result(path=path, error=exc)]

        needle = query.lower()
        results = []
        for key, raw in data.items():
            value = raw if isinstance(raw, str) else ""
            key_match = needle in key.lower()
            value_match = not keys_only and needle in value.lower()
            if key_match or value_match:
                results.append(Result(path=path, key=key, value=value))
        return results

    def search_paths(self, paths: list[str], query: str, keys_only: bool = False) -> list[Result]:
        """Search every path and collect all matches."""
        return [r for path in paths for r in self.search_path(path, query, keys_only)]


def _line(result: Result, mask_values: bool) -> str:
    if result.error is not None:
        return f"  [error] {result.path}: {result.error}\n"
    value = "***" if mask_values else result.value
    return f"  [match] {result.path}  {result.key}={value}\n"


def format_results(results: list[Result], mask_values: bool = False) -> str:
    """Render search results sorted by path then key."""
    if not results:
        return "no matches found\n"
    ordered = sorted(results, key=lambda r: (r.path, r.key))
    return "".join(_line(r, mask_values) for r in ordered)


def print_results(
    results: list[Result], mask_values: bool = False, file: IO[str] | None = None
) -> None:
    """Write search results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results, mask_values))