"""Attach tags to secrets as reserved "_tags.<key>" entries."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError

TAG_PREFIX = "_tags."


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Result:
    """Outcome of tagging one path."""

    path: str
    tags: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    skipped: bool = False
    error: Exception | None = None


class Tagger:
    """Merges tags into existing secret data."""

    def __init__(self, client: SecretStore, dry_run: bool = False) -> None:
        self.client = client
        self.dry_run = dry_run

    def tag_path(self, path: str, tags: dict[str, str]) -> Result:
        """Store each tag under "_tags.<key>" in the secret at path."""
        try:
            existing = self.client.read_secret(path)
        except VaultError as exc:
            return Result(path=path, tags=tags, error=VaultError(f"read: {exc}", exc.status_code))

        merged = dict(existing)
        merged.update({TAG_PREFIX + key: value for key, value in tags.items()})

        if self.dry_run:
            return Result(path=path, tags=tags, dry_run=True)

        try:
            self.client.write_secret(path, merged)
        except VaultError as exc:
            return Result(path=path, tags=tags, error=VaultError(f"write: {exc}", exc.status_code))
        return Result(path=path, tags=tags)

    def tag_paths(self, paths: list[str], tags: dict[str, str]) -> list[Result]:
        """Tag every path, ignoring surrounding whitespace in path names."""
        return [self.tag_path(path.strip(), tags) for path in paths]


def _line(result: Result) -> str:
    if result.error is not None:
        return f"[error]   {result.path} — {result.error}\n"
    if result.skipped:
        return f"[skipped] {result.path}\n"
    label = "[dry-run]" if result.dry_run else "[tagged]"
    pairs = ", ".join(f"{key}={value}" for key, value in result.tags.items())
    return f"{label} {result.path} — {pairs}\n"


def format_results(results: list[Result]) -> str:
    """Render tag results as text."""
    if not results:
        return "no paths processed\n"
    return "".join(_line(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write tag results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))