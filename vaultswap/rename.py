"""Move secrets from one path to another."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...

    def delete_secret(self, path: str) -> None: ...


@dataclass
class Result:
    """Outcome of renaming one path."""

    src: str
    dst: str
    dry_run: bool = False
    error: Exception | None = None


class Renamer:
    """Reads a secret, writes it to a new path and deletes the old one."""

    def __init__(self, client: SecretStore, dry_run: bool = False) -> None:
        self.client = client
        self.dry_run = dry_run

    def _rename(self, src: str, dst: str) -> None:
        try:
            data = self.client.read_secret(src)
        except VaultError as exc:
            raise VaultError(f"read {src}: {exc}", exc.status_code) from exc
        if self.dry_run:
            return
        try:
            self.client.write_secret(dst, data)
        except VaultError as exc:
            raise VaultError(f"write {dst}: {exc}", exc.status_code) from exc
        try:
            self.client.delete_secret(src)
        except VaultError as exc:
            raise VaultError(f"delete {src}: {exc}", exc.status_code) from exc

    def rename_path(self, src: str, dst: str) -> Result:
        """Move the secret at src to dst."""
        result = Result(src=src, dst=dst, dry_run=self.dry_run)
        try:
            self._rename(src, dst)
        except VaultError as exc:
            result.error = exc
        return result

    def rename_paths(self, pairs: list[tuple[str, str]]) -> list[Result]:
        """Rename every (src, dst) pair."""
        return [self.rename_path(src, dst) for src, dst in pairs]


def _line(result: Result) -> str:
    if result.error is not None:
        return f"[error]  {result.src} → {result.dst}: {result.error}\n"
    if result.dry_run:
        return f"[dry-run] {result.src} → {result.dst}\n"
    return f"[renamed] {result.src} → {result.dst}\n"


def format_results(results: list[Result]) -> str:
    """Render rename results as text."""
    if not results:
        return "no paths to rename\n"
    return "".join(_line(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write rename results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))