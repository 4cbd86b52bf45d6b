"""Remove named keys from secrets."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError

LABEL_REMOVED = "removed"
LABEL_SKIPPED = "skipped"
LABEL_DRY_RUN = "dry-run"
LABEL_ERROR = "error"


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Result:
    """Outcome of trimming one key."""

    path: str
    key: str
    removed: bool = False
    dry_run: bool = False
    error: Exception | None = None


class Trimmer:
    """Deletes keys from the secret at a path."""

    def __init__(self, client: SecretStore, dry_run: bool = False) -> None:
        self.client = client
        self.dry_run = dry_run

    def trim_key(self, path: str, key: str) -> Result:
        """Remove key from the secret at path, if present."""
        result = Result(path=path, key=key, dry_run=self.dry_run)
        try:
            data = self.client.read_secret(path)
        except VaultError as exc:
            result.error = VaultError(f"read {path}: {exc}", exc.status_code)
            return result

        if key not in data:
            return result
        if self.dry_run:
            result.removed = True
            return result

        updated = {k: v for k, v in data.items() if k != key}
        try:
            self.client.write_secret(path, updated)
        except VaultError as exc:
            result.error = VaultError(f"write {path}: {exc}", exc.status_code)
            return result
        result.removed = True
        return result

    def trim_keys(self, path: str, keys: list[str]) -> list[Result]:
        """Remove each key from the secret at path."""
        return [self.trim_key(path, key) for key in keys]


def _line(result: Result) -> str:
    if result.error is not None:
        return f"  {LABEL_ERROR:<10} {result.path} [{result.key}]: {result.error}\n"
    if result.dry_run and result.removed:
        label = LABEL_DRY_RUN
    elif result.removed:
        label = LABEL_REMOVED
    else:
        label = LABEL_SKIPPED
    return f"  {label:<10} {result.path} [{result.key}]\n"


def format_results(results: list[Result]) -> str:
    """Render trim results as text."""
    if not results:
        return "no keys targeted\n"
    return "".join(_line(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write trim results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))