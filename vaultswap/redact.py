"""Replace secret values that match a pattern with a placeholder."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Result:
    """Outcome of redacting one path."""

    path: str
    keys: list[str] = field(default_factory=list)
    dry_run: bool = False
    error: Exception | None = None


class Redactor:
    """Overwrites string values matching a regular expression."""

    def __init__(
        self, client: SecretStore, pattern: str, placeholder: str, dry_run: bool = False
    ) -> None:
        try:
            self.pattern = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f'invalid pattern "{pattern}": {exc}') from exc
        self.client = client
        self.placeholder = placeholder
        self.dry_run = dry_run

    def redact_path(self, path: str) -> Result:
        """Replace matching values at path and write the secret back."""
        try:
            secret = self.client.read_secret(path)
        except VaultError as exc:
            return Result(path=path, error=exc)

        matched = [
            key
            for key, value in secret.items()
            if isinstance(value, str) and self.pattern.search(value)
        ]
        if not matched:
            return Result(path=path, dry_run=self.dry_run)

        if not self.dry_run:
            updated = dict(secret)
            for key in matched:
                updated[key] = self.placeholder
            try:
                self.client.write_secret(path, updated)
            except VaultError as exc:
                return Result(path=path, error=exc)

        return Result(path=path, keys=matched, dry_run=self.dry_run)

    def redact_paths(self, paths: list[str]) -> list[Result]:
        """Redact every path."""
        return [self.redact_path(path) for path in paths]


def _line(result: Result) -> str:
    if result.error is not None:
        return f"  ERROR   {result.path}: {result.error}\n"
    if not result.keys:
        return f"  SKIP    {result.path} (no matching values)\n"
    keys = ", ".join(sorted(result.keys))
    if result.dry_run:
        return f"  DRY-RUN {result.path} [{keys}]\n"
    return f"  REDACTED {result.path} [{keys}]\n"


def format_results(results: list[Result]) -> str:
    """Render redaction results as text."""
    if not results:
        return "no paths processed\n"
    return "".join(_line(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write redaction results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))