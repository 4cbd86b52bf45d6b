"""Remove keys whose values match disallowed placeholders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from vaultswap.vault import VaultError


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Result:
    """Outcome for one key (or one failed path)."""

    path: str
    key: str = ""
    removed: bool = False
    dry_run: bool = False
    error: Exception | None = None


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


class Sanitizer:
    """Strips keys whose trimmed values equal a disallowed pattern, ignoring case."""

    def __init__(self, client: SecretStore, patterns: list[str], dry_run: bool = False) -> None:
        self.client = client
        self.patterns = {p.strip().lower() for p in patterns}
        self.dry_run = dry_run

    def sanitize_path(self, path: str) -> list[Result]:
        """Remove matching keys at path; return one result per matched key."""
        try:
            data = self.client.read_secret(path)
        except VaultError as exc:
            return [Result(path=path, error=VaultError(f"read: {exc}", exc.status_code))]

        matched = [
            key for key, value in data.items() if _as_text(value).strip().lower() in self.patterns
        ]
        results = [
            Result(path=path, key=key, removed=not self.dry_run, dry_run=self.dry_run)
            for key in matched
        ]

        if not self.dry_run and matched:
            updated = {k: v for k, v in data.items() if k not in matched}
            try:
                self.client.write_secret(path, updated)
            except VaultError as exc:
                return [Result(path=path, error=VaultError(f"write: {exc}", exc.status_code))]
        return results

    def sanitize_paths(self, paths: list[str]) -> list[Result]:
        """Sanitize every path and collect all results."""
        return [result for path in paths for result in self.sanitize_path(path)]