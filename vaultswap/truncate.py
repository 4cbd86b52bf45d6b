"""Destroy old KV v2 secret versions beyond a retention limit."""

from __future__ import annotations

import re
from dataclasses import dataclass

from vaultswap.vault import ApiClient, VaultError

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Result:
    """Outcome of truncating versions at one path."""

    path: str
    kept: int = 0
    dropped: int = 0
    dry_run: bool = False
    error: Exception | None = None


def _parse_version(key: str) -> int | None:
    match = _LEADING_INT.match(key)
    return int(match.group(1)) if match else None


class Truncator:
    """Keeps only the newest versions of each secret."""

    def __init__(self, client: ApiClient, mount: str, keep: int, dry_run: bool = False) -> None:
        self.client = client
        self.mount = mount
        self.keep = keep
        self.dry_run = dry_run

    def truncate_path(self, path: str) -> Result:
        """Destroy every version of path beyond the keep limit, oldest first."""
        try:
            metadata = self.client.read(f"{self.mount}/metadata/{path}")
        except VaultError as exc:
            return Result(path=path, error=VaultError(f"read metadata: {exc}", exc.status_code))
        if metadata is None:
            return Result(path=path, error=VaultError("no metadata found"))

        versions = metadata.get("versions")
        if not isinstance(versions, dict):
            return Result(path=path, error=VaultError("unexpected versions format"))

        numbers = sorted(
            n for n in (_parse_version(key) for key in versions) if n is not None
        )
        if len(numbers) <= self.keep:
            return Result(path=path, kept=len(numbers), dry_run=self.dry_run)

        drop_count = len(numbers) - self.keep
        to_drop = numbers[:drop_count]

        if not self.dry_run:
            try:
                self.client.write(f"{self.mount}/destroy/{path}", {"versions": to_drop})
            except VaultError as exc:
                return Result(
                    path=path, error=VaultError(f"destroy versions: {exc}", exc.status_code)
                )

        return Result(path=path, kept=self.keep, dropped=drop_count, dry_run=self.dry_run)

    def truncate_paths(self, paths: list[str]) -> list[Result]:
        """Truncate every path."""
        return [self.truncate_path(path) for path in paths]