"""Re-write KV v2 secrets unchanged to create a new version."""

from __future__ import annotations

from dataclasses import dataclass

from vaultswap.vault import ApiClient, VaultError


@dataclass
class Result:
    """Outcome of touching one path."""

    path: str
    touched: bool = False
    dry_run: bool = False
    error: Exception | None = None


class Toucher:
    """Bumps a secret's version by writing its current data back."""

    def __init__(self, client: ApiClient, dry_run: bool = False, *, mount: str = "") -> None:
        self.client = client
        self.dry_run = dry_run
        self.mount = mount

    def touch_path(self, path: str) -> Result:
        """Read the secret at path and write the same data back."""
        try:
            data = self.client.kv_get(self.mount, path)
        except VaultError as exc:
            return Result(path=path, error=VaultError(f'read "{path}": {exc}', exc.status_code))
        if data is None:
            return Result(path=path, error=VaultError(f'path "{path}" returned no data'))

        if self.dry_run:
            return Result(path=path, touched=True, dry_run=True)

        try:
            self.client.kv_put(self.mount, path, data)
        except VaultError as exc:
            return Result(path=path, error=VaultError(f'write "{path}": {exc}', exc.status_code))
        return Result(path=path, touched=True)

    def touch_paths(self, paths: list[str]) -> list[Result]:
        """Touch every path."""
        return [self.touch_path(path) for path in paths]