"""Write a timestamp key into existing secrets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from vaultswap import vault
from vaultswap.prefill import SecretStore

DEFAULT_KEY = "_stamped_at"


@dataclass
class Result:
    """Outcome of stamping one path."""

    path: str
    stamped: bool = False
    dry_run: bool = False
    error: Exception | None = None


@dataclass
class Stamper:
    """Injects an RFC 3339 UTC timestamp under a configurable key."""

    client: SecretStore
    key: str = ""
    dry_run: bool = False

    def __post_init__(self) -> None:
        self.key = self.key or DEFAULT_KEY

    def stamp_path(self, path: str) -> Result:
        """Read the secret at path, add the timestamp key and write it back."""
        outcome = Result(path=path)
        with vault.capture_error(outcome):
            with vault.wrap_errors("read"):
                existing = self.client.read_secret(path)
            moment = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
            if not self.dry_run:
                with vault.wrap_errors("write"):
                    self.client.write_secret(path, {**existing, self.key: moment})
            outcome.stamped = True
            outcome.dry_run = self.dry_run
        return outcome

    def stamp_paths(self, paths: list[str]) -> list[Result]:
        """Stamp every path."""
        return [self.stamp_path(p) for p in paths]