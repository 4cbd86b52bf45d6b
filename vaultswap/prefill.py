"""Write default values for keys missing from a secret."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Any, Protocol

from vaultswap import vault


class SecretStore(Protocol):
    """Anything that reads and writes KV secrets by path."""

    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Result:
    """Outcome of prefilling one key."""

    path: str
    key: str
    skipped: bool = False
    dry_run: bool = False
    error: Exception | None = None


@dataclass
class Prefiller:
    """Adds default values for keys that a secret does not yet have."""

    client: SecretStore
    dry_run: bool = False

    def prefill_path(self, path: str, defaults: dict[str, str]) -> list[Result]:
        """Ensure every key in defaults exists at path; existing keys are kept."""
        try:
            existing = self.client.read_secret(path)
        except vault.VaultError:
            existing = {}

        results = [
            Result(path=path, key=key, skipped=key in existing, dry_run=self.dry_run)
            for key in defaults
        ]
        missing = {r.key: defaults[r.key] for r in results if not r.skipped}
        if missing and not self.dry_run:
            try:
                self.client.write_secret(path, {**existing, **missing})
            except vault.VaultError as exc:
                failure = vault.VaultError(f"write failed: {exc}", exc.status_code)
                for r in results:
                    if not r.skipped:
                        r.error = failure
        return results


def _describe(r: Result) -> str:
    where = f"{r.path} [{r.key}]"
    if r.error is not None:
        return f"  ERROR    {where}: {r.error}"
    if r.skipped:
        return f"  SKIPPED  {where} (key already set)"
    if r.dry_run:
        return f"  DRY-RUN  {where} would be prefilled"
    return f"  PREFILLED {where}"


def format_results(results: list[Result]) -> str:
    """Render prefill results as text."""
    return vault.render_results(results, _describe, "no keys to prefill")


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write prefill results to file, stdout by default."""
    vault.write_output(format_results(results), file)