"""Roll KV v2 secrets back to an earlier version."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from vaultswap import vault


@dataclass
class Result:
    """Outcome of reverting one path."""

    path: str
    version: int
    dry_run: bool = False
    error: Exception | None = None
    skipped: bool = False


@dataclass
class Reverter:
    """Writes the data of a prior version back as the newest version."""

    client: vault.ApiClient
    dry_run: bool = False

    def revert_path(self, mount: str, path: str, version: int) -> Result:
        """Roll the secret at path back to version."""
        outcome = Result(path=path, version=version, dry_run=self.dry_run)
        with vault.capture_error(outcome):
            with vault.wrap_errors(f"read version {version}"):
                data = self.client.kv_get(mount, path, version)
            if data is None:
                raise vault.VaultError(f"version {version} not found or destroyed")
            if not self.dry_run:
                with vault.wrap_errors("write reverted data"):
                    self.client.kv_put(mount, path, data)
        return outcome

    def revert_paths(self, mount: str, targets: dict[str, int]) -> list[Result]:
        """Revert each path to its own target version."""
        return [self.revert_path(mount, p, v) for p, v in targets.items()]


def _describe(r: Result) -> str:
    if r.error is not None:
        return f"  [error]   {r.path} (v{r.version}): {r.error}"
    if r.dry_run:
        return f"  [dry-run] {r.path} → v{r.version}"
    if r.skipped:
        return f"  [skipped] {r.path}"
    return f"  [reverted] {r.path} → v{r.version}"


def format_results(results: list[Result]) -> str:
    """Render revert results as text."""
    return vault.render_results(results, _describe, "no paths to revert")


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write revert results to file, stdout by default."""
    vault.write_output(format_results(results), file)