"""Delete KV v2 secret paths whose data is empty."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from vaultswap import vault


@dataclass
class Result:
    """Outcome of pruning one path."""

    path: str
    pruned: bool = False
    dry_run: bool = False
    skipped: bool = False
    error: Exception | None = None


@dataclass
class Pruner:
    """Removes secrets that hold no keys."""

    client: vault.ApiClient
    dry_run: bool = False

    def prune_path(self, mount: str, path: str) -> Result:
        """Delete the secret at path if its data map is empty."""
        outcome = Result(path=path)
        with vault.capture_error(outcome):
            stored = self.client.read(f"{mount}/data/{path}") or {}
            data = stored.get("data")
            if not isinstance(data, dict) or data:
                outcome.skipped = True
                return outcome
            if not self.dry_run:
                self.client.delete(f"{mount}/metadata/{path}")
            outcome.pruned = True
            outcome.dry_run = self.dry_run
        return outcome

    def prune_paths(self, mount: str, paths: list[str]) -> list[Result]:
        """Prune every path."""
        return [self.prune_path(mount, p) for p in paths]


def _describe(r: Result) -> str:
    if r.error is not None:
        return f"[error]   {r.path}: {r.error}"
    if r.skipped:
        return f"[skipped] {r.path} (not empty)"
    if r.dry_run:
        return f"[dry-run] {r.path} would be pruned"
    return f"{'[pruned] ' if r.pruned else '[unknown]'} {r.path}"


def format_results(results: list[Result]) -> str:
    """Render prune results as text."""
    return vault.render_results(results, _describe, "no paths evaluated")


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write prune results to file, stdout by default."""
    vault.write_output(format_results(results), file)