"""Mark KV v2 secrets as protected through custom metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from vaultswap import vault

_FLAG = {"protected": "true"}


@dataclass
class Result:
    """Outcome of protecting one path."""

    path: str
    dry_run: bool = False
    skipped: bool = False
    error: Exception | None = None


@dataclass
class Protector:
    """Sets the "protected" custom-metadata key on KV v2 paths."""

    client: vault.ApiClient
    dry_run: bool = False

    def _already_protected(self, meta_path: str, path: str) -> bool:
        with vault.wrap_errors(f"read metadata {path}"):
            existing = self.client.read(meta_path) or {}
        custom = existing.get("custom_metadata")
        return isinstance(custom, dict) and custom.get("protected") == "true"

    def protect_path(self, mount: str, path: str) -> Result:
        """Protect the secret at path unless it is already protected."""
        outcome = Result(path=path, dry_run=self.dry_run)
        meta_path = f"{mount}/metadata/{path}"
        with vault.capture_error(outcome):
            outcome.skipped = self._already_protected(meta_path, path)
            if not (outcome.skipped or self.dry_run):
                with vault.wrap_errors(f"write metadata {path}"):
                    self.client.write(meta_path, {"custom_metadata": dict(_FLAG)})
        return outcome

    def protect_paths(self, mount: str, paths: list[str]) -> list[Result]:
        """Protect every path."""
        return [self.protect_path(mount, p) for p in paths]


def _describe(r: Result) -> str:
    if r.error is not None:
        return f"  [error]     {r.path} — {r.error}"
    if r.skipped:
        return f"  [skipped]   {r.path} (already protected)"
    return f"  {'[dry-run]  ' if r.dry_run else '[protected]'} {r.path}"


def format_results(results: list[Result]) -> str:
    """Render protect results as text."""
    return vault.render_results(results, _describe, "no paths to protect")


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write protect results to file, stdout by default."""
    vault.write_output(format_results(results), file)