"""Pin KV v2 secrets to a specific version via their metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from vaultswap import vault


@dataclass
class Result:
    """Outcome of pinning one path."""

    path: str
    version: int
    dry_run: bool = False
    error: Exception | None = None


@dataclass
class Pinner:
    """Sets "current_version" in a secret's metadata."""

    client: vault.ApiClient
    dry_run: bool = False

    def _check_and_pin(self, meta_path: str, path: str, version: int) -> None:
        with vault.wrap_errors("read metadata"):
            metadata = self.client.read(meta_path)
        if metadata is None:
            raise vault.VaultError(f"no metadata found at {path}")
        versions = metadata.get("versions")
        if not isinstance(versions, dict):
            raise vault.VaultError(f"unexpected metadata format at {path}")
        if str(version) not in versions:
            raise vault.VaultError(f"version {version} does not exist at {path}")
        if not self.dry_run:
            with vault.wrap_errors("write metadata"):
                self.client.write(meta_path, {"current_version": version})

    def pin_path(self, mount: str, path: str, version: int) -> Result:
        """Pin the secret at path to version."""
        outcome = Result(path=path, version=version, dry_run=self.dry_run)
        with vault.capture_error(outcome):
            self._check_and_pin(f"{mount}/metadata/{path}", path, version)
        return outcome

    def pin_paths(self, mount: str, paths: list[str], version: int) -> list[Result]:
        """Pin every path to version."""
        return [self.pin_path(mount, p, version) for p in paths]


def _describe(r: Result) -> str:
    if r.error is not None:
        return f"  ERROR   {r.path}: {r.error}"
    return f"  {'DRY-RUN' if r.dry_run else 'PINNED '} {r.path} → version {r.version}"


def format_results(results: list[Result]) -> str:
    """Render pin results as text."""
    return vault.render_results(results, _describe, "no paths to pin")


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write pin results to file, stdout by default."""
    vault.write_output(format_results(results), file)