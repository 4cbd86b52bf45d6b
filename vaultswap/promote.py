"""Copy secrets from one Vault namespace to another."""

from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass
from typing import IO

from vaultswap.vault import Client, VaultError


@dataclass
class Result:
    """Outcome of promoting one path."""

    path: str
    src: str = ""
    dst: str = ""
    skipped: bool = False
    dry_run: bool = False
    error: Exception | None = None


class Promoter:
    """Reads secrets from a source client and writes them to a destination."""

    def __init__(self, src: Client, dst: Client, dry_run: bool = False) -> None:
        self.src = src
        self.dst = dst
        self.dry_run = dry_run

    def _promote_path(self, path: str) -> Result:
        result = Result(
            path=path, src=self.src.namespace, dst=self.dst.namespace, dry_run=self.dry_run
        )
        try:
            data = self.src.read_secret(path)
        except VaultError as exc:
            result.error = VaultError(f'read src "{path}": {exc}', exc.status_code)
            return result

        if self.dry_run:
            result.skipped = True
            return result

        try:
            self.dst.write_secret(path, data)
        except VaultError as exc:
            result.error = VaultError(f'write dst "{path}": {exc}', exc.status_code)
        return result

    def promote(self, paths: list[str]) -> list[Result]:
        """Copy each path from source to destination."""
        return [self._promote_path(path) for path in paths]


def _line(result: Result) -> str:
    route = f"({result.src} -> {result.dst})"
    if result.error is not None:
        return f"[ERROR]  {result.path} {route}: {result.error}\n"
    if result.dry_run:
        label = "dry-run"
    elif result.skipped:
        label = "skipped"
    else:
        label = "promoted"
    return f"[{label:<8}] {result.path} {route}\n"


def format_results(results: list[Result]) -> str:
    """Render promotion results as text."""
    if not results:
        return "no paths to promote\n"
    return "".join(_line(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write promotion results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))


def _category(result: Result) -> str:
    if result.error is not None:
        return "errored"
    if result.dry_run:
        return "dry-run"
    if result.skipped:
        return "skipped"
    return "promoted"


def format_summary(results: list[Result]) -> str:
    """Render a one-line count of promotion outcomes."""
    counts = Counter(_category(r) for r in results)
    return (
        f"summary: {counts['promoted']} promoted, {counts['skipped']} skipped, "
        f"{counts['dry-run']} dry-run, {counts['errored']} errored\n"
    )


def print_summary(results: list[Result], file: IO[str] | None = None) -> None:
    """Write the outcome counts to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_summary(results))