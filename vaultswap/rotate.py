"""Regenerate selected keys of a secret with random values."""

from __future__ import annotations

import base64
import secrets
import sys
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import IO, Any, Protocol

from vaultswap.vault import VaultError

DEFAULT_BYTE_LENGTH = 32


class SecretStore(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...

    def write_secret(self, path: str, data: dict[str, Any]) -> None: ...


@dataclass
class Options:
    """Rotation settings."""

    keys_to_rotate: list[str] = field(default_factory=list)
    byte_length: int = DEFAULT_BYTE_LENGTH
    dry_run: bool = False


@dataclass
class Result:
    """Outcome of one rotation."""

    path: str
    rotated_at: datetime
    keys: list[str] = field(default_factory=list)
    dry_run: bool = False


def generate_secret(byte_length: int) -> str:
    """Return byte_length random bytes, URL-safe base64 encoded with padding."""
    return base64.urlsafe_b64encode(secrets.token_bytes(byte_length)).decode("ascii")


class Rotator:
    """Replaces configured keys of a secret with freshly generated values."""

    def __init__(self, client: SecretStore, opts: Options | None = None) -> None:
        opts = opts if opts is not None else Options()
        if opts.byte_length <= 0:
            opts = replace(opts, byte_length=DEFAULT_BYTE_LENGTH)
        self.client = client
        self.opts = opts

    def rotate(self, path: str) -> Result:
        """Regenerate the configured keys at path and write them back."""
        try:
            existing = self.client.read_secret(path)
        except VaultError as exc:
            raise VaultError(f'rotate: read "{path}": {exc}', exc.status_code) from exc

        updated = dict(existing)
        for key in self.opts.keys_to_rotate:
            updated[key] = generate_secret(self.opts.byte_length)

        if not self.opts.dry_run:
            try:
                self.client.write_secret(path, updated)
            except VaultError as exc:
                raise VaultError(f'rotate: write "{path}": {exc}', exc.status_code) from exc

        return Result(
            path=path,
            rotated_at=datetime.now(timezone.utc),
            keys=list(self.opts.keys_to_rotate),
            dry_run=self.opts.dry_run,
        )


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.replace(microsecond=0).isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


def format_result(result: Result) -> str:
    """Render one rotation result as aligned label/value lines."""
    rows = [
        ("Path:", result.path),
        ("Mode:", "dry-run" if result.dry_run else "applied"),
        ("Rotated at:", _rfc3339(result.rotated_at)),
        ("Keys rotated:", ", ".join(result.keys)),
    ]
    width = max(len(label) for label, _ in rows) + 2
    return "".join(f"{label:<{width}}{value}\n" for label, value in rows)


def print_result(result: Result, file: IO[str] | None = None) -> None:
    """Write one rotation result to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_result(result))


def format_results(results: list[Result]) -> str:
    """Render several rotation results separated by blank lines."""
    return "\n".join(format_result(r) for r in results)


def print_results(results: list[Result], file: IO[str] | None = None) -> None:
    """Write several rotation results to file, stdout by default."""
    (file if file is not None else sys.stdout).write(format_results(results))