"""Check that required keys are present at secret paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from vaultswap.vault import VaultError


class SecretReader(Protocol):
    def read_secret(self, path: str) -> dict[str, Any]: ...


@dataclass
class Result:
    """Outcome of validating one path."""

    path: str
    missing: list[str] = field(default_factory=list)
    ok: bool = False
    error: Exception | None = None


class Validator:
    """Reports which required keys a secret lacks."""

    def __init__(self, client: SecretReader, required_keys: list[str]) -> None:
        self.client = client
        self.required_keys = list(required_keys)

    def validate_path(self, path: str) -> Result:
        """Read the secret at path and check every required key is present."""
        try:
            secret = self.client.read_secret(path)
        except VaultError as exc:
            return Result(path=path, error=VaultError(f"read {path}: {exc}", exc.status_code))

        missing = [key for key in self.required_keys if key not in secret]
        return Result(path=path, missing=missing, ok=not missing)

    def validate_paths(self, paths: list[str]) -> list[Result]:
        """Validate every path, ignoring surrounding whitespace in path names."""
        return [self.validate_path(path.strip()) for path in paths]