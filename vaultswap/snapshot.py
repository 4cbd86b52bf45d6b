"""Point-in-time captures of secrets, saved to and loaded from JSON files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from vaultswap.vault import VaultError

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


class SnapshotError(Exception):
    """Raised when a snapshot cannot be taken, saved or loaded."""


class SecretReader(Protocol):
    def read_secret(self, namespace: str, path: str) -> dict[str, str]: ...


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + "Z"


def _parse_time(text: str) -> datetime:
    match = _TIMESTAMP.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp {text!r}")
    base, fraction, zone = match.groups()
    moment = datetime.strptime(base, "%Y-%m-%dT%H:%M:%S")
    micro = int((fraction or "").ljust(6, "0")[:6])
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return moment.replace(microsecond=micro, tzinfo=tz)


@dataclass
class Snapshot:
    """The secret data at one namespace and path at a moment in time."""

    path: str = ""
    namespace: str = ""
    data: dict[str, str] = field(default_factory=dict)
    captured_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the snapshot."""
        return {
            "path": self.path,
            "namespace": self.namespace,
            "data": dict(sorted(self.data.items())),
            "captured_at": _format_time(self.captured_at),
        }

    def save(self, file_path: str) -> None:
        """Write the snapshot as indented JSON to file_path."""
        try:
            with open(file_path, "w", encoding="utf-8") as fh:
                json.dump(self.to_dict(), fh, indent=2, ensure_ascii=False)
                fh.write("\n")
        except OSError as exc:
            raise SnapshotError(f"snapshot: create file: {exc}") from exc

    def key_names(self) -> list[str]:
        """Return the sorted key names held in the snapshot."""
        return sorted(self.data)


def _from_dict(raw: Any) -> Snapshot:
    if not isinstance(raw, dict):
        raise ValueError("snapshot must be a JSON object")
    path = raw.get("path") or ""
    namespace = raw.get("namespace") or ""
    data = raw.get("data") or {}
    captured = raw.get("captured_at")
    if not isinstance(path, str) or not isinstance(namespace, str):
        raise ValueError("path and namespace must be strings")
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValueError("data must map strings to strings")
    if captured is None:
        captured_at = ZERO_TIME
    elif isinstance(captured, str):
        captured_at = _parse_time(captured)
    else:
        raise ValueError("captured_at must be a string")
    return Snapshot(path=path, namespace=namespace, data=dict(data), captured_at=captured_at)


def load(file_path: str) -> Snapshot:
    """Read a snapshot from a JSON file."""
    try:
        with open(file_path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise SnapshotError(f"snapshot: open file: {exc}") from exc
    try:
        return _from_dict(json.loads(text))
    except ValueError as exc:
        raise SnapshotError(f"snapshot: decode json: {exc}") from exc


class Taker:
    """Captures snapshots from a secret reader."""

    def __init__(self, reader: SecretReader) -> None:
        self.reader = reader

    def take(self, namespace: str, path: str) -> Snapshot:
        """Read the secret at namespace/path and return it as a snapshot."""
        try:
            data = self.reader.read_secret(namespace, path)
        except VaultError as exc:
            raise SnapshotError(f"snapshot: read secret: {exc}") from exc
        return Snapshot(
            path=path,
            namespace=namespace,
            data=dict(data),
            captured_at=datetime.now(timezone.utc),
        )