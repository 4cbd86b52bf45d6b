import json
from datetime import datetime, timezone

import pytest

from vaultswap.snapshot import ZERO_TIME, Snapshot, SnapshotError, Taker, load
from vaultswap.vault import VaultError


class FakeReader:
    def __init__(self, data=None, error=None):
        self.data = data or {}
        self.error = error

    def read_secret(self, namespace, path):
        if self.error is not None:
            raise self.error
        return self.data


def test_take_success():
    reader = FakeReader(data={"api_key": "placeholder", "db_pass": "password"})
    snap = Taker(reader).take("ns1", "kv/myapp")
    assert snap.path == "kv/myapp"
    assert snap.namespace == "ns1"
    assert snap.data["api_key"] == "placeholder"
    assert snap.captured_at > ZERO_TIME


def test_take_read_error():
    reader = FakeReader(error=VaultError("vault unavailable"))
    with pytest.raises(SnapshotError, match="vault unavailable"):
        Taker(reader).take("ns1", "kv/myapp")


def test_save_and_load_round_trip(tmp_path):
    snap = Taker(FakeReader(data={"token": "token"})).take("prod", "kv/service")
    target = tmp_path / "snap.json"
    snap.save(str(target))
    loaded = load(str(target))
    assert loaded.path == snap.path
    assert loaded.namespace == "prod"
    assert loaded.data["token"] == "token"
    assert loaded.captured_at == snap.captured_at


def test_saved_file_layout(tmp_path):
    snap = Snapshot(
        path="kv/test",
        namespace="ns",
        data={"b": "2", "a": "1"},
        captured_at=datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
    )
    target = tmp_path / "snap.json"
    snap.save(str(target))
    raw = json.loads(target.read_text(encoding="utf-8"))
    assert list(raw) == ["path", "namespace", "data", "captured_at"]
    assert list(raw["data"]) == ["a", "b"]
    assert raw["captured_at"] == "2024-01-15T10:00:00Z"


def test_load_nanosecond_timestamp(tmp_path):
    target = tmp_path / "snap.json"
    target.write_text(
        json.dumps(
            {
                "path": "kv/x",
                "namespace": "",
                "data": {"k": "v"},
                "captured_at": "2024-01-15T10:00:00.123456789Z",
            }
        ),
        encoding="utf-8",
    )
    loaded = load(str(target))
    assert loaded.captured_at == datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)


def test_load_missing_file(tmp_path):
    with pytest.raises(SnapshotError, match="open file"):
        load(str(tmp_path / "nonexistent" / "snap.json"))


def test_load_invalid_json(tmp_path):
    target = tmp_path / "snap.json"
    target.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError, match="decode json"):
        load(str(target))


def test_save_invalid_path(tmp_path):
    snap = Snapshot(path="kv/test", data={})
    with pytest.raises(SnapshotError, match="create file"):
        snap.save(str(tmp_path / "nonexistent_dir" / "snap.json"))


def test_key_names_sorted():
    snap = Snapshot(data={"zeta": "1", "alpha": "2", "mid": "3"})
    assert snap.key_names() == ["alpha", "mid", "zeta"]