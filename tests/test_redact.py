import io

import pytest

from vaultswap.redact import Redactor, Result, format_results, print_results
from vaultswap.vault import VaultError


class FakeStore:
    def __init__(self, secrets=None, read_error=None, write_error=None):
        self.secrets = secrets or {}
        self.read_error = read_error
        self.write_error = write_error
        self.writes = {}

    def read_secret(self, path):
        if self.read_error is not None:
            raise self.read_error
        return dict(self.secrets[path])

    def write_secret(self, path, data):
        if self.write_error is not None:
            raise self.write_error
        self.writes[path] = dict(data)


def make_store():
    return FakeStore({"app": {"conn": "tcp://localhost", "host": "localhost", "port": 5432}})


def test_redact_path_replaces_matching_values():
    store = make_store()
    redactor = Redactor(store, r"^tcp://", "placeholder")
    result = redactor.redact_path("app")
    assert result.error is None
    assert result.keys == ["conn"]
    assert result.dry_run is False
    assert store.writes["app"] == {"conn": "placeholder", "host": "localhost", "port": 5432}


def test_redact_path_dry_run_does_not_write():
    store = make_store()
    result = Redactor(store, r"^tcp://", "placeholder", dry_run=True).redact_path("app")
    assert result.keys == ["conn"]
    assert result.dry_run is True
    assert store.writes == {}


def test_redact_path_no_match_skips_write():
    store = make_store()
    result = Redactor(store, r"^udp://", "placeholder").redact_path("app")
    assert result.keys == []
    assert result.error is None
    assert store.writes == {}


def test_non_string_values_are_not_matched():
    store = make_store()
    result = Redactor(store, r"5432", "placeholder").redact_path("app")
    assert result.keys == []
    assert store.writes == {}


def test_invalid_pattern_raises():
    with pytest.raises(ValueError, match="invalid pattern"):
        Redactor(make_store(), "(", "placeholder")


def test_read_error_is_reported():
    store = FakeStore(read_error=VaultError("unavailable"))
    result = Redactor(store, "x", "placeholder").redact_path("app")
    assert isinstance(result.error, VaultError)
    assert result.keys == []


def test_write_error_is_reported():
    store = make_store()
    store.write_error = VaultError("denied")
    result = Redactor(store, r"^tcp://", "placeholder").redact_path("app")
    assert isinstance(result.error, VaultError)
    assert result.keys == []


def test_redact_paths_keeps_order():
    store = FakeStore({"b": {"k": "tcp://x"}, "a": {"k": "plain"}})
    results = Redactor(store, r"^tcp://", "placeholder").redact_paths(["b", "a"])
    assert [r.path for r in results] == ["b", "a"]
    assert [r.keys for r in results] == [["k"], []]


def test_format_results_empty():
    assert format_results([]) == "no paths processed\n"


def test_format_results_labels_and_sorted_keys():
    keys = ["b", "a"]
    results = [
        Result(path="p1", error=VaultError("boom")),
        Result(path="p2"),
        Result(path="p3", keys=keys, dry_run=True),
        Result(path="p4", keys=["a"]),
    ]
    out = format_results(results)
    lines = out.splitlines()
    assert lines[0].strip().startswith("ERROR")
    assert "boom" in lines[0]
    assert "SKIP" in lines[1]
    assert "DRY-RUN" in lines[2]
    assert "[a, b]" in lines[2]
    assert "REDACTED" in lines[3]
    assert keys == ["b", "a"]


def test_print_results_matches_format():
    results = [Result(path="p", keys=["k"])]
    buf = io.StringIO()
    print_results(results, buf)
    assert buf.getvalue() == format_results(results)