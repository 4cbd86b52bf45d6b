import io
import json

import pytest
import responses

from vaultswap.trim import Result, Trimmer, format_results, print_results
from vaultswap.vault import Client, Config

ADDRESS = "http://vault.test"
URL = f"{ADDRESS}/v1/secret/data/mypath"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    return Client(Config(address=ADDRESS, token="token"))


def _serve(rsps, secret):
    rsps.add(responses.GET, URL, json={"data": {"data": secret}})
    rsps.add(responses.POST, URL, status=204)


def test_trim_key_removes_key(rsps, client):
    _serve(rsps, {"foo": "bar", "baz": "qux"})
    result = Trimmer(client, False).trim_key("mypath", "foo")
    assert result.error is None
    assert result.removed is True
    posts = [c for c in rsps.calls if c.request.method == "POST"]
    assert json.loads(posts[0].request.body) == {"data": {"baz": "qux"}}


def test_trim_key_dry_run_does_not_write(rsps, client):
    _serve(rsps, {"key": "val"})
    result = Trimmer(client, True).trim_key("mypath", "key")
    assert [c.request.method for c in rsps.calls] == ["GET"]
    assert result.dry_run is True
    assert result.removed is True


def test_trim_key_absent_key_not_removed(rsps, client):
    _serve(rsps, {"key": "val"})
    result = Trimmer(client, False).trim_key("mypath", "other")
    assert result.removed is False
    assert result.error is None
    assert [c.request.method for c in rsps.calls] == ["GET"]


def test_trim_key_read_error(rsps, client):
    rsps.add(responses.GET, URL, status=500, json={"errors": ["internal"]})
    result = Trimmer(client, False).trim_key("mypath", "key")
    assert result.removed is False
    assert str(result.error).startswith("read mypath:")


def test_trim_keys_returns_one_result_per_key(rsps, client):
    _serve(rsps, {"a": "1", "b": "2"})
    results = Trimmer(client, True).trim_keys("mypath", ["a", "zzz", "b"])
    assert [(r.key, r.removed) for r in results] == [("a", True), ("zzz", False), ("b", True)]


def test_format_results_labels():
    results = [
        Result(path="p", key="k1", removed=True),
        Result(path="p", key="k2"),
        Result(path="p", key="k3", removed=True, dry_run=True),
    ]
    assert format_results(results) == (
        "  removed    p [k1]\n"
        "  skipped    p [k2]\n"
        "  dry-run    p [k3]\n"
    )


def test_format_results_error_and_empty():
    out = format_results([Result(path="p", key="k", error=Exception("boom"))])
    assert out == "  error      p [k]: boom\n"
    assert format_results([]) == "no keys targeted\n"


def test_print_results_to_file():
    buf = io.StringIO()
    print_results([Result(path="p", key="k", removed=True)], buf)
    assert "removed" in buf.getvalue()