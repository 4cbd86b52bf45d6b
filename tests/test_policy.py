import json

import pytest
import responses

from vaultswap.policy import Applier, Policy, Rule
from vaultswap.vault import ApiClient, VaultError

ADDR = "http://vault.test"


@pytest.fixture
def mock_vault():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def make_api():
    return ApiClient(ADDR, "token")


def test_validate_missing_name():
    p = Policy(name="", rules=[Rule(path="secret/*", capabilities=["read"])])
    with pytest.raises(ValueError, match="name"):
        p.validate()


def test_validate_missing_path():
    p = Policy(name="test", rules=[Rule(path="", capabilities=["read"])])
    with pytest.raises(ValueError, match=r"rule\[0\]: path"):
        p.validate()


def test_validate_missing_capabilities():
    p = Policy(name="test", rules=[Rule(path="secret/*", capabilities=[])])
    with pytest.raises(ValueError, match=r"rule\[0\]: capabilities"):
        p.validate()


def test_validate_valid():
    p = Policy(name="test", rules=[Rule(path="secret/*", capabilities=["read", "list"])])
    assert p.validate() is None


def test_hcl_output():
    p = Policy(
        name="test",
        rules=[Rule(path="secret/data/*", capabilities=["read", "create"])],
    )
    hcl = p.hcl()
    assert 'path "secret/data/*"' in hcl
    assert '"read"' in hcl
    assert '"create"' in hcl
    assert hcl == 'path "secret/data/*" {\n  capabilities = ["read", "create"]\n}\n'


def test_apply_dry_run_does_not_write(mock_vault):
    applier = Applier(make_api(), dry_run=True)
    p = Policy(name="my-policy", rules=[Rule(path="secret/*", capabilities=["read"])])
    result = applier.apply(p)
    assert result.dry_run is True
    assert result.skipped is True
    assert len(mock_vault.calls) == 0


def test_apply_invalid_policy_raises():
    applier = Applier(make_api(), dry_run=False)
    with pytest.raises(ValueError, match="is invalid"):
        applier.apply(Policy(name="", rules=[]))


def test_apply_writes_policy(mock_vault):
    mock_vault.add(responses.PUT, f"{ADDR}/v1/sys/policies/acl/my-policy", status=204)
    p = Policy(name="my-policy", rules=[Rule(path="secret/*", capabilities=["read"])])
    result = Applier(make_api()).apply(p)
    assert (result.name, result.dry_run, result.skipped) == ("my-policy", False, False)
    assert json.loads(mock_vault.calls[0].request.body) == {"policy": p.hcl()}


def test_apply_failure_raises(mock_vault):
    mock_vault.add(
        responses.PUT,
        f"{ADDR}/v1/sys/policies/acl/my-policy",
        json={"errors": ["permission denied"]},
        status=403,
    )
    p = Policy(name="my-policy", rules=[Rule(path="secret/*", capabilities=["read"])])
    with pytest.raises(VaultError, match="failed to apply policy"):
        Applier(make_api()).apply(p)


def test_apply_all_collects_errors():
    applier = Applier(make_api(), dry_run=True)
    good = Policy(name="good", rules=[Rule(path="secret/*", capabilities=["read"])])
    bad = Policy(name="", rules=[])
    results, errors = applier.apply_all([good, bad])
    assert [r.name for r in results] == ["good"]
    assert len(errors) == 1
    assert isinstance(errors[0], ValueError)