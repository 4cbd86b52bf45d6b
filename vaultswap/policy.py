"""Vault ACL policies: definition, validation, HCL rendering and applying."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from vaultswap.vault import ApiClient, VaultError


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Rule:
    """A single path-based access rule."""

    path: str
    capabilities: list[str] = field(default_factory=list)


@dataclass
class Policy:
    """A named Vault policy made of rules."""

    name: str
    rules: list[Rule] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError unless the policy has a name and valid rules."""
        if not self.name.strip():
            raise ValueError("policy name must not be empty")
        for index, rule in enumerate(self.rules):
            if not rule.path.strip():
                raise ValueError(f"rule[{index}]: path must not be empty")
            if not rule.capabilities:
                raise ValueError(f"rule[{index}]: capabilities must not be empty")

    def hcl(self) -> str:
        """Render the policy as HCL text."""
        return "".join(
            f"path {_quote(rule.path)} {{\n"
            f"  capabilities = [{', '.join(_quote(c) for c in rule.capabilities)}]\n"
            "}\n"
            for rule in self.rules
        )


@dataclass
class ApplyResult:
    """Outcome of applying one policy."""

    name: str
    dry_run: bool = False
    skipped: bool = False


class Applier:
    """Writes policies to Vault, or only validates them in dry-run mode."""

    def __init__(self, client: ApiClient, dry_run: bool = False) -> None:
        self.client = client
        self.dry_run = dry_run

    def apply(self, policy: Policy) -> ApplyResult:
        """Validate and write one policy."""
        try:
            policy.validate()
        except ValueError as exc:
            raise ValueError(f"policy {_quote(policy.name)} is invalid: {exc}") from exc

        result = ApplyResult(name=policy.name, dry_run=self.dry_run)
        if self.dry_run:
            result.skipped = True
            return result

        try:
            self.client.put_policy(policy.name, policy.hcl())
        except VaultError as exc:
            raise VaultError(
                f"failed to apply policy {_quote(policy.name)}: {exc}", exc.status_code
            ) from exc
        return result

    def apply_all(
        self, policies: list[Policy]
    ) -> tuple[list[ApplyResult], list[Exception]]:
        """Apply every policy, collecting results and failures separately."""
        results: list[ApplyResult] = []
        errors: list[Exception] = []
        for policy in policies:
            try:
                results.append(self.apply(policy))
            except (ValueError, VaultError) as exc:
                errors.append(exc)
        return results, errors