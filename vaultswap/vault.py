"""HTTP client for the Vault API and a KV v2 wrapper scoped to a namespace."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Any, TypeVar

import requests

DEFAULT_TIMEOUT = 60.0

T = TypeVar("T")


class VaultError(Exception):
    """Raised when a Vault request fails or returns something unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@contextmanager
def wrap_errors(prefix: str) -> Iterator[None]:
    """Re-raise any VaultError from the block with prefix in its message."""
    try:
        yield
    except VaultError as exc:
        raise VaultError(f"{prefix}: {exc}", exc.status_code) from exc


@contextmanager
def capture_error(result: Any) -> Iterator[None]:
    """Store any VaultError from the block on result.error instead of raising."""
    try:
        yield
    except VaultError as exc:
        result.error = exc


def render_results(
    results: Sequence[T], line: Callable[[T], str], empty_message: str
) -> str:
    """Render one line per result, or empty_message when there are none."""
    if not results:
        return empty_message + "\n"
    return "".join(line(r) + "\n" for r in results)


def write_output(text: str, file: IO[str] | None = None) -> None:
    """Write text to file, stdout by default."""
    (file if file is not None else sys.stdout).write(text)


@dataclass(frozen=True)
class Config:
    """Connection settings for a Vault instance."""

    address: str = ""
    token: str = ""
    namespace: str = ""


def kv_v2_data_path(path: str) -> str:
    """Convert a logical secret path to its KV v2 data path."""
    return "secret/data/" + path


def _join(*parts: str) -> str:
    return "/".join(part.strip("/") for part in parts if part and part.strip("/"))


def _data_of(body: dict[str, Any] | None) -> dict[str, Any] | None:
    if body is None:
        return None
    data = body.get("data")
    return data if isinstance(data, dict) else None


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("errors"):
        return "; ".join(str(e) for e in body["errors"])
    return resp.text.strip() or resp.reason or "no details"


class ApiClient:
    """Low-level access to Vault's logical, system and KV v2 endpoints."""

    def __init__(
        self,
        address: str,
        token: str = "",
        namespace: str = "",
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.address = address.rstrip("/")
        self.token = token
        self.namespace = namespace
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {}
        if self.token:
            headers["X-Vault-Token"] = self.token
        if self.namespace:
            headers["X-Vault-Namespace"] = self.namespace
        return headers

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        url = f"{self.address}/v1/{path.lstrip('/')}"
        try:
            resp = self._session.request(
                method,
                url,
                json=payload,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise VaultError(f"{method} {url}: {exc}") from exc

        if resp.status_code == 404:
            try:
                body = resp.json()
            except ValueError:
                return None
            if isinstance(body, dict) and (body.get("data") or body.get("warnings")):
                return body
            return None
        if resp.status_code >= 400:
            raise VaultError(
                f"{method} {url}: status {resp.status_code}: {_error_message(resp)}",
                resp.status_code,
            )
        if not resp.content:
            return None
        try:
            body = resp.json()
        except ValueError as exc:
            raise VaultError(f"{method} {url}: invalid JSON response") from exc
        return body if isinstance(body, dict) else None

    def read(self, path: str) -> dict[str, Any] | None:
        """Read a logical path; return the response data, or None if absent."""
        return _data_of(self._request("GET", path))

    def write(self, path: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """Write data to a logical path; return the response data, if any."""
        return _data_of(self._request("POST", path, payload=data))

    def delete(self, path: str) -> None:
        """Delete a logical path."""
        self._request("DELETE", path)

    def put_policy(self, name: str, rules: str) -> None:
        """Create or replace an ACL policy."""
        self._request("PUT", f"sys/policies/acl/{name}", payload={"policy": rules})

    def kv_get(
        self, mount: str, path: str, version: int | None = None
    ) -> dict[str, Any] | None:
        """Return a KV v2 secret's data (optionally a given version), or None."""
        params = {"version": version} if version else None
        envelope = _data_of(self._request("GET", _join(mount, "data", path), params=params))
        return _data_of(envelope)

    def kv_put(self, mount: str, path: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """Write a new version of a KV v2 secret; return the version metadata."""
        return self.write(_join(mount, "data", path), {"data": data})


class Client:
    """KV v2 client on the "secret" mount, scoped to one namespace."""

    def __init__(self, config: Config, *, session: requests.Session | None = None) -> None:
        if not config.address:
            raise VaultError("vault address must not be empty")
        if not config.token:
            raise VaultError("vault token must not be empty")
        self.api = ApiClient(
            config.address, config.token, config.namespace, session=session
        )
        self.namespace = config.namespace

    def read_secret(self, path: str) -> dict[str, Any]:
        """Return the key/value data of the secret at path."""
        with wrap_errors(f'reading secret "{path}"'):
            envelope = self.api.read(kv_v2_data_path(path))
        if envelope is None:
            raise VaultError(f'secret not found at path "{path}"')
        data = envelope.get("data")
        if not isinstance(data, dict):
            raise VaultError(f'unexpected data format at path "{path}"')
        return data

    def write_secret(self, path: str, data: dict[str, Any]) -> None:
        """Write key/value pairs to the secret at path."""
        with wrap_errors(f'writing secret "{path}"'):
            self.api.write(kv_v2_data_path(path), {"data": data})

    def delete_secret(self, path: str) -> None:
        """Delete the latest version of the secret at path."""
        with wrap_errors(f'deleting secret "{path}"'):
            self.api.delete(kv_v2_data_path(path))