# vaultswap

A Python library for bulk maintenance of KV v2 secrets in a Vault server.
Each operation has a dry-run mode. In dry-run mode the operation reads what
it needs and reports what it would change, and it writes nothing.

## Installation

```
pip install vaultswap
```

The only runtime dependency is `requests`.

## Connecting

`vaultswap.vault` provides two clients.

`Client` is a KV v2 client on the `secret` mount. It is scoped to one namespace.

```python
from vaultswap.vault import Client, Config

client = Client(Config(address="http://localhost:8200", token="token", namespace="team-a"))
data = client.read_secret("myapp/config")
client.write_secret("myapp/config", {**data, "feature": "on"})
client.delete_secret("old/path")
```

- If the address or the token is empty, creating a `Client` raises `VaultError`.
- `read_secret`, `write_secret` and `delete_secret` use `secret/data/<path>` (see `kv_v2_data_path`).
- `read_secret` raises `VaultError` when the secret is not found.
- `client.namespace` holds the namespace. `client.api` is the underlying `ApiClient`.

`ApiClient(address, token="", namespace="", *, session=None, timeout=60.0)`
gives lower-level access. It has these methods:

- `read(path)` returns the response data, or `None` on 404.
- `write(path, data)`
- `delete(path)`
- `put_policy(name, rules)`
- `kv_get(mount, path, version=None)`
- `kv_put(mount, path, data)`

The token is sent as `X-Vault-Token`. The namespace is sent as `X-Vault-Namespace`.

Failed requests raise `VaultError`. Its `status_code` attribute holds the HTTP status when there is one.

## Operations

Each operation lives in its own module. The table shows which client each worker expects:

- `ApiClient` takes mount-relative paths such as `secret`.
- `Client` takes logical paths.
- "store" means any object with `read_secret(path)` and `write_secret(path, data)`. A `Client` is one such object.

| Module     | Worker        | Client      | What it does                                                    |
|------------|---------------|-------------|-----------------------------------------------------------------|
| `policy`   | `Applier`     | `ApiClient` | validate and write ACL policies (`Policy`, `Rule`)              |
| `pin`      | `Pinner`      | `ApiClient` | set `current_version` in a secret's metadata, after checking the version exists |
| `protect`  | `Protector`   | `ApiClient` | set `custom_metadata.protected = "true"`, skipping paths that already have it |
| `prune`    | `Pruner`      | `ApiClient` | delete secrets whose data map is empty                          |
| `revert`   | `Reverter`    | `ApiClient` | write an older version's data back as the newest version        |
| `touch`    | `Toucher`     | `ApiClient` | rewrite a secret unchanged to create a new version              |
| `truncate` | `Truncator`   | `ApiClient` | destroy the oldest versions beyond a `keep` limit               |
| `prefill`  | `Prefiller`   | store       | add default values for keys that are missing                    |
| `promote`  | `Promoter`    | two `Client`s | copy secrets from one namespace to another                    |
| `redact`   | `Redactor`    | store       | replace string values matching a regex with a placeholder       |
| `rename`   | `Renamer`     | store + `delete_secret` | write a secret to a new path and delete the old one |
| `rotate`   | `Rotator`     | store       | regenerate selected keys with random URL-safe base64 values     |
| `sanitize` | `Sanitizer`   | store       | remove keys whose trimmed value equals a pattern, ignoring case |
| `search`   | `Searcher`    | store (read only) | find keys or string values containing a query, ignoring case |
| `stamp`    | `Stamper`     | store       | add a UTC timestamp key (default `_stamped_at`)                 |
| `tags`     | `Tagger`      | store       | store `_tags.<name>` entries in secrets                         |
| `trim`     | `Trimmer`     | store       | remove named keys from a secret                                 |
| `validate` | `Validator`   | store (read only) | report which required keys a secret lacks                 |
| `snapshot` | `Taker`       | reader with `read_secret(namespace, path)` | capture a secret as a `Snapshot` |

### Snapshots

- `Snapshot.save(file_path)` writes indented JSON with these fields:
  - `path`
  - `namespace`
  - `data`
  - `captured_at`, an RFC 3339 UTC timestamp
- `snapshot.load(file_path)` reads a snapshot back.
- `Snapshot.key_names()` lists the keys in sorted order.
- Failures raise `SnapshotError`.

### Reports

Several modules have `format_results(results)`, which returns text, and
`print_results(results, file=None)`, which writes to stdout by default. These modules are:

- `pin`
- `protect`
- `prune`
- `revert`
- `prefill`
- `promote`
- `redact`
- `rename`
- `tags`
- `trim`

Some modules have more report helpers:

- `promote` also has `format_summary` and `print_summary`.
- `rotate` has `format_result`, `print_result`, `format_results` and `print_results`.
- `search` has `format_results(results, mask_values=False)` and `print_results(results, mask_values=False, file=None)`. Search results are sorted by path and then by key. Setting `mask_values` prints values as `***`.

### Example: rotate a password in dry-run mode

```python
from vaultswap.rotate import Options, Rotator, print_result

rotator = Rotator(client, Options(keys_to_rotate=["password"], dry_run=True))
print_result(rotator.rotate("myapp/config"))
```

### Example: pin several secrets to version 3

```python
from vaultswap.pin import Pinner, print_results
from vaultswap.vault import ApiClient

api = ApiClient("http://localhost:8200", "token")
results = Pinner(api, dry_run=False).pin_paths("secret", ["app/db", "app/api"], 3)
print_results(results)
```

## Errors

Most workers handle failures per path. A failure on one path is stored in that result's `error` attribute, and the run carries on with the next path.

These workers raise instead:

- `Rotator.rotate` raises `VaultError`.
- `Applier.apply` raises `ValueError` for an invalid policy and `VaultError` for a failed write. `Applier.apply_all` collects the results and the errors separately and returns both.
- `Taker.take` raises `SnapshotError`.
- `Redactor` raises `ValueError` when it is created with an invalid pattern.

## What this package does not do

It is a library only. It has no command-line program.

It does not:

- watch secrets for changes;
- compare or sync two secrets;
- restore a saved snapshot into Vault.

## Tests

```
pip install -e ".[test]"
pytest
```