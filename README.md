# kcmkit

Building blocks shared by key-management services:

- **Audit events** (`kcmkit.audit.events`): constructors that check their
  input and build a one-record OTLP log batch for key, CMK, workflow, group,
  tenant, configuration, credential, login and request events.
- **Log records** (`kcmkit.audit.records`): the in-memory `Logs` batch and
  its OTLP/JSON encoding.
- **Audit logger** (`kcmkit.audit.logger`): adds configured properties to the
  first record of a batch and posts the batch as OTLP/JSON to an endpoint.
- **Key-value storage** (`kcmkit.keyvalue`): a thread-safe in-memory store,
  with a live read-only view.
- **Utilities** (`kcmkit.utils`): HTTP basic-auth encoding, a file-existence
  check, and decoding of nested `base64(...)` values.

## Installation

```
pip install kcmkit
```

Python 3.10 or later is required. The only runtime dependency is PyYAML.

## Audit events

```python
from kcmkit.audit.model import new_event_metadata, KeyType
from kcmkit.audit.events import new_key_create_event

metadata = new_event_metadata("user-1", "tenant-1", "corr-1")
logs = new_key_create_event(metadata, "key-1", "system-1", "cmk-1", KeyType.SYSTEM)

record = logs.first_record()
print(record.event_name)                # "key-1"
print(record.attributes["eventType"])   # "keyCreate"
print(logs.to_otlp_json())
```

`new_event_metadata` requires a user initiator id and a tenant id; the
correlation id may be empty. Every event needs a non-empty object id, event
type, initiator and tenant. A constructor that gets missing or invalid input
raises `kcmkit.audit.model.EventCreationError`.

The enumerations in `kcmkit.audit.model` (`KeyType`, `LoginMethod`, `MfaType`,
`UserType`, `FailReason`, `CredentialType`, `CmkAction`,
`TenantUpdateActionType`) accept either a member or its plain string value.
`AuditEnum.is_valid` checks a value; an empty string is accepted everywhere
except for `TenantUpdateActionType`. Where a login event gets an empty login
method, MFA type, user type or failure reason, the attribute is recorded as
`UNSPECIFIED`, and an empty key type is recorded the same way.

## Sending audit events

```python
from kcmkit.audit.logger import AuditLogger

audit = AuditLogger(
    "http://localhost:4318/v1/logs",
    "region: eu\ncluster: c1",
    10.0,
    {"Authorization": "Bearer token"},
)
audit.send_event(logs)
```

The arguments are the endpoint, the additional properties, a timeout in
seconds (default 10) and extra request headers. The additional properties are
a YAML mapping of scalars; its entries become string attributes of the first
log record before the batch is posted. Text that is not such a mapping raises
`ValueError`.

`send_event` posts with `Content-Type` and `Accept` set to
`application/json`. It raises `NoLogRecordError` if the batch holds no record,
and `AuditError` if the request fails or the endpoint answers with any status
other than 200 or 201.

## Key-value storage

```python
from kcmkit.keyvalue import MemoryStorage

store = MemoryStorage()
store.store("foo", b"bar")
store.get("foo")        # b"bar"
store.get("nope")       # None
"foo" in store          # True
store.list()            # ["foo"]

view = store.as_read_storage()   # read-only, sees later changes
store.remove("foo")     # True
store.clean()           # False, nothing left
assert store.is_empty()
```

`ReadStorage` and `Storage` are the abstract interfaces `MemoryStorage`
implements; `StringToBytesStorage` and `ReadOnlyStringToBytesStorage` are
aliases for their `str`-to-`bytes` forms.

## Utilities

```python
from kcmkit.utils import basic_auth, extract_from_complex_value, file_exists

basic_auth("user", "password")              # base64 of "user:password"
extract_from_complex_value("base64(aGk=)")  # "hi"
extract_from_complex_value("other(x)")      # "other(x)", unchanged
file_exists("/etc/hosts")                   # True or False
```

`extract_from_complex_value` unwraps nested `base64(...)` layers and raises
`ValueError` on invalid base64. `file_exists` returns `False` only for a
missing path; other errors, such as a denied permission, are raised.

## What this package does not do

- It does not set up tracing, metrics or log export, and has no status or
  health-check server.
- It does not load service configuration from files or the environment; the
  audit logger takes its endpoint, properties, timeout and headers directly.
- The audit logger has no built-in TLS client certificates or OAuth2; any
  authentication is passed in as request headers.
- Storage is in memory only; nothing is persisted.

## Running the tests

```
pip install -e ".[test]"
pytest
```