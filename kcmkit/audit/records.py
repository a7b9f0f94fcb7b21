"""In-memory OTLP log batches and their OTLP/JSON encoding."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from kcmkit.audit.model import NoLogRecordError


def _any_value(value: Any) -> dict[str, Any]:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return {"boolValue": value}
    if isinstance(value, int):
        return {"intValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, (bytes, bytearray)):
        return {"bytesValue": base64.b64encode(bytes(value)).decode("ascii")}
    return {"stringValue": str(value)}


@dataclass
class LogRecord:
    """One log record: an event name, a timestamp in Unix nanoseconds and attributes."""

    event_name: str = ""
    timestamp: int = 0
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the record in OTLP/JSON form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.timestamp:
            result["timeUnixNano"] = str(self.timestamp)
        if self.attributes:
            result["attributes"] = [
                {"key": key, "value": _any_value(value)}
                for key, value in self.attributes.items()
            ]
        if self.event_name:
            result["eventName"] = self.event_name
        return result


@dataclass
class ScopeLogs:
    """Records produced under one instrumentation scope."""

    log_records: list[LogRecord] = field(default_factory=list)


@dataclass
class ResourceLogs:
    """Scopes of records produced by one resource."""

    scope_logs: list[ScopeLogs] = field(default_factory=list)


@dataclass
class Logs:
    """A batch of log records grouped by resource and scope."""

    resource_logs: list[ResourceLogs] = field(default_factory=list)

    def new_record(self) -> LogRecord:
        """Append a new resource and scope holding one empty record, and return it."""
        record = LogRecord()
        self.resource_logs.append(ResourceLogs([ScopeLogs([record])]))
        return record

    def first_record(self) -> LogRecord:
        """Return the first record of the first scope of the first resource."""
        if (
            self.resource_logs
            and self.resource_logs[0].scope_logs
            and self.resource_logs[0].scope_logs[0].log_records
        ):
            return self.resource_logs[0].scope_logs[0].log_records[0]
        raise NoLogRecordError()

    def to_otlp_json(self) -> str:
        """Encode the batch as OTLP/JSON."""
        document: dict[str, Any] = {}
        if self.resource_logs:
            document["resourceLogs"] = [
                _resource_to_dict(resource) for resource in self.resource_logs
            ]
        return json.dumps(document, separators=(",", ":"))


def _resource_to_dict(resource: ResourceLogs) -> dict[str, Any]:
    result: dict[str, Any] = {"resource": {}}
    if resource.scope_logs:
        result["scopeLogs"] = [_scope_to_dict(scope) for scope in resource.scope_logs]
    return result


def _scope_to_dict(scope: ScopeLogs) -> dict[str, Any]:
    result: dict[str, Any] = {"scope": {}}
    if scope.log_records:
        result["logRecords"] = [record.to_dict() for record in scope.log_records]
    return result