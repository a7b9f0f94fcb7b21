"""Sending audit log batches to an OTLP/HTTP endpoint as JSON."""

from __future__ import annotations

import urllib.error
import urllib.request
from collections.abc import Mapping
from typing import Any, Optional

import yaml

from kcmkit.audit.model import AuditError
from kcmkit.audit.records import Logs

_ACCEPTED_STATUSES = frozenset({200, 201})


def _parse_additional_properties(text: str) -> dict[str, str]:
    """Parse a YAML mapping of extra attributes into a string-to-string dict."""
    try:
        loaded = yaml.safe_load(text) if text else None
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid additional properties: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, Mapping):
        raise ValueError("additional properties must be a YAML mapping")

    properties: dict[str, str] = {}
    for key, value in loaded.items():
        if isinstance(value, (Mapping, list)):
            raise ValueError(f"additional property {key!r} must be a scalar")
        properties[str(key)] = "" if value is None else str(value)
    return properties


class AuditLogger:
    """Enriches audit events with fixed attributes and posts them to an endpoint."""

    def __init__(
        self,
        endpoint: str,
        additional_properties: str = "",
        timeout: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.headers: dict[str, str] = dict(headers or {})
        self.additional_properties = _parse_additional_properties(additional_properties)

    def enrich_logs(self, logs: Logs) -> None:
        """Add the additional properties to the first record of ``logs``."""
        record = logs.first_record()
        for key, value in self.additional_properties.items():
            record.attributes[key] = value

    def send_event(self, logs: Logs) -> None:
        """Enrich ``logs`` and post them as OTLP/JSON; raise on any failure."""
        self.enrich_logs(logs)
        self._send(logs.to_otlp_json())

    def _send(self, payload: str) -> None:
        headers: dict[str, Any] = dict(self.headers)
        headers["Content-Type"] = "application/json"
        headers["Accept"] = "application/json"

        request = urllib.request.Request(
            self.endpoint,
            data=payload.encode("utf-8"),
            headers=headers,
            method="POST",
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
        except urllib.error.HTTPError as exc:
            status = exc.code
            exc.close()
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise AuditError(f"failed to send audit logs: request failed: {exc}") from exc

        if status not in _ACCEPTED_STATUSES:
            raise AuditError(
                f"failed to send audit logs: response status not OK (status_code={status})"
            )