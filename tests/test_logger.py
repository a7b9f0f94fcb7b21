import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from kcmkit.audit.logger import AuditLogger
from kcmkit.audit.model import AuditError, NoLogRecordError
from kcmkit.audit.records import Logs
from kcmkit.utils import basic_auth


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self):  # noqa: N802
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length)
        self.server.received.append((dict(self.headers), body))
        expected = self.server.expected_auth
        if expected is not None and self.headers.get("Authorization") != expected:
            self.send_response(401)
        else:
            self.send_response(self.server.status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    httpd.received = []
    httpd.expected_auth = None
    httpd.status = 200
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    httpd.url = f"http://127.0.0.1:{httpd.server_address[1]}/logs"
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _logs_with_record():
    logs = Logs()
    logs.new_record()
    return logs


def _basic_header(username, secret_word):
    return "Basic " + basic_auth(username, secret_word)


def test_send_basic_auth_success(server):
    server.expected_auth = _basic_header("admin", "password")
    logger = AuditLogger(
        server.url, "", 10.0, {"Authorization": _basic_header("admin", "password")}
    )
    logger.send_event(_logs_with_record())
    assert len(server.received) == 1
    headers, _ = server.received[0]
    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"


def test_send_basic_auth_wrong_credentials_fails(server):
    server.expected_auth = _basic_header("admin", "password")
    logger = AuditLogger(
        server.url, "", 10.0, {"Authorization": _basic_header("user", "token")}
    )
    with pytest.raises(AuditError, match="response status not OK") as info:
        logger.send_event(_logs_with_record())
    assert "401" in str(info.value)


def test_send_without_auth_success(server):
    logger = AuditLogger(server.url, "", 10.0, None)
    logger.send_event(_logs_with_record())
    assert len(server.received) == 1


def test_send_accepts_created_status(server):
    server.status = 201
    logger = AuditLogger(server.url, "", 10.0, None)
    logger.send_event(_logs_with_record())
    assert len(server.received) == 1


@pytest.mark.parametrize("status", [202, 204, 400, 500])
def test_send_rejects_other_statuses(server, status):
    server.status = status
    logger = AuditLogger(server.url, "", 10.0, None)
    with pytest.raises(AuditError, match="response status not OK"):
        logger.send_event(_logs_with_record())


def test_send_posts_enriched_otlp_json(server):
    logger = AuditLogger(server.url, "Prop1: Val1\nProp2: Val2", 10.0, None)
    logger.send_event(_logs_with_record())
    _, body = server.received[0]
    document = json.loads(body)
    record = document["resourceLogs"][0]["scopeLogs"][0]["logRecords"][0]
    attributes = {item["key"]: item["value"] for item in record["attributes"]}
    assert attributes == {
        "Prop1": {"stringValue": "Val1"},
        "Prop2": {"stringValue": "Val2"},
    }


def test_send_without_record_raises(server):
    logger = AuditLogger(server.url, "", 10.0, None)
    with pytest.raises(NoLogRecordError):
        logger.send_event(Logs())
    assert server.received == []


def test_send_connection_refused_raises():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    logger = AuditLogger(f"http://127.0.0.1:{port}/logs", "", 2.0, None)
    with pytest.raises(AuditError, match="request failed"):
        logger.send_event(_logs_with_record())


def test_enrich_logs_adds_properties():
    logger = AuditLogger("http://localhost:1234/logs", "Prop1: Val1\nProp2: Val2", 10.0, None)
    logs = _logs_with_record()
    logger.enrich_logs(logs)
    attributes = logs.first_record().attributes
    assert attributes["Prop1"] == "Val1"
    assert attributes["Prop2"] == "Val2"


def test_enrich_logs_only_first_record():
    logger = AuditLogger("http://localhost:1234/logs", "Prop1: Val1", 10.0, None)
    logs = Logs()
    logs.new_record()
    second = logs.new_record()
    logger.enrich_logs(logs)
    assert logs.first_record().attributes == {"Prop1": "Val1"}
    assert second.attributes == {}


def test_enrich_logs_without_record_raises():
    logger = AuditLogger("http://localhost:1234/logs", "Prop1: Val1", 10.0, None)
    with pytest.raises(NoLogRecordError):
        logger.enrich_logs(Logs())


def test_additional_properties_scalars_become_strings():
    logger = AuditLogger("http://localhost:1234/logs", "count: 3\nflag: yes-ish", 10.0, None)
    assert logger.additional_properties == {"count": "3", "flag": "yes-ish"}


def test_empty_additional_properties():
    logger = AuditLogger("http://localhost:1234/logs", "", 10.0, None)
    assert logger.additional_properties == {}


@pytest.mark.parametrize(
    "text",
    ["- a\n- b", "key: [1, 2]", "key: {nested: x}", "key: : :\n  - bad"],
)
def test_invalid_additional_properties_raise(text):
    with pytest.raises(ValueError):
        AuditLogger("http://localhost:1234/logs", text, 10.0, None)