import json

import pytest

from kcmkit.audit.model import KeyType, NoLogRecordError
from kcmkit.audit.records import LogRecord, Logs, ResourceLogs, ScopeLogs


def test_new_record_is_first_record():
    logs = Logs()
    record = logs.new_record()
    assert logs.first_record() is record


def test_first_record_stays_first_after_more_records():
    logs = Logs()
    first = logs.new_record()
    second = logs.new_record()
    assert logs.first_record() is first
    assert len(logs.resource_logs) == 2
    assert logs.resource_logs[1].scope_logs[0].log_records[0] is second


@pytest.mark.parametrize(
    "logs",
    [
        Logs(),
        Logs(resource_logs=[ResourceLogs()]),
        Logs(resource_logs=[ResourceLogs(scope_logs=[ScopeLogs()])]),
    ],
)
def test_first_record_missing_raises(logs):
    with pytest.raises(NoLogRecordError):
        logs.first_record()


def test_empty_record_dict_is_empty():
    assert LogRecord().to_dict() == {}


def test_empty_logs_json_is_empty_object():
    assert json.loads(Logs().to_otlp_json()) == {}


def test_json_round_trip_of_record():
    logs = Logs()
    record = logs.new_record()
    record.event_name = "validObjectID"
    record.timestamp = 1700000000000000000
    record.attributes["eventType"] = "keyCreate"
    record.attributes["objectID"] = "validObjectID"

    document = json.loads(logs.to_otlp_json())
    encoded = document["resourceLogs"][0]["scopeLogs"][0]["logRecords"][0]

    assert encoded == record.to_dict()
    assert encoded["eventName"] == "validObjectID"
    assert encoded["timeUnixNano"] == str(record.timestamp)
    assert encoded["attributes"] == [
        {"key": "eventType", "value": {"stringValue": "keyCreate"}},
        {"key": "objectID", "value": {"stringValue": "validObjectID"}},
    ]


def test_resource_and_scope_objects_present():
    logs = Logs()
    logs.new_record()
    document = json.loads(logs.to_otlp_json())
    resource = document["resourceLogs"][0]
    assert resource["resource"] == {}
    assert resource["scopeLogs"][0]["scope"] == {}


def test_attribute_value_kinds():
    record = LogRecord(
        attributes={"dpp": True, "count": 5, "objectType": KeyType.SYSTEM}
    )
    values = {item["key"]: item["value"] for item in record.to_dict()["attributes"]}
    assert values["dpp"] == {"boolValue": True}
    assert values["count"] == {"intValue": "5"}
    assert values["objectType"] == {"stringValue": "SYSTEM"}


def test_attribute_order_is_kept():
    keys = ["tenantID", "eventType", "objectID", "userInitiatorID"]
    record = LogRecord(attributes={key: "v" for key in keys})
    assert [item["key"] for item in record.to_dict()["attributes"]] == keys