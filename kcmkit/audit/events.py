"""Constructors for the audit events, each returned as a one-record log batch."""

from __future__ import annotations

import time
from enum import Enum
from typing import Any, Mapping

from kcmkit.audit.model import (
    ACTION_KEY,
    ACTION_TYPE_KEY,
    CHANNEL_ID_KEY,
    CHANNEL_TYPE_KEY,
    CMK_AVAILABLE_EVENT,
    CMK_CREATE_EVENT,
    CMK_DELETE_EVENT,
    CMK_DETACH_EVENT,
    CMK_DISABLE_EVENT,
    CMK_ENABLE_EVENT,
    CMK_ID_KEY,
    CMK_ID_NEW_KEY,
    CMK_ID_OLD_KEY,
    CMK_OFFBOARDING_EVENT,
    CMK_ONBOARDING_EVENT,
    CMK_RESTORE_EVENT,
    CMK_ROTATE_EVENT,
    CMK_SWITCH_EVENT,
    CMK_TENANT_DELETE_EVENT,
    CMK_TENANT_MODIFICATION_EVENT,
    CMK_UNAVAILABLE_EVENT,
    CONFIG_CREATE_EVENT,
    CONFIG_DELETE_EVENT,
    CONFIG_OBJECT_TYPE,
    CONFIG_PROPERTY_NAME,
    CONFIG_READ_EVENT,
    CONFIG_UPDATE_EVENT,
    CREDENTIAL_CREATE_EVENT,
    CREDENTIAL_DELETE_EVENT,
    CREDENTIAL_EXPIRATION_EVENT,
    CREDENTIAL_REVOKATION_EVENT,
    CREDENTIAL_TYPE_KEY,
    DPP_KEY,
    EVENT_CORRELATION_ID_KEY,
    EVENT_TYPE_KEY,
    FAILURE_REASON_KEY,
    GROUP_CREATE_EVENT,
    GROUP_DELETE_EVENT,
    GROUP_OBJECT_TYPE,
    GROUP_READ_EVENT,
    GROUP_UPDATE_EVENT,
    KEY_CREATE_EVENT,
    KEY_DELETE_EVENT,
    KEY_DISABLE_EVENT,
    KEY_ENABLE_EVENT,
    KEY_PURGE_EVENT,
    KEY_RESTORE_EVENT,
    KEY_ROTATE_EVENT,
    LOGIN_METHOD_KEY,
    MFA_TYPE_KEY,
    NEW_VALUE_KEY,
    OBJECT_ID_KEY,
    OBJECT_TYPE_KEY,
    OLD_VALUE_KEY,
    PROPERTY_NAME_KEY,
    RESOURCE_KEY,
    SYSTEM_ID_KEY,
    TENANT_ID_KEY,
    TENANT_OBJECT_TYPE,
    TENANT_OFFBOARDING_EVENT,
    TENANT_ONBOARDING_EVENT,
    TENANT_UPDATE_EVENT,
    UNAUTHENTICATED_REQUEST_EVENT,
    UNAUTHORIZED_REQUEST_EVENT,
    UNSPECIFIED,
    USER_INITIATOR_ID_KEY,
    USER_LOGIN_FAILURE_EVENT,
    USER_LOGIN_SUCCESS_EVENT,
    USER_TYPE_KEY,
    VALUE_KEY,
    WORKFLOW_EXECUTE_EVENT,
    WORKFLOW_OBJECT_TYPE,
    WORKFLOW_START_EVENT,
    WORKFLOW_TERMINATE_EVENT,
    WORKFLOW_UPDATE_EVENT,
    CmkAction,
    CredentialType,
    EventCreationError,
    FailReason,
    KeyType,
    LoginMethod,
    MfaType,
    UserType,
    _has_values,
    _new_event_properties,
    _properties_have_values,
)
from kcmkit.audit.records import Logs

_REQUIRED_KEYS = (OBJECT_ID_KEY, EVENT_TYPE_KEY, USER_INITIATOR_ID_KEY, TENANT_ID_KEY)

_OPTIONAL_KEYS = (
    EVENT_CORRELATION_ID_KEY,
    OBJECT_TYPE_KEY,
    PROPERTY_NAME_KEY,
    CHANNEL_ID_KEY,
    CHANNEL_TYPE_KEY,
    SYSTEM_ID_KEY,
    CMK_ID_KEY,
    CMK_ID_OLD_KEY,
    CMK_ID_NEW_KEY,
    ACTION_TYPE_KEY,
    CREDENTIAL_TYPE_KEY,
    LOGIN_METHOD_KEY,
    MFA_TYPE_KEY,
    USER_TYPE_KEY,
    FAILURE_REASON_KEY,
    DPP_KEY,
    OLD_VALUE_KEY,
    NEW_VALUE_KEY,
    VALUE_KEY,
    RESOURCE_KEY,
    ACTION_KEY,
)


def _text(value: Any) -> str:
    """Render a property value as attribute text."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _unspecified_if_empty(value: Any) -> str:
    text = _text(value)
    return text or UNSPECIFIED


def _create_event(properties: Mapping[str, Any]) -> Logs:
    if not _properties_have_values(properties, *_REQUIRED_KEYS):
        raise EventCreationError()

    logs = Logs()
    record = logs.new_record()
    record.event_name = _text(properties[OBJECT_ID_KEY])
    record.timestamp = time.time_ns()

    for key in _REQUIRED_KEYS:
        record.attributes[key] = _text(properties[key])
    for key in _OPTIONAL_KEYS:
        if _properties_have_values(properties, key):
            record.attributes[key] = _text(properties[key])

    return logs


def _simple_event(event_type: str, metadata: Mapping[str, str], object_id: str) -> Logs:
    return _create_event(_new_event_properties(object_id, event_type, metadata))


def _key_event(
    event_type: str,
    metadata: Mapping[str, str],
    object_id: str,
    system_id: str,
    cmk_id: str,
    key_type: KeyType | str,
) -> Logs:
    if not _has_values(system_id, cmk_id) or not KeyType.is_valid(key_type):
        raise EventCreationError()

    properties = _new_event_properties(object_id, event_type, metadata)
    properties[OBJECT_TYPE_KEY] = _unspecified_if_empty(key_type)
    properties[SYSTEM_ID_KEY] = system_id
    properties[CMK_ID_KEY] = cmk_id
    return _create_event(properties)


def _channel_event(
    event_type: str,
    object_type: str,
    metadata: Mapping[str, str],
    object_id: str,
    channel_id: str,
    channel_type: str,
    value: Any,
    dpp: bool,
) -> Logs:
    if not _has_values(channel_id, channel_type):
        raise EventCreationError()

    properties = _new_event_properties(object_id, event_type, metadata)
    properties[OBJECT_TYPE_KEY] = object_type
    properties[CHANNEL_TYPE_KEY] = channel_type
    properties[CHANNEL_ID_KEY] = channel_id
    properties[VALUE_KEY] = value
    properties[DPP_KEY] = dpp
    return _create_event(properties)


def _credential_event(
    event_type: str,
    metadata: Mapping[str, str],
    credential_id: str,
    credential_type: CredentialType | str,
) -> Logs:
    if not CredentialType.is_valid(credential_type):
        raise EventCreationError()

    properties = _new_event_properties(credential_id, event_type, metadata)
    properties[CREDENTIAL_TYPE_KEY] = _text(credential_type)
    return _create_event(properties)


def _cmk_boarding_event(
    event_type: str, metadata: Mapping[str, str], cmk_id: str, system_id: str
) -> Logs:
    if not _has_values(system_id):
        raise EventCreationError()

    properties = _new_event_properties(cmk_id, event_type, metadata)
    properties[SYSTEM_ID_KEY] = system_id
    return _create_event(properties)


def new_key_create_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-created event."""
    return _key_event(KEY_CREATE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_delete_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-deleted event."""
    return _key_event(KEY_DELETE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_restore_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-restored event."""
    return _key_event(KEY_RESTORE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_purge_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-purged event."""
    return _key_event(KEY_PURGE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_rotate_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-rotated event."""
    return _key_event(KEY_ROTATE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_enable_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-enabled event."""
    return _key_event(KEY_ENABLE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_key_disable_event(metadata, object_id, system_id, cmk_id, key_type) -> Logs:
    """Build a key-disabled event."""
    return _key_event(KEY_DISABLE_EVENT, metadata, object_id, system_id, cmk_id, key_type)


def new_workflow_start_event(metadata, object_id, channel_id, channel_type, value, dpp) -> Logs:
    """Build a workflow-started event; channel id and type are required."""
    return _channel_event(
        WORKFLOW_START_EVENT, WORKFLOW_OBJECT_TYPE, metadata,
        object_id, channel_id, channel_type, value, dpp,
    )


def new_workflow_update_event(metadata, object_id, old_value, new_value, dpp) -> Logs:
    """Build a workflow-updated event."""
    properties = _new_event_properties(object_id, WORKFLOW_UPDATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = WORKFLOW_OBJECT_TYPE
    properties[OLD_VALUE_KEY] = old_value
    properties[NEW_VALUE_KEY] = new_value
    properties[DPP_KEY] = dpp
    return _create_event(properties)


def new_workflow_execute_event(metadata, object_id, channel_id, channel_type, value, dpp) -> Logs:
    """Build a workflow-executed event; channel id and type are required."""
    return _channel_event(
        WORKFLOW_EXECUTE_EVENT, WORKFLOW_OBJECT_TYPE, metadata,
        object_id, channel_id, channel_type, value, dpp,
    )


def new_workflow_terminate_event(metadata, object_id, channel_id, channel_type, value, dpp) -> Logs:
    """Build a workflow-terminated event; channel id and type are required."""
    return _channel_event(
        WORKFLOW_TERMINATE_EVENT, WORKFLOW_OBJECT_TYPE, metadata,
        object_id, channel_id, channel_type, value, dpp,
    )


def new_group_create_event(metadata, object_id, value, dpp) -> Logs:
    """Build a group-created event."""
    properties = _new_event_properties(object_id, GROUP_CREATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = GROUP_OBJECT_TYPE
    properties[VALUE_KEY] = value
    properties[DPP_KEY] = dpp
    return _create_event(properties)


def new_group_read_event(metadata, object_id, channel_id, channel_type, value, dpp) -> Logs:
    """Build a group-read event; channel id and type are required."""
    return _channel_event(
        GROUP_READ_EVENT, GROUP_OBJECT_TYPE, metadata,
        object_id, channel_id, channel_type, value, dpp,
    )


def new_group_delete_event(metadata, object_id, value, dpp) -> Logs:
    """Build a group-deleted event."""
    properties = _new_event_properties(object_id, GROUP_DELETE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = GROUP_OBJECT_TYPE
    properties[VALUE_KEY] = value
    properties[DPP_KEY] = dpp
    return _create_event(properties)


def new_group_update_event(metadata, object_id, property_name, old_value, new_value, dpp) -> Logs:
    """Build a group-updated event; the property name is required."""
    if not _has_values(property_name):
        raise EventCreationError()

    properties = _new_event_properties(object_id, GROUP_UPDATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = GROUP_OBJECT_TYPE
    properties[PROPERTY_NAME_KEY] = property_name
    properties[OLD_VALUE_KEY] = old_value
    properties[NEW_VALUE_KEY] = new_value
    properties[DPP_KEY] = dpp
    return _create_event(properties)


def new_user_login_success_event(metadata, object_id, login_method, mfa_type, user_type, value) -> Logs:
    """Build a successful-login event; empty enum values are recorded as UNSPECIFIED."""
    if not (
        LoginMethod.is_valid(login_method)
        and MfaType.is_valid(mfa_type)
        and UserType.is_valid(user_type)
    ):
        raise EventCreationError()

    properties = _new_event_properties(object_id, USER_LOGIN_SUCCESS_EVENT, metadata)
    properties[LOGIN_METHOD_KEY] = _unspecified_if_empty(login_method)
    properties[MFA_TYPE_KEY] = _unspecified_if_empty(mfa_type)
    properties[USER_TYPE_KEY] = _unspecified_if_empty(user_type)
    properties[VALUE_KEY] = value
    return _create_event(properties)


def new_user_login_failure_event(metadata, object_id, login_method, fail_reason, value) -> Logs:
    """Build a failed-login event; empty enum values are recorded as UNSPECIFIED."""
    if not (LoginMethod.is_valid(login_method) and FailReason.is_valid(fail_reason)):
        raise EventCreationError()

    properties = _new_event_properties(object_id, USER_LOGIN_FAILURE_EVENT, metadata)
    properties[LOGIN_METHOD_KEY] = _unspecified_if_empty(login_method)
    properties[FAILURE_REASON_KEY] = _unspecified_if_empty(fail_reason)
    properties[VALUE_KEY] = value
    return _create_event(properties)


def new_tenant_onboarding_event(metadata, tenant_id) -> Logs:
    """Build a tenant-onboarded event."""
    return _simple_event(TENANT_ONBOARDING_EVENT, metadata, tenant_id)


def new_tenant_offboarding_event(metadata, tenant_id) -> Logs:
    """Build a tenant-offboarded event."""
    return _simple_event(TENANT_OFFBOARDING_EVENT, metadata, tenant_id)


def new_tenant_update_event(metadata, object_id, property_name, old_value, new_value) -> Logs:
    """Build a tenant-updated event; property name and both values are required."""
    if not _has_values(property_name, old_value, new_value):
        raise EventCreationError()

    properties = _new_event_properties(object_id, TENANT_UPDATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = TENANT_OBJECT_TYPE
    properties[PROPERTY_NAME_KEY] = property_name
    properties[OLD_VALUE_KEY] = old_value
    properties[NEW_VALUE_KEY] = new_value
    return _create_event(properties)


def new_configuration_create_event(metadata, object_id, value) -> Logs:
    """Build a configuration-created event; the value is required."""
    if not _has_values(value):
        raise EventCreationError()

    properties = _new_event_properties(object_id, CONFIG_CREATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = CONFIG_OBJECT_TYPE
    properties[PROPERTY_NAME_KEY] = CONFIG_PROPERTY_NAME
    properties[VALUE_KEY] = value
    return _create_event(properties)


def new_configuration_update_event(metadata, object_id, old_value, new_value) -> Logs:
    """Build a configuration-updated event; both values are required."""
    if not _has_values(old_value, new_value):
        raise EventCreationError()

    properties = _new_event_properties(object_id, CONFIG_UPDATE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = CONFIG_OBJECT_TYPE
    properties[PROPERTY_NAME_KEY] = CONFIG_PROPERTY_NAME
    properties[OLD_VALUE_KEY] = old_value
    properties[NEW_VALUE_KEY] = new_value
    return _create_event(properties)


def new_configuration_delete_event(metadata, object_id, value) -> Logs:
    """Build a configuration-deleted event; the value is required."""
    if not _has_values(value):
        raise EventCreationError()

    properties = _new_event_properties(object_id, CONFIG_DELETE_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = CONFIG_OBJECT_TYPE
    properties[PROPERTY_NAME_KEY] = CONFIG_PROPERTY_NAME
    properties[VALUE_KEY] = value
    return _create_event(properties)


def new_configuration_read_event(metadata, object_id, channel_type, channel_id, value) -> Logs:
    """Build a configuration-read event; channel id, type and value are required."""
    if not _has_values(channel_id, channel_type, value):
        raise EventCreationError()

    properties = _new_event_properties(object_id, CONFIG_READ_EVENT, metadata)
    properties[OBJECT_TYPE_KEY] = CONFIG_OBJECT_TYPE
    properties[CHANNEL_TYPE_KEY] = channel_type
    properties[CHANNEL_ID_KEY] = channel_id
    properties[PROPERTY_NAME_KEY] = CONFIG_PROPERTY_NAME
    properties[VALUE_KEY] = value
    return _create_event(properties)


def new_credential_create_event(metadata, credential_id, credential_type) -> Logs:
    """Build a credential-created event."""
    return _credential_event(CREDENTIAL_CREATE_EVENT, metadata, credential_id, credential_type)


def new_credential_expiration_event(metadata, credential_id, credential_type) -> Logs:
    """Build a credential-expired event."""
    return _credential_event(CREDENTIAL_EXPIRATION_EVENT, metadata, credential_id, credential_type)


def new_credential_delete_event(metadata, credential_id, credential_type) -> Logs:
    """Build a credential-deleted event."""
    return _credential_event(CREDENTIAL_DELETE_EVENT, metadata, credential_id, credential_type)


def new_credential_revokation_event(metadata, credential_id, credential_type) -> Logs:
    """Build a credential-revoked event."""
    return _credential_event(CREDENTIAL_REVOKATION_EVENT, metadata, credential_id, credential_type)


def new_cmk_onboarding_event(metadata, cmk_id, system_id) -> Logs:
    """Build a CMK-onboarded event; the system id is required."""
    return _cmk_boarding_event(CMK_ONBOARDING_EVENT, metadata, cmk_id, system_id)


def new_cmk_offboarding_event(metadata, cmk_id, system_id) -> Logs:
    """Build a CMK-offboarded event; the system id is required."""
    return _cmk_boarding_event(CMK_OFFBOARDING_EVENT, metadata, cmk_id, system_id)


def new_cmk_switch_event(metadata, system_id, cmk_id_old, cmk_id_new) -> Logs:
    """Build a CMK-switched event; old and new CMK ids are required."""
    if not _has_values(cmk_id_old, cmk_id_new):
        raise EventCreationError()

    properties = _new_event_properties(system_id, CMK_SWITCH_EVENT, metadata)
    properties[CMK_ID_OLD_KEY] = cmk_id_old
    properties[CMK_ID_NEW_KEY] = cmk_id_new
    return _create_event(properties)


def new_cmk_tenant_modification_event(metadata, cmk_id, system_id, action) -> Logs:
    """Build a CMK tenant-modification event; a system id and valid action are required."""
    if not _has_values(system_id) or not CmkAction.is_valid(action):
        raise EventCreationError()

    properties = _new_event_properties(cmk_id, CMK_TENANT_MODIFICATION_EVENT, metadata)
    properties[SYSTEM_ID_KEY] = system_id
    properties[OBJECT_TYPE_KEY] = _text(action)
    return _create_event(properties)


def new_cmk_tenant_delete_event(metadata, cmk_id) -> Logs:
    """Build a CMK tenant-deleted event."""
    return _simple_event(CMK_TENANT_DELETE_EVENT, metadata, cmk_id)


def new_cmk_create_event(metadata, cmk_id) -> Logs:
    """Build a CMK-created event."""
    return _simple_event(CMK_CREATE_EVENT, metadata, cmk_id)


def new_cmk_delete_event(metadata, cmk_id) -> Logs:
    """Build a CMK-deleted event."""
    return _simple_event(CMK_DELETE_EVENT, metadata, cmk_id)


def new_cmk_detach_event(metadata, cmk_id) -> Logs:
    """Build a CMK-detached event."""
    return _simple_event(CMK_DETACH_EVENT, metadata, cmk_id)


def new_cmk_restore_event(metadata, cmk_id) -> Logs:
    """Build a CMK-restored event."""
    return _simple_event(CMK_RESTORE_EVENT, metadata, cmk_id)


def new_cmk_enable_event(metadata, cmk_id) -> Logs:
    """Build a CMK-enabled event."""
    return _simple_event(CMK_ENABLE_EVENT, metadata, cmk_id)


def new_cmk_disable_event(metadata, cmk_id) -> Logs:
    """Build a CMK-disabled event."""
    return _simple_event(CMK_DISABLE_EVENT, metadata, cmk_id)


def new_cmk_rotate_event(metadata, cmk_id) -> Logs:
    """Build a CMK-rotated event."""
    return _simple_event(CMK_ROTATE_EVENT, metadata, cmk_id)


def new_cmk_available_event(metadata, cmk_id) -> Logs:
    """Build a CMK-available event."""
    return _simple_event(CMK_AVAILABLE_EVENT, metadata, cmk_id)


def new_cmk_unavailable_event(metadata, cmk_id) -> Logs:
    """Build a CMK-unavailable event."""
    return _simple_event(CMK_UNAVAILABLE_EVENT, metadata, cmk_id)


def new_unauthorized_request_event(metadata, resource, action) -> Logs:
    """Build an unauthorized-request event keyed by the initiating user."""
    if USER_INITIATOR_ID_KEY not in metadata:
        raise EventCreationError()
    if not _has_values(resource, action):
        raise EventCreationError()

    properties = _new_event_properties(
        metadata[USER_INITIATOR_ID_KEY], UNAUTHORIZED_REQUEST_EVENT, metadata
    )
    properties[RESOURCE_KEY] = resource
    properties[ACTION_KEY] = action
    return _create_event(properties)


def new_unauthenticated_request_event(metadata) -> Logs:
    """Build an unauthenticated-request event keyed by the initiating user."""
    if USER_INITIATOR_ID_KEY not in metadata:
        raise EventCreationError()

    return _simple_event(
        UNAUTHENTICATED_REQUEST_EVENT, metadata, metadata[USER_INITIATOR_ID_KEY]
    )