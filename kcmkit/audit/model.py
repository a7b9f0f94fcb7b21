"""Audit event names, attribute keys, enumerations, errors and event metadata."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

DOMAIN = "audit-logger:otlp"

CONFIG_CREATE_EVENT = "configurationCreate"
CONFIG_READ_EVENT = "configurationRead"
CONFIG_UPDATE_EVENT = "configurationUpdate"
CONFIG_DELETE_EVENT = "configurationDelete"
GROUP_CREATE_EVENT = "groupCreate"
GROUP_READ_EVENT = "groupRead"
GROUP_UPDATE_EVENT = "groupUpdate"
GROUP_DELETE_EVENT = "groupDelete"
KEY_CREATE_EVENT = "keyCreate"
KEY_DELETE_EVENT = "keyDelete"
KEY_RESTORE_EVENT = "keyRestore"
KEY_PURGE_EVENT = "keyPurge"
KEY_ROTATE_EVENT = "keyRotate"
KEY_ENABLE_EVENT = "keyEnable"
KEY_DISABLE_EVENT = "keyDisable"
WORKFLOW_START_EVENT = "workflowStart"
WORKFLOW_UPDATE_EVENT = "workflowUpdate"
WORKFLOW_EXECUTE_EVENT = "workflowExecute"
WORKFLOW_TERMINATE_EVENT = "workflowTerminate"
USER_LOGIN_SUCCESS_EVENT = "userLoginSuccess"
USER_LOGIN_FAILURE_EVENT = "userLoginFailure"
TENANT_ONBOARDING_EVENT = "tenantOnboarding"
TENANT_OFFBOARDING_EVENT = "tenantOffboarding"
TENANT_UPDATE_EVENT = "tenantUpdate"
CREDENTIAL_EXPIRATION_EVENT = "credentialExpiration"
CREDENTIAL_CREATE_EVENT = "credentialCreate"
CREDENTIAL_REVOKATION_EVENT = "credentialRevokation"
CREDENTIAL_DELETE_EVENT = "credentialDelete"
CMK_ONBOARDING_EVENT = "cmkOnboarding"
CMK_OFFBOARDING_EVENT = "cmkOffboarding"
CMK_SWITCH_EVENT = "cmkSwitch"
CMK_TENANT_MODIFICATION_EVENT = "cmkTenantModification"
CMK_TENANT_DELETE_EVENT = "cmkTenantDelete"
CMK_CREATE_EVENT = "cmkCreate"
CMK_DELETE_EVENT = "cmkDelete"
CMK_DETACH_EVENT = "cmkDetach"
CMK_RESTORE_EVENT = "cmkRestore"
CMK_ENABLE_EVENT = "cmkEnable"
CMK_DISABLE_EVENT = "cmkDisable"
CMK_ROTATE_EVENT = "cmkRotate"
CMK_AVAILABLE_EVENT = "cmkAvailable"
CMK_UNAVAILABLE_EVENT = "cmkUnavailable"
UNAUTHORIZED_REQUEST_EVENT = "unauthorizedRequest"
UNAUTHENTICATED_REQUEST_EVENT = "unauthenticatedRequest"

EVENT_TYPE_KEY = "eventType"
OBJECT_ID_KEY = "objectID"
OBJECT_TYPE_KEY = "objectType"
ACTION_TYPE_KEY = "actionType"
CHANNEL_TYPE_KEY = "channelType"
CHANNEL_ID_KEY = "channelID"
LOGIN_METHOD_KEY = "loginMethod"
MFA_TYPE_KEY = "mfaType"
USER_TYPE_KEY = "userType"
FAILURE_REASON_KEY = "failureReason"
CREDENTIAL_TYPE_KEY = "credentialType"
VALUE_KEY = "value"
PROPERTY_NAME_KEY = "propertyName"
OLD_VALUE_KEY = "oldValue"
NEW_VALUE_KEY = "newValue"
DPP_KEY = "dpp"
USER_INITIATOR_ID_KEY = "userInitiatorID"
TENANT_ID_KEY = "tenantID"
EVENT_CORRELATION_ID_KEY = "eventCorrelationID"
SYSTEM_ID_KEY = "systemID"
CMK_ID_KEY = "cmkID"
CMK_ID_OLD_KEY = "cmkIDOld"
CMK_ID_NEW_KEY = "cmkIDNew"
RESOURCE_KEY = "resource"
ACTION_KEY = "action"

WORKFLOW_OBJECT_TYPE = "WORKFLOW"
GROUP_OBJECT_TYPE = "GROUP"
TENANT_OBJECT_TYPE = "TENANT"
CONFIG_OBJECT_TYPE = "L1L2"
CONFIG_PROPERTY_NAME = "SYSTEM_LINK"

UNSPECIFIED = "UNSPECIFIED"

EventMetadata = Dict[str, str]


class AuditError(Exception):
    """Base class of the errors raised while building or sending audit events."""

    domain = DOMAIN
    default_message = "audit operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EventCreationError(AuditError):
    """An audit event could not be built from the given values."""

    default_message = "event creation failed"


class NoLogRecordError(AuditError):
    """A log batch holds no record to work on."""

    default_message = "no log record present in the logs"


class AuditEnum(str, Enum):
    """String enumeration whose validity check also accepts plain strings."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _allows_empty(cls) -> bool:
        return True

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Report whether ``value`` is one of the members (or empty, where allowed)."""
        if isinstance(value, cls):
            return True
        if not isinstance(value, str):
            return False
        if value == "":
            return cls._allows_empty()
        return value in cls._value2member_map_


class KeyType(AuditEnum):
    SYSTEM = "SYSTEM"
    SERVICE = "SERVICE"
    DATA = "DATA"
    KEK = "KEK"


class TenantUpdateActionType(AuditEnum):
    TEST_MODE = "TEST_MODE"
    WORKFLOW_ENABLE = "WORKFLOW_ENABLE"
    WORKFLOW_DISABLE = "WORKFLOW_DISABLE"

    @classmethod
    def _allows_empty(cls) -> bool:
        return False


class LoginMethod(AuditEnum):
    OPEN_ID_CONNECT = "OPEN_ID_CONNECT"
    X509_CERT = "X509_CERTIFICATE"


class MfaType(AuditEnum):
    WEB_AUTHN = "WEB_AUTHN"
    NONE = "NONE"


class UserType(AuditEnum):
    BUSINESS = "BUSINESS_USER"
    TECHNICAL = "TECHNICAL_USER"


class FailReason(AuditEnum):
    PASSWORD = "PASSWORD"
    MFA_FAIL = "MFA_FAILED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_LOCKED = "USER_LOCKED"
    USER_BLOCKED = "USER_BLOCKED"
    USER_UNVERIFIED = "USER_UNVERIFIED"
    USER_EXPIRED = "USER_EXPIRED"
    USER_INVALID = "USER_INVALID"
    INSECURE_CONNECT = "INSECURE_CONNECTION"
    METHOD_DISABLED = "LOGIN_METHOD_DISABLED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_REVOKED = "TOKEN_REVOKED"
    TOKEN_INVALID = "TOKEN_INVALID"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    SESSION_REVOKED = "SESSION_REVOKED"
    CERT_EXPIRED = "CERTIFICATE_EXPIRED"
    CERT_REVOKED = "CERTIFICATE_REVOKED"
    CERT_INVALID = "CERTIFICATE_INVALID"


class CredentialType(AuditEnum):
    X509_CERT = "X509_CERTIFICATE"
    KEY = "KEY"
    SECRET = "SECRET"


class CmkAction(AuditEnum):
    ONBOARD = "ONBOARD"
    BLOCK = "BLOCK"
    SHUTDOWN = "SHUTDOWN"
    CSEK_FALLBACK = "CSEKFALLBACK"
    RESTORE = "RESTORE"


def _is_zero_value(value: Any) -> bool:
    """Report whether ``value`` is absent or the empty value of its scalar type."""
    if value is None:
        return True
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (str, bytes, bool, int, float, complex)):
        return not value
    return False


def _has_values(*values: Any) -> bool:
    """Report whether none of ``values`` is a zero value."""
    return not any(_is_zero_value(value) for value in values)


def _properties_have_values(properties: Mapping[str, Any], *keys: str) -> bool:
    """Report whether every key is present in ``properties`` with a non-zero value."""
    return all(key in properties and not _is_zero_value(properties[key]) for key in keys)


def _new_event_properties(
    object_id: str, event_type: str, metadata: Mapping[str, str]
) -> dict[str, Any]:
    """Build the properties shared by every audit event."""
    return {
        OBJECT_ID_KEY: object_id,
        EVENT_TYPE_KEY: event_type,
        USER_INITIATOR_ID_KEY: metadata.get(USER_INITIATOR_ID_KEY, ""),
        TENANT_ID_KEY: metadata.get(TENANT_ID_KEY, ""),
        EVENT_CORRELATION_ID_KEY: metadata.get(EVENT_CORRELATION_ID_KEY, ""),
    }


def new_event_metadata(
    user_initiator_id: str, tenant_id: str, event_correlation_id: str
) -> EventMetadata:
    """Return the metadata every event carries; initiator and tenant are required."""
    if not user_initiator_id or not tenant_id:
        raise EventCreationError()

    return {
        USER_INITIATOR_ID_KEY: user_initiator_id,
        TENANT_ID_KEY: tenant_id,
        EVENT_CORRELATION_ID_KEY: event_correlation_id,
    }