from enum import Enum


class AuditEventType(str, Enum):
    """Security-relevant events written to the audit sink."""

    AUTH_MISSING = "auth_missing"
    AUTH_INVALID_TOKEN = "auth_invalid_token"
    AUTH_INVALID_ROLE = "auth_invalid_role"
    LOGIN_FAILED = "login_failed"
    LOGIN_FAILED_DEMO = "login_failed_demo"
