from isdapresyo.domain.enums.audit import AuditEventType
from isdapresyo.domain.enums.mode import StoreMode

__all__ = ["AuditEventType", "StoreMode"]
