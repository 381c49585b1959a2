"""Append-only JSON-lines audit log for auth events. Best effort only."""

import asyncio
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from isdapresyo.domain.enums import AuditEventType

logger = logging.getLogger(__name__)


class AuditLog:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def emit(
        self,
        event_type: AuditEventType | str,
        ip: Optional[str] = None,
        path: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        """Append one event from a worker thread, keeping file I/O off the event loop."""
        await asyncio.to_thread(self.record, event_type, ip, path, detail)

    def record(
        self,
        event_type: AuditEventType | str,
        ip: Optional[str] = None,
        path: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        """Append one event. Never raises: a failed write must not change the response."""
        event = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "type": event_type.value if isinstance(event_type, AuditEventType) else event_type,
            "ip": ip,
            "path": path,
        }
        if detail is not None:
            event["detail"] = detail
        try:
            line = json.dumps(event)
            with self._lock:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as fh:
                    fh.write(line + "\n")
        except Exception:
            logger.debug("Audit write to %s failed", self._path, exc_info=True)
