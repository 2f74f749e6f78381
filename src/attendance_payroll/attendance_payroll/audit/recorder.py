from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.constants import DEFAULT_AUDIT_LIMIT, MAX_AUDIT_LIMIT
from .model import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Best-effort append-only audit sink.

    ``record`` never raises: a failed write is logged at ERROR level for
    operations monitoring and the caller's primary operation proceeds.
    """

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def record(
        self,
        *,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        request_meta: Optional[dict[str, Any]] = None,
    ) -> bool:
        meta = request_meta or {}
        try:
            self._audit.append(
                actor_id=int(actor_id),
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                details=dict(details or {}),
                ip_address=meta.get("ip_address"),
                user_agent=meta.get("user_agent"),
            )
        except Exception:
            logger.exception(
                "Audit write failed: action=%s resource=%s/%s actor=%s",
                action,
                resource_type,
                resource_id,
                actor_id,
            )
            return False
        return True

    def list_recent(self, *, action: Optional[str] = None, limit: int = DEFAULT_AUDIT_LIMIT) -> Sequence[AuditEntry]:
        limit = max(1, min(int(limit), MAX_AUDIT_LIMIT))
        return self._audit.list_recent(action=action or None, limit=limit)
