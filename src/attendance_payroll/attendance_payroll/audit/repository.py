from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import AuditEntry


class AuditRepository(Protocol):
    """Append-only store: entries are inserted, never updated or deleted."""

    def append(
        self,
        *,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: Optional[str],
        details: dict[str, Any],
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> int:
        raise NotImplementedError

    def list_recent(self, *, action: Optional[str] = None, limit: int = 100) -> Sequence[AuditEntry]:
        raise NotImplementedError
