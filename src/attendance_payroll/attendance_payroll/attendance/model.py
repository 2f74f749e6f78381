from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.constants import SUSPECTED_MOCK_NOTE
from ..core.enums import EventKind


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one accepted presence event (append-only)."""

    record_id: int
    user_id: int
    event_kind: EventKind
    recorded_at: datetime
    latitude: float
    longitude: float
    accuracy_meters: float
    photo_ref: str
    notes: Optional[str] = None

    @property
    def suspected_mock(self) -> bool:
        return self.notes == SUSPECTED_MOCK_NOTE

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "record_type": self.event_kind.value,
            "recorded_at": self.recorded_at.isoformat(),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy_meters": self.accuracy_meters,
            "photo_ref": self.photo_ref,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class EventSubmission:
    """A presence event payload that passed boundary validation."""

    event_kind: EventKind
    latitude: float
    longitude: float
    accuracy_meters: float
    photo_ref: str


@dataclass(frozen=True)
class LocationCheck:
    """Outcome of the geofence and spoofing checks for an accepted event."""

    distance_meters: Optional[float] = None
    radius_meters: Optional[int] = None
    suspected_mock: bool = False

    @property
    def note(self) -> Optional[str]:
        return SUSPECTED_MOCK_NOTE if self.suspected_mock else None
