from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, DEFAULT_STANDARD_WORK_HOURS, DEFAULT_WORK_START


@dataclass(frozen=True)
class CompanyPolicy:
    """Domain entity: company-wide attendance and pay rules.

    Rates are whole currency units. A company without a stored row is
    evaluated with ``CompanyPolicy()`` defaults (zero rates, 08:00 start).
    """

    company_id: Optional[int] = None
    name: str = ""
    office_latitude: Optional[float] = None
    office_longitude: Optional[float] = None
    radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS
    grace_period_minutes: int = 0
    work_start_time: time = DEFAULT_WORK_START
    late_penalty_per_minute: int = 0
    early_leave_penalty_per_minute: int = 0
    overtime_rate_per_hour: int = 0
    overtime_start_after_minutes: int = 0
    standard_work_hours: float = DEFAULT_STANDARD_WORK_HOURS
    contribution_scheme: str = "default"
    tax_table: str = "progressive"

    @property
    def has_office_location(self) -> bool:
        return self.office_latitude is not None and self.office_longitude is not None
