"""Physical-plausibility checks for submitted presence events."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import as_finite_number
from ..company.model import CompanyPolicy
from ..core.constants import MAX_ACCURACY_METERS, SPOOF_EDGE_TOLERANCE_METERS, SPOOF_MAX_ACCURACY_METERS
from ..core.enums import ErrorCode, EventKind
from ..core.exceptions import PolicyRejection, ValidationError
from ..geo.distance import haversine_distance
from ..users.model import EmployeeProfile
from .model import EventSubmission, LocationCheck

logger = logging.getLogger(__name__)


class AttendanceEventValidator:
    """Decides whether a submitted event is plausible enough to record.

    Checks run in a fixed order and the first failure wins:
    kind, coordinates, photo, accuracy (``parse_submission``), then geofence
    and the spoofing heuristic (``check_location``). Office coordinates always
    come from the stored company policy, never from the request.
    """

    def __init__(self, *, max_accuracy_meters: float = MAX_ACCURACY_METERS):
        self._max_accuracy = float(max_accuracy_meters)

    def parse_submission(self, payload: Mapping[str, Any]) -> EventSubmission:
        if not isinstance(payload, Mapping):
            payload = {}

        raw_kind = payload.get("event_kind", payload.get("record_type"))
        try:
            kind = EventKind(raw_kind)
        except ValueError:
            raise ValidationError("Invalid record_type", code=ErrorCode.INVALID_TYPE)

        lat = as_finite_number(payload.get("latitude"))
        lng = as_finite_number(payload.get("longitude"))
        if lat is None or lng is None or not -90 <= lat <= 90 or not -180 <= lng <= 180:
            raise ValidationError("Invalid coordinates", code=ErrorCode.INVALID_COORDS)

        photo_ref = payload.get("photo_ref", payload.get("photo_url"))
        if not isinstance(photo_ref, str) or not photo_ref.strip():
            raise ValidationError("Photo is required", code=ErrorCode.NO_PHOTO)

        accuracy = as_finite_number(payload.get("accuracy_meters"))
        if accuracy is None or accuracy < 0:
            raise PolicyRejection("GPS accuracy was not reported. Try again outdoors.", code=ErrorCode.LOW_ACCURACY)
        if accuracy > self._max_accuracy:
            raise PolicyRejection(
                f"GPS accuracy too low ({round(accuracy)}m). Try again in an open area.",
                code=ErrorCode.LOW_ACCURACY,
                accuracy=round(accuracy),
                max_accuracy=round(self._max_accuracy),
            )

        return EventSubmission(
            event_kind=kind,
            latitude=lat,
            longitude=lng,
            accuracy_meters=accuracy,
            photo_ref=photo_ref.strip(),
        )

    def check_location(
        self,
        submission: EventSubmission,
        profile: EmployeeProfile,
        company: CompanyPolicy,
    ) -> LocationCheck:
        if not profile.requires_geofence:
            return LocationCheck()

        if not company.has_office_location:
            logger.warning(
                "Geofence required for user %s but company %s has no office location",
                profile.user_id,
                company.company_id,
            )
            return LocationCheck()

        distance = haversine_distance(
            submission.latitude,
            submission.longitude,
            company.office_latitude,
            company.office_longitude,
        )
        radius = company.radius_meters
        logger.debug("Distance to office for user %s: %.1fm (radius %sm)", profile.user_id, distance, radius)

        if distance > radius:
            logger.warning("Geofence violation: user %s is %sm from office", profile.user_id, round(distance))
            raise PolicyRejection(
                f"You are {round(distance)}m from the office. Maximum is {radius}m.",
                code=ErrorCode.OUTSIDE_GEOFENCE,
                distance=round(distance),
                max_distance=radius,
            )

        # Very precise fix sitting on the boundary: flag for review, do not block.
        suspected = (
            submission.accuracy_meters < SPOOF_MAX_ACCURACY_METERS
            and abs(distance - radius) < SPOOF_EDGE_TOLERANCE_METERS
        )
        if suspected:
            logger.warning("Suspicious location pattern detected for user %s", profile.user_id)

        return LocationCheck(distance_meters=distance, radius_meters=radius, suspected_mock=suspected)
