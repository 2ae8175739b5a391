from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from squadkit.models import AvailabilityRecord, AvailabilityRole, AvailabilityStatus


class AvailabilityUpdateRequest(BaseModel):
    user_id: str
    role: AvailabilityRole = "player"
    status: AvailabilityStatus


class AvailabilitySummaryResponse(BaseModel):
    available: int
    unavailable: int
    pending: int
    no_response: int
    total: int


class AvailabilityResponse(BaseModel):
    event_id: str
    records: List[AvailabilityRecord]
    users: Dict[str, AvailabilityStatus]
    players: Dict[str, AvailabilityStatus]
    summary: AvailabilitySummaryResponse


class NotificationResponse(BaseModel):
    event_id: str
    sent: bool
    message: str
