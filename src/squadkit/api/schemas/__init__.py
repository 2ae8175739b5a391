"""Pydantic models for API I/O."""

from .availability import (
    AvailabilityResponse,
    AvailabilitySummaryResponse,
    AvailabilityUpdateRequest,
    NotificationResponse,
)
from .formation import (
    FormationMapRequest,
    FormationMapResponse,
    FormationResponse,
    PositionAssignmentResponse,
)
from .split import (
    CreatedTeamResponse,
    NewTeamPayload,
    SplitPreviewResponse,
    SplitRequest,
    SplitResponse,
    SplitTeamPreview,
)
from .squad import CaptainRequest, ConflictsResponse, SquadAddRequest, SquadResponse

__all__ = [
    "AvailabilityResponse",
    "AvailabilitySummaryResponse",
    "AvailabilityUpdateRequest",
    "CaptainRequest",
    "ConflictsResponse",
    "CreatedTeamResponse",
    "FormationMapRequest",
    "FormationMapResponse",
    "FormationResponse",
    "NewTeamPayload",
    "NotificationResponse",
    "PositionAssignmentResponse",
    "SplitPreviewResponse",
    "SplitRequest",
    "SplitResponse",
    "SplitTeamPreview",
    "SquadAddRequest",
    "SquadResponse",
]
