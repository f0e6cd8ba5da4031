# =============================================================================
# core/models/video.py - Video Schemas
# =============================================================================
# Every package/post owns a fixed set of videos. Each video walks through
# a strictly linear workflow:
#
#   briefing_sent -> video_posted -> sent_to_group -> engaged
#
# Videos are created together with their package and never added or removed.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VideoStatus(str, Enum):
    """
    Workflow states of a promotional video, in order.

    - briefing_sent: Briefing delivered to the artist
    - video_posted: Video published on the agency channels
    - sent_to_group: Video shared in the engagement group
    - engaged: Engagement finished (terminal)
    """
    BRIEFING_SENT = "briefing_sent"
    VIDEO_POSTED = "video_posted"
    SENT_TO_GROUP = "sent_to_group"
    ENGAGED = "engaged"


# Display labels used by the dashboard
VIDEO_STATUS_LABELS = {
    VideoStatus.BRIEFING_SENT: "Briefing Enviado",
    VideoStatus.VIDEO_POSTED: "Vídeo Postado",
    VideoStatus.SENT_TO_GROUP: "Enviado no Grupo",
    VideoStatus.ENGAGED: "Vídeo Engajado",
}


class Video(BaseModel):
    """Stored video record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    package_id: str
    video_number: int = Field(..., ge=1, description="1-based position within the package")
    status: VideoStatus = VideoStatus.BRIEFING_SENT
    created_at: datetime
    updated_at: datetime


class VideoAdvanceRequest(BaseModel):
    """
    Request to move a video to its next workflow status.

    Example:
        {"status": "video_posted"}
    """

    status: VideoStatus = Field(..., description="The status the video should move to")
