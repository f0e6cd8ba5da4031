# =============================================================================
# core/models/notification.py - Notification Schemas
# =============================================================================

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class NotificationSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """
    A message addressed to a user ID or a role.

    Example:
        {
            "recipient": "2",
            "title": "Vídeo Postado",
            "message": "Vídeo 3 do pacote MC Ritmo foi postado.",
            "severity": "info"
        }
    """

    recipient: str
    title: str
    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
