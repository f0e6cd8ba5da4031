# =============================================================================
# core/services/notification_service.py - Notification Delivery
# =============================================================================
# The workflow announces events (video posted, package completed) through a
# Notifier. Delivery is fire-and-forget: the workflow never waits for an
# acknowledgement and a failing notifier never fails a transition.
#
# Implementations:
# - LoggingNotifier: writes notifications to the log
# - RecordingNotifier: keeps them in memory (tests, in-memory backend)
# - SupabaseNotifier (lib/supabase_client.py): inserts into `notifications`
# =============================================================================

import logging
import threading
from abc import ABC, abstractmethod

from core.models.notification import Notification, NotificationSeverity

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Sends a notification to a user ID or a role."""

    @abstractmethod
    def notify(
        self,
        recipient: str,
        title: str,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> None:
        ...


class LoggingNotifier(Notifier):
    def notify(
        self,
        recipient: str,
        title: str,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> None:
        logger.info(f"[notify:{severity.value}] to={recipient} {title}: {message}")


class RecordingNotifier(Notifier):
    """Keeps every notification so it can be listed or asserted on."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.sent: list[Notification] = []

    def notify(
        self,
        recipient: str,
        title: str,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> None:
        notification = Notification(
            recipient=recipient,
            title=title,
            message=message,
            severity=severity,
        )
        with self._lock:
            self.sent.append(notification)
        logger.debug(f"Recorded notification for {recipient}: {title}")

    def for_recipient(self, recipient: str) -> list[Notification]:
        with self._lock:
            return [n for n in self.sent if n.recipient == recipient]


def send_quietly(
    notifier: Notifier,
    recipient: str,
    title: str,
    message: str,
    severity: NotificationSeverity = NotificationSeverity.INFO,
) -> None:
    """
    Deliver a notification without letting delivery errors escape.

    Notifications are a side channel; a broken notifier is logged and
    the caller's operation carries on.
    """
    try:
        notifier.notify(recipient, title, message, severity)
    except Exception as e:
        logger.error(f"Failed to deliver notification '{title}' to {recipient}: {e}")
