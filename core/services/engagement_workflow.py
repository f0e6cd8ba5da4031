# =============================================================================
# core/services/engagement_workflow.py - Video Workflow and Package Completion
# =============================================================================
# Drives each video through its linear workflow and promotes the owning
# package to "completed" once every video is engaged.
#
#   | Current        | Next           | Who may trigger         |
#   |----------------|----------------|-------------------------|
#   | briefing_sent  | video_posted   | admin                   |
#   | video_posted   | sent_to_group  | admin, video_manager    |
#   | sent_to_group  | engaged        | admin                   |
#   | engaged        | (terminal)     | -                       |
#
# Transitions and completion checks for the same package are serialized
# with a per-package lock, and the completion write is a compare-and-set on
# the package status, so completion fires exactly once.
#
# Only the workflow takes the package lock. Plain reads (PackageService,
# the package and video endpoints) may briefly see the last video engaged
# while its package is still active, until the completion write lands.
# =============================================================================

import logging
import threading

from app.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.models.notification import NotificationSeverity
from core.models.package import PACKAGE_TYPE_LABELS, PackageStatus
from core.models.user import Requester, UserRole
from core.models.video import VIDEO_STATUS_LABELS, Video, VideoStatus
from core.repositories.base import PromoRepository
from core.services.notification_service import Notifier, send_quietly
from lib.utils import utc_now

logger = logging.getLogger(__name__)


# Workflow order; each status maps to the only status it may move to
VIDEO_WORKFLOW: dict[VideoStatus, VideoStatus | None] = {
    VideoStatus.BRIEFING_SENT: VideoStatus.VIDEO_POSTED,
    VideoStatus.VIDEO_POSTED: VideoStatus.SENT_TO_GROUP,
    VideoStatus.SENT_TO_GROUP: VideoStatus.ENGAGED,
    VideoStatus.ENGAGED: None,
}


def next_status(status: VideoStatus | str) -> VideoStatus | None:
    """Return the status that follows `status`, or None if it is terminal."""
    return VIDEO_WORKFLOW[VideoStatus(status)]


def authorize_transition(requester: Requester, current_status: VideoStatus) -> None:
    """
    Check that the requester may move a video out of `current_status`.

    Admins may perform any step. Video managers may only perform the
    video_posted -> sent_to_group step. Everyone else is rejected.

    Raises:
        PermissionDeniedError: If the role is not allowed
    """
    if requester.has_role(UserRole.ADMIN):
        return
    if requester.has_role(UserRole.VIDEO_MANAGER) and current_status == VideoStatus.VIDEO_POSTED:
        return

    logger.warning(
        f"Denied video transition from '{current_status.value}' "
        f"for user {requester.id} (role={requester.role_name})"
    )
    raise PermissionDeniedError(
        requester.role_name,
        f"advance a video from '{current_status.value}'",
    )


class EngagementWorkflow:
    """
    Video status state machine plus the package completion rule.

    Example:
        workflow = EngagementWorkflow(repository, notifier)
        video = workflow.advance(video_id, VideoStatus.VIDEO_POSTED, admin)
    """

    def __init__(
        self,
        repository: PromoRepository,
        notifier: Notifier,
        video_posted_recipient: str = "2",
        completion_recipient: str = "admin",
    ):
        self.repository = repository
        self.notifier = notifier
        self.video_posted_recipient = video_posted_recipient
        self.completion_recipient = completion_recipient
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def _package_lock(self, package_id: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(package_id)
            if lock is None:
                lock = self._locks[package_id] = threading.RLock()
            return lock

    # -------------------------------------------------------------------------
    # Video Transitions
    # -------------------------------------------------------------------------

    def advance(
        self,
        video_id: str,
        requested_status: VideoStatus | str,
        requester: Requester,
    ) -> Video:
        """
        Move a video to its next workflow status.

        Args:
            video_id: The video to advance
            requested_status: Must equal the next status of the video
            requester: Current user; their role is checked before any write

        Returns:
            The updated video

        Raises:
            ValidationError: If requested_status is not a workflow status
            NotFoundError: If the video or its package doesn't exist
            PermissionDeniedError: If the role may not perform this step
            InvalidTransitionError: If the step is out of order or the video
                is already engaged
        """
        try:
            requested = VideoStatus(requested_status)
        except ValueError:
            raise ValidationError(
                f"Unknown video status: {requested_status!r}",
                field="status",
                suggestion=f"Use one of: {', '.join(s.value for s in VideoStatus)}",
            )

        video = self.repository.get_video(video_id)
        if video is None:
            raise NotFoundError("video", video_id)

        with self._package_lock(video.package_id):
            # Re-read under the lock so the decision uses the latest status
            video = self.repository.get_video(video_id)
            if video is None:
                raise NotFoundError("video", video_id)

            authorize_transition(requester, video.status)

            expected = next_status(video.status)
            if expected is None or requested != expected:
                raise InvalidTransitionError(
                    current_status=video.status.value,
                    requested_status=requested.value,
                    expected_status=expected.value if expected else None,
                )

            previous_status = video.status
            previous_updated_at = video.updated_at

            updated = self.repository.update_video_status(video_id, requested, utc_now())
            if updated is None:
                raise NotFoundError("video", video_id)

            try:
                self._complete_if_done(video.package_id)
            except Exception as e:
                # Keep video and package consistent: undo the video write
                logger.error(
                    f"Completion check failed for package {video.package_id}, "
                    f"restoring video {video_id} to '{previous_status.value}': {e}"
                )
                self.repository.update_video_status(
                    video_id, previous_status, previous_updated_at
                )
                raise

        logger.info(
            f"Video {video_id} ({updated.video_number}) moved "
            f"'{previous_status.value}' -> '{requested.value}' by {requester.id}"
        )

        if requested == VideoStatus.VIDEO_POSTED:
            self._announce_video_posted(updated)

        return updated

    def _announce_video_posted(self, video: Video) -> None:
        package = self.repository.get_package(video.package_id)
        client_name = package.client_name if package else video.package_id
        send_quietly(
            self.notifier,
            self.video_posted_recipient,
            VIDEO_STATUS_LABELS[VideoStatus.VIDEO_POSTED],
            f"Vídeo {video.video_number} do pacote {client_name} foi postado. "
            "Aguardando envio para o grupo.",
            NotificationSeverity.INFO,
        )

    # -------------------------------------------------------------------------
    # Package Completion
    # -------------------------------------------------------------------------

    def check_package_completion(self, package_id: str) -> bool:
        """
        Complete the package if every one of its videos is engaged.

        Idempotent: a package that is already completed or cancelled is left
        alone and no notification is sent. A package without videos is never
        completed.

        Returns:
            True if this call moved the package to "completed"

        Raises:
            NotFoundError: If the package doesn't exist
        """
        with self._package_lock(package_id):
            return self._complete_if_done(package_id)

    def _complete_if_done(self, package_id: str) -> bool:
        package = self.repository.get_package(package_id)
        if package is None:
            raise NotFoundError("package", package_id)

        if package.status != PackageStatus.ACTIVE:
            return False

        videos = self.repository.list_videos(package_id)
        if not videos:
            return False
        if any(v.status != VideoStatus.ENGAGED for v in videos):
            return False

        completed = self.repository.update_package_status(
            package_id,
            PackageStatus.COMPLETED,
            utc_now(),
            expected=PackageStatus.ACTIVE,
        )
        if completed is None:
            # Another writer changed the status first
            return False

        logger.info(f"Package {package_id} completed ({len(videos)} videos engaged)")
        send_quietly(
            self.notifier,
            self.completion_recipient,
            f"{PACKAGE_TYPE_LABELS[completed.type]} Concluído",
            f"Todos os vídeos de {completed.client_name} foram engajados.",
            NotificationSeverity.SUCCESS,
        )
        return True
