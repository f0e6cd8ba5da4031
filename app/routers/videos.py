# =============================================================================
# app/routers/videos.py - Video Workflow Endpoints
# =============================================================================
# Moves videos through briefing_sent -> video_posted -> sent_to_group ->
# engaged. The workflow service checks order and role; the package is
# completed automatically when its last video is engaged.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user
from app.dependencies import PackageServiceDep, WorkflowDep
from core.models.user import Requester
from core.models.video import VideoAdvanceRequest

router = APIRouter()


@router.post("/{video_id}/advance")
async def advance_video(
    video_id: Annotated[str, Path(description="Video ID")],
    request: VideoAdvanceRequest,
    workflow: WorkflowDep,
    packages: PackageServiceDep,
    user: Requester = Depends(get_current_user),
):
    """
    Move a video to its next workflow status.

    Returns the updated video and the (possibly completed) package status.
    """
    video = workflow.advance(video_id, request.status, user)
    package = packages.get_package(video.package_id)

    return {
        "video": video,
        "package_id": package.id,
        "package_status": package.status,
    }
