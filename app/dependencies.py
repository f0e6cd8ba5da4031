# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The repository and notifier are chosen from settings.STORAGE_BACKEND and
# shared by every request; services are thin wrappers around them.
# Tests swap them with app.dependency_overrides.
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.repositories.base import PromoRepository
from core.repositories.memory import InMemoryRepository
from core.services.client_service import ClientService
from core.services.engagement_workflow import EngagementWorkflow
from core.services.notification_service import LoggingNotifier, Notifier
from core.services.package_service import PackageService
from core.services.report_service import ReportService

logger = logging.getLogger(__name__)


@lru_cache
def get_repository() -> PromoRepository:
    """
    Get the process-wide repository.

    Returns the Supabase repository when STORAGE_BACKEND=supabase,
    otherwise an in-memory store.
    """
    if settings.STORAGE_BACKEND == "supabase":
        from lib.supabase_client import SupabaseRepository

        logger.info("Using Supabase storage backend")
        return SupabaseRepository()

    logger.info("Using in-memory storage backend")
    return InMemoryRepository()


@lru_cache
def get_notifier() -> Notifier:
    if settings.STORAGE_BACKEND == "supabase":
        from lib.supabase_client import SupabaseNotifier

        return SupabaseNotifier()
    return LoggingNotifier()


@lru_cache
def get_workflow() -> EngagementWorkflow:
    # Shared so the per-package locks are shared too
    return EngagementWorkflow(
        get_repository(),
        get_notifier(),
        video_posted_recipient=settings.VIDEO_POSTED_RECIPIENT,
        completion_recipient=settings.COMPLETION_RECIPIENT,
    )


def get_package_service(
    repository: Annotated[PromoRepository, Depends(get_repository)],
) -> PackageService:
    return PackageService(repository)


def get_client_service(
    repository: Annotated[PromoRepository, Depends(get_repository)],
) -> ClientService:
    return ClientService(repository)


def get_report_service(
    repository: Annotated[PromoRepository, Depends(get_repository)],
) -> ReportService:
    return ReportService(repository)


# Type aliases for dependency injection
PackageServiceDep = Annotated[PackageService, Depends(get_package_service)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
WorkflowDep = Annotated[EngagementWorkflow, Depends(get_workflow)]
