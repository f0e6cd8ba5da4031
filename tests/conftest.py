# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds services on a fresh in-memory repository for every test
# - Provides one requester per dashboard role
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.models.package import PackageCreate, PackageType
from core.models.user import Requester, UserRole
from core.repositories.memory import InMemoryRepository
from core.services.client_service import ClientService
from core.services.engagement_workflow import EngagementWorkflow
from core.services.notification_service import RecordingNotifier
from core.services.package_service import PackageService
from core.services.report_service import ReportService


# =============================================================================
# Requesters
# =============================================================================

@pytest.fixture
def admin():
    return Requester(id="user-admin", role=UserRole.ADMIN, email="admin@ritmohub.test")


@pytest.fixture
def video_manager():
    return Requester(id="user-video", role=UserRole.VIDEO_MANAGER)


@pytest.fixture
def financial_user():
    return Requester(id="user-finance", role=UserRole.FINANCIAL)


@pytest.fixture
def no_role_user():
    """Authenticated user without a dashboard role."""
    return Requester(id="user-guest")


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def workflow(repository, notifier):
    return EngagementWorkflow(
        repository,
        notifier,
        video_posted_recipient="2",
        completion_recipient="admin",
    )


@pytest.fixture
def package_service(repository):
    return PackageService(repository)


@pytest.fixture
def client_service(repository):
    return ClientService(repository)


@pytest.fixture
def report_service(repository):
    return ReportService(repository)


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def make_package(package_service, admin):
    """Factory creating a package or post through the service."""

    def _make(
        total_value="1000",
        type=PackageType.PACKAGE,
        client_name="MC Ritmo",
        **kwargs,
    ):
        return package_service.create_package(
            PackageCreate(
                client_name=client_name,
                type=type,
                total_value=total_value,
                **kwargs,
            ),
            admin,
        )

    return _make


@pytest.fixture
def engage_video(workflow, admin):
    """Walk a single video all the way to 'engaged' as admin."""
    from core.models.video import VideoStatus

    def _engage(video_id):
        for status in (
            VideoStatus.VIDEO_POSTED,
            VideoStatus.SENT_TO_GROUP,
            VideoStatus.ENGAGED,
        ):
            video = workflow.advance(video_id, status, admin)
        return video

    return _engage
