# =============================================================================
# core/repositories/base.py - Persistence Interface
# =============================================================================
# The services never talk to a database directly. They receive a
# PromoRepository and call the operations below, so the same business code
# runs against the in-memory store (tests, demos) or Supabase.
#
# Implementations:
# - core/repositories/memory.py: InMemoryRepository
# - lib/supabase_client.py: SupabaseRepository
# =============================================================================

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from core.models.client import Client
from core.models.package import Package, PackageStatus, PackageType, PaymentField
from core.models.video import Video, VideoStatus


class PromoRepository(ABC):
    """
    Storage operations for clients, packages and videos.

    Lookups return None when the record doesn't exist; raising NotFoundError
    is the services' job. Updates return the stored record after the change.
    """

    # -------------------------------------------------------------------------
    # Clients
    # -------------------------------------------------------------------------

    @abstractmethod
    def add_client(self, client: Client) -> Client:
        ...

    @abstractmethod
    def get_client(self, client_id: str) -> Client | None:
        ...

    @abstractmethod
    def list_clients(self) -> list[Client]:
        ...

    @abstractmethod
    def update_client(
        self,
        client_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Client | None:
        ...

    @abstractmethod
    def delete_client(self, client_id: str) -> bool:
        ...

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    @abstractmethod
    def add_package(self, package: Package, videos: list[Video]) -> Package:
        """
        Persist a package together with all of its videos.

        Either everything is stored or nothing is.
        """

    @abstractmethod
    def get_package(self, package_id: str) -> Package | None:
        ...

    @abstractmethod
    def list_packages(
        self,
        type: PackageType | None = None,
        status: PackageStatus | None = None,
        client_id: str | None = None,
    ) -> list[Package]:
        ...

    @abstractmethod
    def update_package_status(
        self,
        package_id: str,
        status: PackageStatus,
        updated_at: datetime,
        expected: PackageStatus | None = None,
    ) -> Package | None:
        """
        Set the package status.

        When `expected` is given this is a compare-and-set: the write only
        happens if the stored status equals `expected`, otherwise None is
        returned and nothing changes.
        """

    @abstractmethod
    def update_payment_flag(
        self,
        package_id: str,
        field: PaymentField,
        paid: bool,
        updated_at: datetime,
    ) -> Package | None:
        ...

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_video(self, video_id: str) -> Video | None:
        ...

    @abstractmethod
    def list_videos(self, package_id: str | None = None) -> list[Video]:
        """Videos of one package ordered by video_number, or every video."""

    @abstractmethod
    def update_video_status(
        self,
        video_id: str,
        status: VideoStatus,
        updated_at: datetime,
    ) -> Video | None:
        ...
