# =============================================================================
# core/repositories/memory.py - In-Process Repository
# =============================================================================
# Dict-backed PromoRepository used in development and tests.
# Records are copied on the way in and out so callers can never mutate
# stored state by holding on to a returned object.
# =============================================================================

import logging
import threading
from datetime import datetime
from typing import Any

from core.models.client import Client
from core.models.package import Package, PackageStatus, PackageType, PaymentField
from core.models.video import Video, VideoStatus
from core.repositories.base import PromoRepository

logger = logging.getLogger(__name__)


class InMemoryRepository(PromoRepository):
    """Thread-safe in-memory store."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._clients: dict[str, Client] = {}
        self._packages: dict[str, Package] = {}
        self._videos: dict[str, Video] = {}

    # -------------------------------------------------------------------------
    # Clients
    # -------------------------------------------------------------------------

    def add_client(self, client: Client) -> Client:
        with self._lock:
            self._clients[client.id] = client.model_copy(deep=True)
            return client.model_copy(deep=True)

    def get_client(self, client_id: str) -> Client | None:
        with self._lock:
            client = self._clients.get(client_id)
            return client.model_copy(deep=True) if client else None

    def list_clients(self) -> list[Client]:
        with self._lock:
            clients = sorted(self._clients.values(), key=lambda c: c.name.lower())
            return [c.model_copy(deep=True) for c in clients]

    def update_client(
        self,
        client_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Client | None:
        with self._lock:
            client = self._clients.get(client_id)
            if client is None:
                return None
            updated = client.model_copy(update={**changes, "updated_at": updated_at})
            self._clients[client_id] = updated
            return updated.model_copy(deep=True)

    def delete_client(self, client_id: str) -> bool:
        with self._lock:
            return self._clients.pop(client_id, None) is not None

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    def add_package(self, package: Package, videos: list[Video]) -> Package:
        with self._lock:
            self._packages[package.id] = package.model_copy(deep=True)
            for video in videos:
                self._videos[video.id] = video.model_copy(deep=True)
            logger.debug(f"Stored package {package.id} with {len(videos)} videos")
            return package.model_copy(deep=True)

    def get_package(self, package_id: str) -> Package | None:
        with self._lock:
            package = self._packages.get(package_id)
            return package.model_copy(deep=True) if package else None

    def list_packages(
        self,
        type: PackageType | None = None,
        status: PackageStatus | None = None,
        client_id: str | None = None,
    ) -> list[Package]:
        with self._lock:
            packages = [
                p for p in self._packages.values()
                if (type is None or p.type == type)
                and (status is None or p.status == status)
                and (client_id is None or p.client_id == client_id)
            ]
            packages.sort(key=lambda p: p.created_at, reverse=True)
            return [p.model_copy(deep=True) for p in packages]

    def update_package_status(
        self,
        package_id: str,
        status: PackageStatus,
        updated_at: datetime,
        expected: PackageStatus | None = None,
    ) -> Package | None:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return None
            if expected is not None and package.status != expected:
                return None
            updated = package.model_copy(update={"status": status, "updated_at": updated_at})
            self._packages[package_id] = updated
            return updated.model_copy(deep=True)

    def update_payment_flag(
        self,
        package_id: str,
        field: PaymentField,
        paid: bool,
        updated_at: datetime,
    ) -> Package | None:
        with self._lock:
            package = self._packages.get(package_id)
            if package is None:
                return None
            payment_status = package.payment_status.model_copy(update={field.value: paid})
            updated = package.model_copy(
                update={"payment_status": payment_status, "updated_at": updated_at}
            )
            self._packages[package_id] = updated
            return updated.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    def get_video(self, video_id: str) -> Video | None:
        with self._lock:
            video = self._videos.get(video_id)
            return video.model_copy(deep=True) if video else None

    def list_videos(self, package_id: str | None = None) -> list[Video]:
        with self._lock:
            videos = [
                v for v in self._videos.values()
                if package_id is None or v.package_id == package_id
            ]
            videos.sort(key=lambda v: (v.package_id, v.video_number))
            return [v.model_copy(deep=True) for v in videos]

    def update_video_status(
        self,
        video_id: str,
        status: VideoStatus,
        updated_at: datetime,
    ) -> Video | None:
        with self._lock:
            video = self._videos.get(video_id)
            if video is None:
                return None
            updated = video.model_copy(update={"status": status, "updated_at": updated_at})
            self._videos[video_id] = updated
            return updated.model_copy(deep=True)
