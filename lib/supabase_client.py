# =============================================================================
# lib/supabase_client.py - Supabase Persistence
# =============================================================================
# Supabase-backed implementations of the persistence and notification
# interfaces used by the services:
# - SupabaseClient: singleton wrapper around the supabase-py client
# - SupabaseRepository: PromoRepository over the clients/packages/videos tables
# - SupabaseNotifier: Notifier that inserts into the notifications table
#
# Tables (snake_case columns matching the pydantic models):
#   clients(id, name, agency_name, is_frequent, created_at, updated_at)
#   packages(id, client_id, client_name, type, total_value,
#            juninho_commission, natalia_commission, engagement_cost,
#            pro_labore, net_profit, status, payment_status jsonb,
#            video_count, created_at, updated_at)
#   videos(id, package_id, video_number, status, created_at, updated_at)
#   notifications(recipient, title, message, severity, created_at)
#
# Usage:
#   from lib.supabase_client import SupabaseRepository
#   repository = SupabaseRepository()
#   package = repository.get_package(package_id)
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from supabase import create_client, Client as SupabaseSdkClient

from app.config import settings
from core.models.client import Client
from core.models.notification import Notification, NotificationSeverity
from core.models.package import Package, PackageStatus, PackageType, PaymentField
from core.models.video import Video, VideoStatus
from core.repositories.base import PromoRepository
from core.services.notification_service import Notifier

# Set up logging for this module
logger = logging.getLogger(__name__)

# Read-modify-write attempts for the payment_status checklist
PAYMENT_UPDATE_ATTEMPTS = 2


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Singleton holder for the supabase-py client.

    Uses the service_role key, which bypasses Row Level Security (RLS).
    This is appropriate for server-side operations.
    """

    _instance: SupabaseSdkClient | None = None

    @classmethod
    def get_client(cls) -> SupabaseSdkClient:
        """
        Get or create the singleton Supabase client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance


def _is_no_rows(error: Exception) -> bool:
    # PostgREST code for .single() matching no rows
    return "PGRST116" in str(error)


class SupabaseRepository(PromoRepository):
    """
    PromoRepository backed by Supabase tables.

    Every failure is wrapped in SupabaseClientError; nothing is retried here.
    """

    def __init__(self, client: SupabaseSdkClient | None = None):
        self._client = client

    @property
    def client(self) -> SupabaseSdkClient:
        if self._client is None:
            self._client = SupabaseClient.get_client()
        return self._client

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fetch_one(self, table: str, record_id: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(table)
                .select("*")
                .eq("id", record_id)
                .single()
                .execute()
            )
            return response.data
        except Exception as e:
            if _is_no_rows(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "id": record_id},
            )

    def _update(
        self,
        table: str,
        record_id: str,
        data: dict[str, Any],
        filters: dict[str, str] | None = None,
    ) -> dict[str, Any] | None:
        try:
            query = self.client.table(table).update(data).eq("id", record_id)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            response = query.execute()
            return response.data[0] if response.data else None
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": record_id, "fields": list(data)},
            )

    def _insert(self, table: str, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        try:
            response = self.client.table(table).insert(rows).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table, "rows": len(rows)},
            )
        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_NO_DATA",
            )
        return response.data

    # -------------------------------------------------------------------------
    # Clients
    # -------------------------------------------------------------------------

    def add_client(self, client: Client) -> Client:
        rows = self._insert("clients", [client.model_dump(mode="json")])
        logger.info(f"Created client: {client.id}")
        return Client.model_validate(rows[0])

    def get_client(self, client_id: str) -> Client | None:
        row = self._fetch_one("clients", client_id)
        return Client.model_validate(row) if row else None

    def list_clients(self) -> list[Client]:
        try:
            response = self.client.table("clients").select("*").order("name").execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list clients: {e}",
                code="LIST_CLIENTS_FAILED",
            )
        return [Client.model_validate(row) for row in response.data or []]

    def update_client(
        self,
        client_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Client | None:
        row = self._update(
            "clients",
            client_id,
            {**changes, "updated_at": updated_at.isoformat()},
        )
        return Client.model_validate(row) if row else None

    def delete_client(self, client_id: str) -> bool:
        try:
            response = self.client.table("clients").delete().eq("id", client_id).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete client: {e}",
                code="DELETE_CLIENT_FAILED",
                details={"client_id": client_id},
            )
        return bool(response.data)

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    def add_package(self, package: Package, videos: list[Video]) -> Package:
        rows = self._insert("packages", [package.model_dump(mode="json")])
        try:
            self._insert("videos", [video.model_dump(mode="json") for video in videos])
        except SupabaseClientError:
            # Drop the orphaned package so the pair is stored all-or-nothing
            logger.error(f"Video insert failed, removing package {package.id}")
            try:
                self.client.table("packages").delete().eq("id", package.id).execute()
            except Exception as e:
                logger.error(f"Failed to remove orphaned package {package.id}: {e}")
            raise
        logger.info(f"Created {package.type.value} {package.id} with {len(videos)} videos")
        return Package.model_validate(rows[0])

    def get_package(self, package_id: str) -> Package | None:
        row = self._fetch_one("packages", package_id)
        return Package.model_validate(row) if row else None

    def list_packages(
        self,
        type: PackageType | None = None,
        status: PackageStatus | None = None,
        client_id: str | None = None,
    ) -> list[Package]:
        query = self.client.table("packages").select("*")
        if type:
            query = query.eq("type", type.value)
        if status:
            query = query.eq("status", status.value)
        if client_id:
            query = query.eq("client_id", client_id)

        try:
            response = query.order("created_at", desc=True).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list packages: {e}",
                code="LIST_PACKAGES_FAILED",
            )
        return [Package.model_validate(row) for row in response.data or []]

    def update_package_status(
        self,
        package_id: str,
        status: PackageStatus,
        updated_at: datetime,
        expected: PackageStatus | None = None,
    ) -> Package | None:
        # The extra status filter turns the update into a compare-and-set
        row = self._update(
            "packages",
            package_id,
            {"status": status.value, "updated_at": updated_at.isoformat()},
            filters={"status": expected.value} if expected else None,
        )
        return Package.model_validate(row) if row else None

    def update_payment_flag(
        self,
        package_id: str,
        field: PaymentField,
        paid: bool,
        updated_at: datetime,
    ) -> Package | None:
        # payment_status is one jsonb column: write it back only if the row
        # is unchanged since the read, otherwise re-read and retry
        for _ in range(PAYMENT_UPDATE_ATTEMPTS):
            package = self.get_package(package_id)
            if package is None:
                return None
            payment_status = package.payment_status.model_copy(update={field.value: paid})
            row = self._update(
                "packages",
                package_id,
                {
                    "payment_status": payment_status.model_dump(),
                    "updated_at": updated_at.isoformat(),
                },
                filters={"updated_at": package.updated_at.isoformat()},
            )
            if row:
                return Package.model_validate(row)
            logger.warning(f"Package {package_id} changed during payment update, retrying")

        raise SupabaseClientError(
            message=f"Package {package_id} kept changing during the payment update",
            code="PAYMENT_UPDATE_CONFLICT",
            suggestion="Retry the request",
            details={"package_id": package_id, "field": field.value},
        )

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    def get_video(self, video_id: str) -> Video | None:
        row = self._fetch_one("videos", video_id)
        return Video.model_validate(row) if row else None

    def list_videos(self, package_id: str | None = None) -> list[Video]:
        query = self.client.table("videos").select("*")
        if package_id:
            query = query.eq("package_id", package_id)

        try:
            response = query.order("package_id").order("video_number").execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch videos: {e}",
                code="FETCH_VIDEOS_FAILED",
                details={"package_id": package_id},
            )
        return [Video.model_validate(row) for row in response.data or []]

    def update_video_status(
        self,
        video_id: str,
        status: VideoStatus,
        updated_at: datetime,
    ) -> Video | None:
        row = self._update(
            "videos",
            video_id,
            {"status": status.value, "updated_at": updated_at.isoformat()},
        )
        return Video.model_validate(row) if row else None


class SupabaseNotifier(Notifier):
    """Stores notifications in the `notifications` table for the dashboard to poll."""

    def __init__(self, client: SupabaseSdkClient | None = None):
        self._client = client

    def notify(
        self,
        recipient: str,
        title: str,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> None:
        client = self._client or SupabaseClient.get_client()
        notification = Notification(
            recipient=recipient,
            title=title,
            message=message,
            severity=severity,
        )
        try:
            client.table("notifications").insert(notification.model_dump(mode="json")).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert notification: {e}",
                code="INSERT_NOTIFICATION_FAILED",
                details={"recipient": recipient, "title": title},
            )
