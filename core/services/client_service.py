# =============================================================================
# core/services/client_service.py - Client Business Logic
# =============================================================================
# Handles client CRUD operations and per-client revenue.
# Packages keep a snapshot of the client name, so deleting a client leaves
# its packages readable.
# =============================================================================

import logging
from decimal import Decimal

from app.exceptions import NotFoundError
from core.models.client import Client, ClientCreate, ClientUpdate
from core.models.package import Package
from core.models.user import Requester
from core.repositories.base import PromoRepository
from core.services.permissions import MANAGEMENT_ROLES, require_role
from lib.utils import new_id, utc_now

logger = logging.getLogger(__name__)

NULLABLE_CLIENT_FIELDS = {"agency_name"}


class ClientService:
    """Service for client management operations."""

    def __init__(self, repository: PromoRepository):
        self.repository = repository

    def create_client(self, data: ClientCreate) -> Client:
        now = utc_now()
        client = Client(
            id=new_id(),
            name=data.name,
            agency_name=data.agency_name,
            is_frequent=data.is_frequent,
            created_at=now,
            updated_at=now,
        )
        stored = self.repository.add_client(client)
        logger.info(f"Created client: {stored.id} ({stored.name})")
        return stored

    def get_client(self, client_id: str) -> Client:
        """
        Raises:
            NotFoundError: If the client doesn't exist
        """
        client = self.repository.get_client(client_id)
        if client is None:
            raise NotFoundError("client", client_id)
        return client

    def list_clients(self) -> list[Client]:
        return self.repository.list_clients()

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """
        Update name, agency name and/or the frequent flag.

        Returns the unchanged client when the request has nothing to change.
        Only agency_name may be cleared with null.
        """
        client = self.get_client(client_id)

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_CLIENT_FIELDS
        }
        if not changes:
            return client

        updated = self.repository.update_client(client_id, changes, utc_now())
        if updated is None:
            raise NotFoundError("client", client_id)

        logger.info(f"Updated client {client_id}: {sorted(changes)}")
        return updated

    def delete_client(self, client_id: str, requester: Requester) -> None:
        """
        Delete a client. Admin only.

        Raises:
            PermissionDeniedError: If the requester is not an admin
            NotFoundError: If the client doesn't exist
        """
        require_role(requester, MANAGEMENT_ROLES, "delete a client")
        if not self.repository.delete_client(client_id):
            raise NotFoundError("client", client_id)
        logger.info(f"Deleted client {client_id} by {requester.id}")

    def client_packages(self, client_id: str) -> list[Package]:
        self.get_client(client_id)
        return self.repository.list_packages(client_id=client_id)

    def client_revenue(self, client_id: str) -> Decimal:
        """Sum of total_value over every package and post of the client."""
        return sum(
            (p.total_value for p in self.client_packages(client_id)),
            Decimal("0"),
        )
