# =============================================================================
# tests/test_client_service.py - Client Service Tests
# =============================================================================
# Run with: pytest tests/test_client_service.py -v
# =============================================================================

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import NotFoundError, PermissionDeniedError
from core.models.client import Client, ClientCreate, ClientUpdate
from core.models.package import PackageCreate, PackageType


class TestClientCrud:
    """Tests for create/get/list/update/delete."""

    def test_create_and_get(self, client_service):
        created = client_service.create_client(
            ClientCreate(name="  MC Ritmo ", agency_name="Ritmo Records", is_frequent=True)
        )

        fetched = client_service.get_client(created.id)

        assert fetched.name == "MC Ritmo"
        assert fetched.agency_name == "Ritmo Records"
        assert fetched.is_frequent is True

    def test_list_is_alphabetical(self, client_service):
        for name in ["Zeca", "ana", "Bruno"]:
            client_service.create_client(ClientCreate(name=name))

        assert [c.name for c in client_service.list_clients()] == ["ana", "Bruno", "Zeca"]

    def test_get_unknown_client(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.get_client("missing")

    def test_partial_update(self, client_service):
        client = client_service.create_client(ClientCreate(name="MC Ritmo", agency_name="A"))

        updated = client_service.update_client(client.id, ClientUpdate(is_frequent=True))

        assert updated.is_frequent is True
        assert updated.name == "MC Ritmo"
        assert updated.agency_name == "A"
        assert updated.updated_at >= client.updated_at

    def test_null_values_are_ignored_except_agency_name(self, client_service):
        client = client_service.create_client(
            ClientCreate(name="MC Ritmo", agency_name="A", is_frequent=True)
        )

        updated = client_service.update_client(
            client.id,
            ClientUpdate.model_validate(
                {"name": None, "is_frequent": None, "agency_name": None}
            ),
        )

        assert updated.name == "MC Ritmo"
        assert updated.is_frequent is True
        assert updated.agency_name is None
        stored = client_service.get_client(client.id)
        assert Client.model_validate(stored.model_dump()) == stored

    def test_blank_name_rejected(self):
        with pytest.raises(PydanticValidationError):
            ClientCreate(name="   ")
        with pytest.raises(PydanticValidationError):
            ClientUpdate(name=" \t ")

    def test_empty_update_returns_client(self, client_service):
        client = client_service.create_client(ClientCreate(name="MC Ritmo"))

        assert client_service.update_client(client.id, ClientUpdate()) == client

    def test_update_unknown_client(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.update_client("missing", ClientUpdate(name="X"))

    def test_rename_keeps_package_snapshot(self, client_service, package_service, admin):
        client = client_service.create_client(ClientCreate(name="Old Name"))
        package = package_service.create_package(
            PackageCreate(client_id=client.id, total_value="100"), admin
        )

        client_service.update_client(client.id, ClientUpdate(name="New Name"))

        assert package_service.get_package(package.id).client_name == "Old Name"

    def test_delete_by_admin(self, client_service, admin):
        client = client_service.create_client(ClientCreate(name="MC Ritmo"))

        client_service.delete_client(client.id, admin)

        with pytest.raises(NotFoundError):
            client_service.get_client(client.id)

    def test_delete_unknown_client(self, client_service, admin):
        with pytest.raises(NotFoundError):
            client_service.delete_client("missing", admin)

    def test_delete_requires_admin(self, client_service, financial_user):
        client = client_service.create_client(ClientCreate(name="MC Ritmo"))

        with pytest.raises(PermissionDeniedError):
            client_service.delete_client(client.id, financial_user)


class TestClientPackages:
    """Tests for a client's packages and revenue."""

    def test_revenue_sums_packages_and_posts(self, client_service, package_service, admin):
        client = client_service.create_client(ClientCreate(name="MC Ritmo"))
        other = client_service.create_client(ClientCreate(name="Other"))
        for client_id, type, value in [
            (client.id, PackageType.PACKAGE, "1000"),
            (client.id, PackageType.POST, "150.50"),
            (other.id, PackageType.POST, "999"),
        ]:
            package_service.create_package(
                PackageCreate(client_id=client_id, type=type, total_value=value), admin
            )

        assert len(client_service.client_packages(client.id)) == 2
        assert client_service.client_revenue(client.id) == Decimal("1150.50")

    def test_revenue_without_packages(self, client_service):
        client = client_service.create_client(ClientCreate(name="MC Ritmo"))

        assert client_service.client_revenue(client.id) == Decimal("0")

    def test_packages_of_unknown_client(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.client_packages("missing")
