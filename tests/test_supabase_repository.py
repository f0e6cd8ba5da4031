# =============================================================================
# tests/test_supabase_repository.py - Supabase Repository Tests
# =============================================================================
# Tests the Supabase repository against a fake query builder:
# - Rows are parsed into models, "no rows" becomes None
# - Status and payment updates are compare-and-set writes
# - A failed video insert removes the just-inserted package
# - Notifications are inserted into the notifications table
#
# Run with: pytest tests/test_supabase_repository.py -v
# =============================================================================

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from core.models.notification import NotificationSeverity
from core.models.package import Package, PackageStatus, PackageType, PaymentField
from core.models.video import Video
from lib.supabase_client import (
    SupabaseClientError,
    SupabaseNotifier,
    SupabaseRepository,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeQuery:
    """Chainable stand-in for a supabase-py table query."""

    def __init__(self, data=None, error=None, responses=None):
        self.data = data if data is not None else []
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def update(self, *args, **kwargs):
        return self._record("update", *args, **kwargs)

    def delete(self, *args, **kwargs):
        return self._record("delete", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def single(self, *args, **kwargs):
        return self._record("single", *args, **kwargs)

    def execute(self):
        self.calls.append(("execute", (), {}))
        if self.error:
            raise self.error
        if self.responses:
            return SimpleNamespace(data=self.responses.pop(0))
        return SimpleNamespace(data=self.data)

    def called(self, name):
        return [args for call, args, _ in self.calls if call == name]


class FailingDeleteQuery(FakeQuery):
    """FakeQuery whose delete() fails when executed."""

    def execute(self):
        if self.called("delete"):
            self.calls.append(("execute", (), {}))
            raise Exception("delete failed")
        return super().execute()


class FakeSupabase:
    def __init__(self, **tables):
        self.tables = tables

    def table(self, name):
        return self.tables.setdefault(name, FakeQuery())


def _package_row(**overrides):
    row = {
        "id": "p1",
        "client_id": None,
        "client_name": "MC Ritmo",
        "type": "package",
        "total_value": "1000",
        "juninho_commission": "20",
        "natalia_commission": "50",
        "engagement_cost": "10",
        "pro_labore": "700",
        "net_profit": "220",
        "status": "active",
        "payment_status": {},
        "video_count": 5,
        "created_at": NOW.isoformat(),
        "updated_at": NOW.isoformat(),
    }
    row.update(overrides)
    return row


class TestSupabaseRepository:
    """Tests for SupabaseRepository."""

    def test_get_package_parses_row(self):
        client = FakeSupabase(packages=FakeQuery(data=_package_row()))
        repository = SupabaseRepository(client)

        package = repository.get_package("p1")

        assert package.type == PackageType.PACKAGE
        assert package.payment_status.total_value_paid is False
        assert client.tables["packages"].called("eq") == [("id", "p1")]

    def test_no_rows_returns_none(self):
        error = Exception("{'code': 'PGRST116', 'message': 'no rows'}")
        repository = SupabaseRepository(FakeSupabase(videos=FakeQuery(error=error)))

        assert repository.get_video("missing") is None

    def test_other_errors_are_wrapped(self):
        repository = SupabaseRepository(
            FakeSupabase(clients=FakeQuery(error=Exception("connection refused")))
        )

        with pytest.raises(SupabaseClientError) as exc_info:
            repository.get_client("c1")

        assert exc_info.value.code == "FETCH_FAILED"

    def test_status_update_is_compare_and_set(self):
        packages = FakeQuery(data=[_package_row(status="completed")])
        repository = SupabaseRepository(FakeSupabase(packages=packages))

        updated = repository.update_package_status(
            "p1", PackageStatus.COMPLETED, NOW, expected=PackageStatus.ACTIVE
        )

        assert updated.status == PackageStatus.COMPLETED
        assert packages.called("eq") == [("id", "p1"), ("status", "active")]

    def test_compare_and_set_mismatch_returns_none(self):
        repository = SupabaseRepository(FakeSupabase(packages=FakeQuery(data=[])))

        result = repository.update_package_status(
            "p1", PackageStatus.COMPLETED, NOW, expected=PackageStatus.ACTIVE
        )

        assert result is None

    def test_payment_flag_writes_whole_checklist(self):
        payload = {
            "total_value_paid": False,
            "juninho_commission_paid": True,
            "natalia_commission_paid": False,
            "engagement_cost_paid": False,
            "pro_labore_paid": False,
        }
        # Read of the current row, then the update result
        packages = FakeQuery(
            responses=[_package_row(), [_package_row(payment_status=payload)]]
        )
        repository = SupabaseRepository(FakeSupabase(packages=packages))

        updated = repository.update_payment_flag(
            "p1", PaymentField.JUNINHO_COMMISSION_PAID, True, NOW
        )

        assert packages.called("update")[0][0]["payment_status"] == payload
        assert ("updated_at", NOW.isoformat()) in packages.called("eq")
        assert updated.payment_status.juninho_commission_paid is True

    def test_payment_flag_rereads_after_concurrent_change(self):
        later = NOW + timedelta(seconds=1)
        ticked = {"total_value_paid": True}
        packages = FakeQuery(
            responses=[
                _package_row(),
                [],  # another request updated the row first
                _package_row(payment_status=ticked, updated_at=later.isoformat()),
                [_package_row(payment_status={**ticked, "pro_labore_paid": True})],
            ]
        )
        repository = SupabaseRepository(FakeSupabase(packages=packages))

        updated = repository.update_payment_flag(
            "p1", PaymentField.PRO_LABORE_PAID, True, later
        )

        retried = packages.called("update")[1][0]["payment_status"]
        assert retried["total_value_paid"] is True
        assert retried["pro_labore_paid"] is True
        assert ("updated_at", later.isoformat()) in packages.called("eq")
        assert updated.payment_status.total_value_paid is True

    def test_payment_flag_gives_up_after_repeated_conflicts(self):
        packages = FakeQuery(responses=[_package_row(), [], _package_row(), []])
        repository = SupabaseRepository(FakeSupabase(packages=packages))

        with pytest.raises(SupabaseClientError) as exc_info:
            repository.update_payment_flag("p1", PaymentField.TOTAL_VALUE_PAID, True, NOW)

        assert exc_info.value.code == "PAYMENT_UPDATE_CONFLICT"
        assert len(packages.called("update")) == 2

    def test_failed_video_insert_removes_package(self):
        packages = FakeQuery(data=[_package_row()])
        videos = FakeQuery(error=Exception("insert failed"))
        repository = SupabaseRepository(FakeSupabase(packages=packages, videos=videos))
        package = Package.model_validate(_package_row())
        video = Video(id="v1", package_id="p1", video_number=1, created_at=NOW, updated_at=NOW)

        with pytest.raises(SupabaseClientError):
            repository.add_package(package, [video])

        assert packages.called("delete")
        assert ("id", "p1") in packages.called("eq")

    def test_failed_cleanup_keeps_insert_error(self):
        packages = FailingDeleteQuery(data=[_package_row()])
        videos = FakeQuery(error=Exception("insert failed"))
        repository = SupabaseRepository(FakeSupabase(packages=packages, videos=videos))
        package = Package.model_validate(_package_row())
        video = Video(id="v1", package_id="p1", video_number=1, created_at=NOW, updated_at=NOW)

        with pytest.raises(SupabaseClientError) as exc_info:
            repository.add_package(package, [video])

        assert exc_info.value.code == "INSERT_FAILED"
        assert packages.called("delete")


class TestSupabaseNotifier:
    """Tests for SupabaseNotifier."""

    def test_inserts_notification(self):
        notifications = FakeQuery(data=[{}])
        notifier = SupabaseNotifier(FakeSupabase(notifications=notifications))

        notifier.notify("admin", "Pacote Musical Concluído", "done", NotificationSeverity.SUCCESS)

        row = notifications.called("insert")[0][0]
        assert row["recipient"] == "admin"
        assert row["severity"] == "success"

    def test_failure_is_wrapped(self):
        notifier = SupabaseNotifier(
            FakeSupabase(notifications=FakeQuery(error=Exception("down")))
        )

        with pytest.raises(SupabaseClientError):
            notifier.notify("admin", "t", "m")
