# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .client_service import ClientService
from .engagement_workflow import EngagementWorkflow, authorize_transition, next_status
from .financial_calculator import calculate_financials, calculate_with_cost_model
from .notification_service import LoggingNotifier, Notifier, RecordingNotifier
from .package_service import PackageService
from .report_service import ReportService

__all__ = [
    "ClientService",
    "EngagementWorkflow",
    "authorize_transition",
    "next_status",
    "calculate_financials",
    "calculate_with_cost_model",
    "LoggingNotifier",
    "Notifier",
    "RecordingNotifier",
    "PackageService",
    "ReportService",
]
