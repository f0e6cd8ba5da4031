# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the RitmoHub API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_financial_calculator.py: Commission, cost and profit calculation
# - test_engagement_workflow.py: Video state machine and package completion
# - test_package_service.py / test_client_service.py: Business services
# - test_report_service.py: Reports, monthly figures, CSV export, dashboard
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================
