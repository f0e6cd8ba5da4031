# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business rules of the agency dashboard:
# - models/: Pydantic schemas for clients, packages, videos and reports
# - repositories/: Persistence interface and the in-memory implementation
# - services/: Financial calculator, video workflow, packages, clients, reports
#
# Code in this package does not depend on FastAPI routing or on a specific
# database. Services receive a repository and a notifier, which keeps them
# testable against the in-memory store.
# =============================================================================
