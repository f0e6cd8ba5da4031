# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - clients.py: Client CRUD and revenue
# - packages.py: Packages/posts, their videos and payment checklist
# - videos.py: Video workflow transitions
# - financial.py: Cost preview, reports, CSV export, dashboard
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import clients
from . import financial
from . import health
from . import packages
from . import videos

__all__ = [
    "clients",
    "financial",
    "health",
    "packages",
    "videos",
]
