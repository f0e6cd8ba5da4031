# =============================================================================
# core/repositories/ - Persistence Interface
# =============================================================================

from .base import PromoRepository
from .memory import InMemoryRepository

__all__ = [
    "PromoRepository",
    "InMemoryRepository",
]
