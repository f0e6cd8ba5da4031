# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase repository and notifier
# - utils.py: Shared utilities (IDs, timestamps, money formatting)
#
# supabase_client is imported explicitly where needed so that the in-memory
# backend never loads the Supabase SDK at import time.
# =============================================================================

from lib.utils import format_amount, new_id, utc_now

__all__ = [
    "format_amount",
    "new_id",
    "utc_now",
]
