# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - kv.py: Key-value store wrapper (Redis or in-memory)
# - hackernews.py: HackerNews API client and trend extraction
# - utils.py: Shared utilities (timestamps, base error class)
#
# Modules are imported directly (e.g. `from lib.kv import KVClient`) so that
# lightweight helpers don't pull in configuration or network clients.
# =============================================================================
