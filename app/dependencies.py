# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources (used by the health checks).
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from lib.kv import KVClient, KVStore


def get_kv_store() -> KVStore:
    """
    Get the key-value store.

    Returns the singleton store held by KVClient.
    """
    return KVClient.get_store()


# Type alias for dependency injection
KVDep = Annotated[KVStore, Depends(get_kv_store)]
