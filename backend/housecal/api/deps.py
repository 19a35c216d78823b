"""Shared API dependencies — single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from housecal.api.deps import get_db, get_current_profile
"""

from housecal.auth.dependencies import (
    Identity,
    get_current_identity,
    get_current_profile,
    require_admin,
)
from housecal.database import get_db

__all__ = [
    "Identity",
    "get_db",
    "get_current_identity",
    "get_current_profile",
    "require_admin",
]
