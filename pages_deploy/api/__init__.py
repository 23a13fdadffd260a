# pages_deploy/api/__init__.py
"""API layer for pages-deploy"""

from .exceptions import (
    PagesDeployError,
    UnconfiguredSiteError,
    ValidationError,
    ConfigError,
    RemoteError,
    RemoteNotFoundError,
    ConflictError,
    RemoteAuthError,
    RateLimitError,
)
from .publisher import Publisher, publish
from .query import StatusQuery, get_status

__all__ = [
    # Main classes
    "Publisher",
    "StatusQuery",

    # Convenience functions
    "publish",
    "get_status",

    # Exceptions
    "PagesDeployError",
    "UnconfiguredSiteError",
    "ValidationError",
    "ConfigError",
    "RemoteError",
    "RemoteNotFoundError",
    "ConflictError",
    "RemoteAuthError",
    "RateLimitError",
]
