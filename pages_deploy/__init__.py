"""Pages Deploy - publish generated site pages to GitHub Pages.

Pages are committed into a folder of a content repository with an
optimistic-concurrency write, and the state of the resulting Pages
deployment is reported back as a single status value.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.publisher import Publisher, publish
from .api.query import StatusQuery, get_status
from .core import SiteRegistry, DeploymentReconciler, DeploymentWatcher

# Data models
from .constants import DeploymentState
from .models import Config, DeploymentDescriptor, DeploymentStatusView, RecentChange

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Publisher",
    "StatusQuery",
    "SiteRegistry",
    "DeploymentReconciler",
    "DeploymentWatcher",

    # Core API functions
    "publish",
    "get_status",

    # Data models
    "Config",
    "DeploymentState",
    "DeploymentDescriptor",
    "DeploymentStatusView",
    "RecentChange",

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
