"""Core reconciliation components"""

from .site_registry import SiteRegistry
from .path_resolver import SitePathResolver
from .reconciler import DeploymentReconciler
from .watcher import DeploymentWatcher

__all__ = [
    "SiteRegistry",
    "SitePathResolver",
    "DeploymentReconciler",
    "DeploymentWatcher",
]
