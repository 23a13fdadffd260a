"""Data models for pages-deploy"""

from .config import Config, RepositoryConfig, CommitterConfig, PublishConfig
from .remote import (
    FileRevision,
    CommitReceipt,
    ChangeRecord,
    DeploymentEvent,
    DeploymentEventStatus,
)
from .result import DeploymentDescriptor, DeploymentStatusView, RecentChange

__all__ = [
    # Config models
    "Config",
    "RepositoryConfig",
    "CommitterConfig",
    "PublishConfig",

    # Remote records
    "FileRevision",
    "CommitReceipt",
    "ChangeRecord",
    "DeploymentEvent",
    "DeploymentEventStatus",

    # Result models
    "DeploymentDescriptor",
    "DeploymentStatusView",
    "RecentChange",
]
