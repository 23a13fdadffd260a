"""Global constants for pages-deploy"""

from enum import Enum
import re

APP_NAME = "pages-deploy"
LOG_FORMAT = "%(message)s"

# Version related
CONFIG_VERSION = "1.0"

# Project identification
PROJECT_CONFIG_FILE = ".pages-deploy.yaml"

# Repository layout
DEFAULT_SITES_DIR = "sites"
DEFAULT_INDEX_FILE = "index.html"
DEFAULT_BRANCH = "main"

# GitHub defaults
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WEB_URL = "https://github.com"
DEFAULT_PAGES_ENVIRONMENT = "github-pages"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_MEDIA_TYPE = "application/vnd.github+json"

# Bot identity used as commit author and committer
DEFAULT_COMMITTER_NAME = "SiteHub Editor"
DEFAULT_COMMITTER_EMAIL = "editor@sitehub.co.za"
DEFAULT_EDITOR_NAME = "SiteHub Editor"

# Commit message used when the caller does not supply one
DEFAULT_COMMIT_MESSAGE = "Update {name} via {editor} - {timestamp}"
COMMIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

# Status query limits
RECENT_CHANGES_LIMIT = 5
DEPLOYMENT_EVENTS_LIMIT = 1
DEPLOYMENT_STATUSES_LIMIT = 1
SHORT_REVISION_LENGTH = 7

# Watcher defaults (seconds)
DEFAULT_WATCH_TIMEOUT = 300.0
DEFAULT_WATCH_INTERVAL = 5.0
DEFAULT_WATCH_BACKOFF = 1.5
DEFAULT_WATCH_MAX_INTERVAL = 30.0

# Storage related
DEFAULT_STORAGE_TYPE = "github"


class StorageType(Enum):
    GITHUB = "github"
    MEMORY = "memory"


class ProbeErrorPolicy(Enum):
    """How a failed revision probe (other than "not found") is handled"""
    STRICT = "strict"
    LENIENT = "lenient"


class DeploymentState(Enum):
    """State of the latest deployment event of a hosting environment"""
    UNKNOWN = "unknown"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


# Remote states folded onto a known state
DEPLOYMENT_STATE_ALIASES = {
    "queued": DeploymentState.PENDING,
}

SETTLED_STATES = frozenset({
    DeploymentState.SUCCESS,
    DeploymentState.FAILURE,
    DeploymentState.ERROR,
})

# Presentation labels
STATE_BADGES = {
    DeploymentState.SUCCESS: ("Live", "green"),
    DeploymentState.PENDING: ("Deploying", "yellow"),
    DeploymentState.IN_PROGRESS: ("Deploying", "yellow"),
    DeploymentState.FAILURE: ("Failed", "red"),
    DeploymentState.ERROR: ("Failed", "red"),
    DeploymentState.UNKNOWN: ("Unknown", "bright_black"),
}


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "PD001"
    REMOTE_REQUEST_FAILED = "PD004"
    PERMISSION_DENIED = "PD005"
    VALIDATION_FAILED = "PD007"
    SITE_NOT_CONFIGURED = "PD010"
    REMOTE_NOT_FOUND = "PD011"
    REVISION_CONFLICT = "PD012"
    RATE_LIMITED = "PD013"


# Environment variables
ENV_CONFIG_PATH = "PAGES_DEPLOY_CONFIG"
ENV_LOG_LEVEL = "PAGES_DEPLOY_LOG_LEVEL"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"

# Validation patterns
SITE_LOCATION_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
REPOSITORY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ROCKET = "🚀"
EMOJI_LINK = "🔗"

# Messages templates
MSG_PUBLISH_SUCCESS = "Site deployed to GitHub successfully"
MSG_PAGES_NOTICE = "GitHub Pages will update in a few minutes."
