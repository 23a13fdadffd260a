# pages_deploy/storage/__init__.py
"""Content repository backends for pages-deploy"""

from .base import ContentRepository
from .github import GitHubRepository
from .memory import InMemoryRepository
from .factory import StorageFactory

__all__ = [
    'ContentRepository',
    'GitHubRepository',
    'InMemoryRepository',
    'StorageFactory',
]
