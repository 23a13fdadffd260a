"""Content repository backend factory"""

from typing import Dict, Type

from .base import ContentRepository
from .github import GitHubRepository
from .memory import InMemoryRepository
from ..constants import StorageType
from ..models.config import RepositoryConfig


class StorageFactory:
    """Factory for creating content repository instances"""

    # Registry of backends
    _backends: Dict[StorageType, Type[ContentRepository]] = {
        StorageType.GITHUB: GitHubRepository,
        StorageType.MEMORY: InMemoryRepository,
    }

    @classmethod
    def create_from_config(cls, repository: RepositoryConfig, **kwargs) -> ContentRepository:
        """Create backend from repository configuration

        Args:
            repository: Repository configuration
            **kwargs: Extra constructor arguments (e.g. an httpx transport)

        Returns:
            Content repository instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = repository.storage_type

        if storage_type not in cls._backends:
            raise ValueError(f"Unsupported storage type: {storage_type.value}")

        config = {
            "owner": repository.owner,
            "name": repository.name,
            "branch": repository.branch,
            "web_url": repository.web_url,
        }

        if storage_type == StorageType.GITHUB:
            config.update({
                "api_url": repository.api_url,
                "token": repository.token,
                "timeout": repository.timeout,
            })

        backend_class = cls._backends[storage_type]
        return backend_class(config, **kwargs)

    @classmethod
    def register_backend(cls, storage_type: StorageType, backend_class: Type[ContentRepository]):
        """Register a new backend type

        Args:
            storage_type: Storage type enum
            backend_class: Backend class
        """
        cls._backends[storage_type] = backend_class

    @classmethod
    def get_supported_types(cls) -> list:
        """Get list of supported storage type names"""
        return [st.value for st in cls._backends.keys()]
