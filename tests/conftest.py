"""Shared fixtures for pages-deploy tests."""

from unittest.mock import AsyncMock

import pytest

from pages_deploy.core import DeploymentReconciler, SiteRegistry
from pages_deploy.models import Config
from pages_deploy.storage import ContentRepository, InMemoryRepository, StorageFactory

SITE_ID = "8471936c-3bb6-48d4-81e1-3791fc089938"
OTHER_SITE_ID = "8d38af38-c39a-4c5d-9a0a-72ef18f75129"


def make_config(**repository) -> Config:
    data = {
        "type": "memory",
        "owner": "acme",
        "name": "customer-sites",
        "pages_url": "https://acme.github.io/customer-sites",
    }
    data.update(repository)
    return Config.from_dict({
        "repository": data,
        "sites": {
            SITE_ID: "demo-site",
            OTHER_SITE_ID: "other-site",
        },
    })


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture
def repository(config) -> InMemoryRepository:
    return StorageFactory.create_from_config(config.repository)


@pytest.fixture
def reconciler(config, repository) -> DeploymentReconciler:
    return DeploymentReconciler(SiteRegistry.from_config(config), repository, config)


@pytest.fixture
def mock_repository() -> AsyncMock:
    return AsyncMock(spec=ContentRepository)


@pytest.fixture
def mock_reconciler(config, mock_repository) -> DeploymentReconciler:
    return DeploymentReconciler(SiteRegistry.from_config(config), mock_repository, config)
