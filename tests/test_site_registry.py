"""Tests for SiteRegistry."""

import pytest

from pages_deploy.api.exceptions import UnconfiguredSiteError
from pages_deploy.constants import ErrorCode
from pages_deploy.core import SiteRegistry

from .conftest import SITE_ID


def test_resolve_known_site(config):
    registry = SiteRegistry.from_config(config)

    assert registry.resolve(SITE_ID) == "demo-site"
    assert SITE_ID in registry
    assert len(registry) == 2


def test_resolve_unknown_site_raises():
    registry = SiteRegistry({"A": "demo-site"})

    with pytest.raises(UnconfiguredSiteError) as excinfo:
        registry.resolve("Z")

    assert excinfo.value.site_id == "Z"
    assert excinfo.value.error_code == ErrorCode.SITE_NOT_CONFIGURED
    assert str(excinfo.value) == "Site not configured for GitHub deployment"


def test_registry_is_a_copy():
    sites = {"A": "demo-site"}
    registry = SiteRegistry(sites)

    sites["B"] = "late-site"

    assert "B" not in registry
    assert dict(registry.items()) == {"A": "demo-site"}


@pytest.mark.parametrize("location", ["", "../escape", "nested/site", ".hidden", "a..b"])
def test_rejects_unsafe_locations(location):
    with pytest.raises(ValueError):
        SiteRegistry({"A": location})
