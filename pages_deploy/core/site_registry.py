"""Site registry mapping site identifiers to storage locations"""

from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from ..api.exceptions import UnconfiguredSiteError
from ..constants import SITE_LOCATION_PATTERN
from ..models.config import Config


class SiteRegistry:
    """Immutable site identifier -> site location mapping

    Locations are provisioned out of band (configuration) and are the only
    way a request reaches a folder of the content repository.
    """

    def __init__(self, sites: Mapping[str, str]):
        """Initialize registry

        Args:
            sites: Site identifier to location mapping (copied)

        Raises:
            ValueError: If a location is not a single safe path segment
        """
        for site_id, location in sites.items():
            if not SITE_LOCATION_PATTERN.match(location) or ".." in location:
                raise ValueError(f"Invalid location {location!r} for site {site_id!r}")

        self._sites = MappingProxyType(dict(sites))

    @classmethod
    def from_config(cls, config: Config) -> 'SiteRegistry':
        return cls(config.sites)

    def resolve(self, site_id: str) -> str:
        """Resolve a site identifier to its location

        Raises:
            UnconfiguredSiteError: If the identifier is not registered
        """
        try:
            return self._sites[site_id]
        except KeyError:
            raise UnconfiguredSiteError(site_id) from None

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._sites.items())

    def __contains__(self, site_id: object) -> bool:
        return site_id in self._sites

    def __len__(self) -> int:
        return len(self._sites)
