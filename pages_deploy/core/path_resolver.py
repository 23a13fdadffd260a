"""Path and URL resolution for published sites"""

from ..models.config import RepositoryConfig


class SitePathResolver:
    """Resolves repository paths and public URLs of a site location"""

    def __init__(self, repository: RepositoryConfig):
        """Initialize path resolver

        Args:
            repository: Repository configuration
        """
        self.repository = repository

    def get_site_dir(self, location: str) -> str:
        """Get the folder holding a site's artifact

        Args:
            location: Site location

        Returns:
            Repository path, e.g. ``sites/demo-site``
        """
        return f"{self.repository.sites_dir}/{location}"

    def get_index_path(self, location: str) -> str:
        """Get the path of a site's published page

        Args:
            location: Site location

        Returns:
            Repository path, e.g. ``sites/demo-site/index.html``
        """
        return f"{self.get_site_dir(location)}/{self.repository.index_file}"

    def get_site_url(self, location: str) -> str:
        """Get the public Pages URL of a site (trailing slash included)"""
        base = self.repository.pages_url or self.repository.default_pages_url
        return f"{base}/{self.get_site_dir(location)}/"

    def get_repo_url(self, location: str) -> str:
        """Get the browsable repository URL of a site's folder"""
        repo = self.repository
        return f"{repo.web_url}/{repo.full_name}/tree/{repo.branch}/{self.get_site_dir(location)}"
