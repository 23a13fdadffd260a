# pages_deploy/services/__init__.py
"""Services for pages-deploy"""

from .config_service import ConfigService, find_config_file

__all__ = [
    "ConfigService",
    "find_config_file",
]
