"""Version information for pages-deploy package"""

__version__ = "0.4.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))
__author__ = "vistart"
__email__ = "i@vistart.me"
__license__ = "MIT"


def get_version():
    """Get the version string"""
    return __version__
