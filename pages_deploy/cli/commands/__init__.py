"""CLI commands"""

from . import init
from . import publish
from . import status
from . import sites

__all__ = [
    "init",
    "publish",
    "status",
    "sites",
]
