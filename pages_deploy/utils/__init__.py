# pages_deploy/utils/__init__.py
"""Utility functions for pages-deploy"""

from .async_utils import (
    run_async,
    poll_until,
)

from .formatting import (
    parse_timestamp,
    short_revision,
    truncate,
    format_duration,
    format_timestamp,
)

__all__ = [
    'run_async',
    'poll_until',
    'parse_timestamp',
    'short_revision',
    'truncate',
    'format_duration',
    'format_timestamp',
]
